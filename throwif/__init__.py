"""Guard clauses that name the offending argument for you.

``argument.is_negative(lambda: count)`` raises ``ArgumentOutOfRangeError``
with the message ``"count is lower than zero."``; the name is read from the
reference instead of being repeated as a string.
"""

from __future__ import annotations

from throwif.capture import Metadata, Named, Reference, named, resolve
from throwif.errors import (
    ArgumentError,
    ArgumentInvalidError,
    ArgumentNullError,
    ArgumentOutOfRangeError,
    CaptureShapeError,
    ErrorKind,
    GuardError,
    UnsupportedErrorKindError,
    build_error,
)
from throwif.guards import Clock, Guard

argument = Guard()


def raising(kind: ErrorKind, clock: Clock | None = None) -> Guard:
    """Return a guard whose predicates all raise errors of ``kind``."""
    return Guard(kind=kind, clock=clock)


__all__ = [
    "ArgumentError",
    "ArgumentInvalidError",
    "ArgumentNullError",
    "ArgumentOutOfRangeError",
    "CaptureShapeError",
    "ErrorKind",
    "Guard",
    "GuardError",
    "Metadata",
    "Named",
    "Reference",
    "UnsupportedErrorKindError",
    "argument",
    "build_error",
    "named",
    "raising",
    "resolve",
]
