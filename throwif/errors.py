from __future__ import annotations

from collections.abc import Callable
from enum import Enum
from typing import Final, Literal


ErrorCode = Literal[
    "GUARD_FAILED",
    "ARGUMENT_NULL",
    "ARGUMENT_OUT_OF_RANGE",
    "ARGUMENT_INVALID",
    "CAPTURE_SHAPE",
    "UNSUPPORTED_ERROR_KIND",
]


class ErrorKind(Enum):
    GENERIC = "generic"
    ARGUMENT_NULL = "argument_null"
    ARGUMENT_OUT_OF_RANGE = "argument_out_of_range"
    ARGUMENT_INVALID = "argument_invalid"


class GuardError(Exception):
    """Base class for everything raised by a guard.

    Carries the human-readable message plus a stable machine-readable code so
    callers catch by type and report by code, never by parsing the text.
    """

    code: ErrorCode = "GUARD_FAILED"
    kind: ErrorKind | None = ErrorKind.GENERIC

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class ArgumentError(GuardError, ValueError):
    code = "ARGUMENT_INVALID"
    kind = ErrorKind.ARGUMENT_INVALID

    def __init__(self, message: str, *, param_name: str | None = None) -> None:
        super().__init__(message)
        self.param_name = param_name


class ArgumentNullError(ArgumentError):
    code = "ARGUMENT_NULL"
    kind = ErrorKind.ARGUMENT_NULL


class ArgumentInvalidError(ArgumentError):
    code = "ARGUMENT_INVALID"
    kind = ErrorKind.ARGUMENT_INVALID


class ArgumentOutOfRangeError(ArgumentError):
    code = "ARGUMENT_OUT_OF_RANGE"
    kind = ErrorKind.ARGUMENT_OUT_OF_RANGE

    def __init__(
        self,
        message: str,
        *,
        param_name: str | None = None,
        actual_value: object = None,
    ) -> None:
        super().__init__(message, param_name=param_name)
        self.actual_value = actual_value


class CaptureShapeError(GuardError, TypeError):
    """The captured reference does not name a single variable or attribute."""

    code = "CAPTURE_SHAPE"
    kind = None


class UnsupportedErrorKindError(GuardError):
    code = "UNSUPPORTED_ERROR_KIND"
    kind = None

    def __init__(self, selector: object) -> None:
        super().__init__(f"Unsupported error kind: {selector!r}")
        self.selector = selector


Builder = Callable[[str, str | None, object], GuardError]


def _generic(message: str, _param_name: str | None, _actual_value: object) -> GuardError:
    return GuardError(message)


def _argument_null(
    message: str, param_name: str | None, _actual_value: object
) -> GuardError:
    return ArgumentNullError(message, param_name=param_name)


def _argument_out_of_range(
    message: str, param_name: str | None, actual_value: object
) -> GuardError:
    return ArgumentOutOfRangeError(
        message, param_name=param_name, actual_value=actual_value
    )


def _argument_invalid(
    message: str, param_name: str | None, _actual_value: object
) -> GuardError:
    return ArgumentInvalidError(message, param_name=param_name)


_BUILDERS: Final[dict[ErrorKind, Builder]] = {
    ErrorKind.GENERIC: _generic,
    ErrorKind.ARGUMENT_NULL: _argument_null,
    ErrorKind.ARGUMENT_OUT_OF_RANGE: _argument_out_of_range,
    ErrorKind.ARGUMENT_INVALID: _argument_invalid,
}


def build_error(
    kind: ErrorKind,
    message: str,
    *,
    param_name: str | None = None,
    actual_value: object = None,
) -> GuardError:
    """Return the exception for ``kind`` shaped with only the fields it carries.

    Never raises: an unknown selector comes back as an
    ``UnsupportedErrorKindError`` for the caller to raise instead.
    """
    builder = _BUILDERS.get(kind) if isinstance(kind, ErrorKind) else None
    if builder is None:
        return UnsupportedErrorKindError(kind)
    return builder(message, param_name, actual_value)
