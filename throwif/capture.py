"""Name-and-value capture for guard references.

A reference is either a zero-argument function whose body only loads a
variable (optionally followed by attribute accesses)::

    resolve(lambda: count)         # Metadata(name="count", value=...)
    resolve(lambda: self.total)    # Metadata(name="total", value=...)

or an explicit pair built with :func:`named`::

    resolve(named(count=count))

Functions are inspected through their compiled instructions before they are
called, so a reference with the wrong shape fails without being evaluated.
"""

from __future__ import annotations

import dis
import inspect
from collections.abc import Callable
from dataclasses import dataclass
from types import CodeType, FunctionType
from typing import Final, Generic, TypeVar

from throwif.errors import CaptureShapeError
from throwif.logging import get_logger

T = TypeVar("T")

_logger = get_logger(__name__)

# Bookkeeping emitted ahead of (or between) the real body instructions.
_PRELUDE_OPS: Final[frozenset[str]] = frozenset(
    {"RESUME", "COPY_FREE_VARS", "MAKE_CELL", "NOP", "EXTENDED_ARG", "CACHE"}
)
_NAME_LOADS: Final[frozenset[str]] = frozenset(
    {
        "LOAD_DEREF",
        "LOAD_CLASSDEREF",
        "LOAD_FAST",
        "LOAD_FAST_CHECK",
        "LOAD_FAST_BORROW",
        "LOAD_GLOBAL",
        "LOAD_NAME",
        "LOAD_FROM_DICT_OR_DEREF",
        "LOAD_FROM_DICT_OR_GLOBALS",
    }
)
_MEMBER_LOADS: Final[frozenset[str]] = frozenset({"LOAD_ATTR"})
_RETURN: Final[str] = "RETURN_VALUE"


@dataclass(frozen=True)
class Metadata(Generic[T]):
    """Resolved ``(name, value)`` pair of a captured reference."""

    name: str
    value: T


@dataclass(frozen=True)
class Named(Generic[T]):
    """A reference whose name is supplied by the caller instead of inspected."""

    name: str
    value: T


Reference = Callable[[], T] | Named[T]


def named(**binding: T) -> Named[T]:
    """Capture one keyword argument as a named reference: ``named(count=count)``."""
    if len(binding) != 1:
        raise CaptureShapeError(
            f"named() takes exactly one keyword argument, got {len(binding)}"
        )
    ((name, value),) = binding.items()
    if not name.isidentifier():
        raise CaptureShapeError(f"Invalid reference name: {name!r}")
    return Named(name=name, value=value)


def _fail(function: FunctionType, reason: str) -> CaptureShapeError:
    return CaptureShapeError(
        f"Reference {function.__qualname__} must return a single variable or "
        f"attribute access: {reason}"
    )


def _check_signature(function: FunctionType, code: CodeType) -> None:
    if code.co_argcount or code.co_kwonlyargcount or code.co_posonlyargcount:
        raise _fail(function, "it takes parameters")
    if code.co_flags & (inspect.CO_VARARGS | inspect.CO_VARKEYWORDS):
        raise _fail(function, "it takes parameters")
    if code.co_flags & (
        inspect.CO_GENERATOR | inspect.CO_COROUTINE | inspect.CO_ASYNC_GENERATOR
    ):
        raise _fail(function, "it is a generator or coroutine")


def member_path(function: FunctionType) -> tuple[str, ...]:
    """Return the names loaded by ``function``, root first.

    ``lambda: self.order.total`` gives ``("self", "order", "total")``. Any
    other instruction in the body (call, subscript, operator, constant)
    raises :class:`CaptureShapeError`.
    """
    code = function.__code__
    _check_signature(function, code)
    body = [
        ins for ins in dis.get_instructions(code) if ins.opname not in _PRELUDE_OPS
    ]
    if len(body) < 2 or body[-1].opname != _RETURN:
        raise _fail(function, "unsupported body")
    root, members = body[0], body[1:-1]
    if root.opname not in _NAME_LOADS:
        raise _fail(function, f"unexpected {root.opname}")
    path = [str(root.argval)]
    for ins in members:
        if ins.opname not in _MEMBER_LOADS:
            raise _fail(function, f"unexpected {ins.opname}")
        path.append(str(ins.argval))
    return tuple(path)


def _resolve_named(reference: Named[T]) -> Metadata[T]:
    if not reference.name.isidentifier():
        raise CaptureShapeError(f"Invalid reference name: {reference.name!r}")
    return Metadata(name=reference.name, value=reference.value)


def resolve(reference: Reference[T]) -> Metadata[T]:
    """Resolve ``reference`` into its name and current value.

    The shape is checked first; the function is then called exactly once.
    Nothing is cached between calls.
    """
    if isinstance(reference, Named):
        return _resolve_named(reference)
    if not isinstance(reference, FunctionType):
        raise CaptureShapeError(
            f"Expected a zero-argument function or named(), got {type(reference).__name__}"
        )
    name = member_path(reference)[-1]
    value = reference()
    _logger.debug("resolved reference %s", name, extra={"param_name": name})
    return Metadata(name=name, value=value)
