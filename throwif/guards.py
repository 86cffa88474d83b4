"""Predicate catalog.

Every predicate resolves its reference, checks one condition and raises the
error built for its kind when the condition holds::

    from throwif import argument

    def ship(order, quantity):
        argument.is_null(lambda: order)
        argument.is_negative_or_zero(lambda: quantity)
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import date, datetime, timedelta, timezone, tzinfo
from decimal import Decimal
from fractions import Fraction
from typing import Final, NoReturn, TypeVar

from throwif.capture import Reference, resolve
from throwif.config import Settings
from throwif.errors import ErrorKind, build_error

T = TypeVar("T")

Number = int | float | Decimal | Fraction
Signed = Number | timedelta
Clock = Callable[[tzinfo | None], datetime]

_ZERO_VALUES: Final[dict[type, object]] = {
    bool: False,
    int: 0,
    float: 0.0,
    complex: 0j,
    Decimal: Decimal(0),
    Fraction: Fraction(0),
    str: "",
    bytes: b"",
    timedelta: timedelta(0),
}


def system_clock(tz: tzinfo | None) -> datetime:
    """Current time in ``tz``; naive values follow ``THROWIF_NAIVE_CLOCK``."""
    if tz is not None:
        return datetime.now(tz)
    if Settings.from_env().naive_clock == "utc":
        return datetime.now(timezone.utc).replace(tzinfo=None)
    return datetime.now()


def _check_limit(name: str, value: Signed, limit: Signed) -> None:
    # Durations compare only with durations; the integer default is not one.
    if isinstance(value, timedelta) != isinstance(limit, timedelta):
        raise TypeError(
            f"{name} is a {type(value).__name__} and cannot be compared "
            f"with limit {limit!r} of type {type(limit).__name__}"
        )


def _zero_of(value: Signed) -> Signed:
    if isinstance(value, timedelta):
        return timedelta(0)
    return 0


def _is_default(value: object) -> bool:
    if value is None:
        return True
    for cls in type(value).__mro__:
        if cls in _ZERO_VALUES:
            return bool(value == _ZERO_VALUES[cls])
    return False


class Guard:
    """Guard clauses over captured references.

    ``kind`` replaces the error kind of every predicate (for example
    ``ErrorKind.GENERIC`` to raise a plain :class:`GuardError`); ``clock``
    supplies "now" for the temporal predicates.
    """

    def __init__(self, kind: ErrorKind | None = None, clock: Clock | None = None) -> None:
        self._kind = kind
        self._clock: Clock = clock if clock is not None else system_clock

    @property
    def kind(self) -> ErrorKind | None:
        return self._kind

    def _fail(
        self,
        kind: ErrorKind,
        name: str,
        message: str,
        actual_value: object = None,
    ) -> NoReturn:
        raise build_error(
            self._kind if self._kind is not None else kind,
            message,
            param_name=name,
            actual_value=actual_value,
        )

    # reference values

    def is_null(self, reference: Reference[object], message: str | None = None) -> None:
        meta = resolve(reference)
        if meta.value is None:
            self._fail(
                ErrorKind.ARGUMENT_NULL,
                meta.name,
                message if message is not None else f"{meta.name} is None.",
            )

    def is_default(self, reference: Reference[object], message: str | None = None) -> None:
        """Raise when the value is None or the zero value of its type (0, "", False, ...)."""
        meta = resolve(reference)
        if _is_default(meta.value):
            self._fail(
                ErrorKind.ARGUMENT_INVALID,
                meta.name,
                message if message is not None else f"{meta.name} is equal to its default value.",
            )

    # strings

    def is_null_or_white_space(
        self, reference: Reference[str | None], message: str | None = None
    ) -> None:
        meta = resolve(reference)
        if meta.value is None or not meta.value.strip():
            self._fail(
                ErrorKind.ARGUMENT_NULL,
                meta.name,
                message
                if message is not None
                else f"{meta.name} is None, empty, or consists only of white-space characters.",
            )

    def is_null_or_empty(
        self, reference: Reference[str | None], message: str | None = None
    ) -> None:
        meta = resolve(reference)
        if meta.value is None or len(meta.value) == 0:
            self._fail(
                ErrorKind.ARGUMENT_NULL,
                meta.name,
                message if message is not None else f"{meta.name} is None or empty.",
            )

    # booleans

    def is_true(self, reference: Reference[bool], message: str | None = None) -> None:
        meta = resolve(reference)
        if meta.value is True:
            self._fail(
                ErrorKind.ARGUMENT_INVALID,
                meta.name,
                message if message is not None else f"{meta.name} is true.",
            )

    def is_false(self, reference: Reference[bool], message: str | None = None) -> None:
        meta = resolve(reference)
        if meta.value is False:
            self._fail(
                ErrorKind.ARGUMENT_INVALID,
                meta.name,
                message if message is not None else f"{meta.name} is false.",
            )

    # numbers and durations

    def _out_of_range(
        self, violated: bool, name: str, value: object, message: str | None, default: str
    ) -> None:
        if violated:
            self._fail(
                ErrorKind.ARGUMENT_OUT_OF_RANGE,
                name,
                message if message is not None else default,
                actual_value=value,
            )

    # The positive checks demand the sign, the negative checks forbid it:
    # is_positive(0) and is_negative_or_zero(0) both raise, while
    # is_positive_or_zero(0) and is_negative(0) both pass.

    def is_positive(self, reference: Reference[Signed], message: str | None = None) -> None:
        """Raise unless the value is strictly above zero."""
        meta = resolve(reference)
        self._out_of_range(
            meta.value <= _zero_of(meta.value),
            meta.name,
            meta.value,
            message,
            f"{meta.name} is not positive.",
        )

    def is_negative(self, reference: Reference[Signed], message: str | None = None) -> None:
        """Raise when the value is strictly below zero."""
        meta = resolve(reference)
        self._out_of_range(
            meta.value < _zero_of(meta.value),
            meta.name,
            meta.value,
            message,
            f"{meta.name} is lower than zero.",
        )

    def is_positive_or_zero(
        self, reference: Reference[Signed], message: str | None = None
    ) -> None:
        """Raise unless the value is zero or above."""
        meta = resolve(reference)
        self._out_of_range(
            meta.value < _zero_of(meta.value),
            meta.name,
            meta.value,
            message,
            f"{meta.name} is lower than zero.",
        )

    def is_negative_or_zero(
        self, reference: Reference[Signed], message: str | None = None
    ) -> None:
        """Raise when the value is at or below zero; ``timedelta(0)`` counts as zero."""
        meta = resolve(reference)
        self._out_of_range(
            meta.value <= _zero_of(meta.value),
            meta.name,
            meta.value,
            message,
            f"{meta.name} is lower or equal to zero.",
        )

    def is_greater_than(
        self, reference: Reference[Signed], limit: Signed = 0, message: str | None = None
    ) -> None:
        """Raise when the value is strictly greater than ``limit``."""
        meta = resolve(reference)
        _check_limit(meta.name, meta.value, limit)
        self._out_of_range(
            meta.value > limit,
            meta.name,
            meta.value,
            message,
            f"{meta.name} is greater than {limit}.",
        )

    def is_lower_than(
        self, reference: Reference[Signed], limit: Signed = 0, message: str | None = None
    ) -> None:
        """Raise when the value is strictly lower than ``limit``."""
        meta = resolve(reference)
        _check_limit(meta.name, meta.value, limit)
        self._out_of_range(
            meta.value < limit,
            meta.name,
            meta.value,
            message,
            f"{meta.name} is lower than {limit}.",
        )

    # dates

    def _now_for(self, value: date) -> date:
        if isinstance(value, datetime):
            return self._clock(value.tzinfo)
        return self._clock(None).date()

    def is_in_the_past(
        self, reference: Reference[date], message: str | None = None
    ) -> None:
        """Raise when the value is before now; plain dates compare with today."""
        meta = resolve(reference)
        if meta.value < self._now_for(meta.value):
            self._fail(
                ErrorKind.ARGUMENT_INVALID,
                meta.name,
                message if message is not None else f"{meta.name} is in the past.",
            )

    def is_in_the_future(
        self, reference: Reference[date], message: str | None = None
    ) -> None:
        meta = resolve(reference)
        if meta.value > self._now_for(meta.value):
            self._fail(
                ErrorKind.ARGUMENT_INVALID,
                meta.name,
                message if message is not None else f"{meta.name} is in the future.",
            )

    # any value

    def is_equal_to(
        self, reference: Reference[T], test_value: T | None = None, message: str | None = None
    ) -> None:
        """Raise when the value equals ``test_value``.

        The default message keeps the historical wording,
        ``"status is not equal to open"``.
        """
        meta = resolve(reference)
        if meta.value == test_value:
            self._fail(
                ErrorKind.ARGUMENT_OUT_OF_RANGE,
                meta.name,
                message if message is not None else f"{meta.name} is not equal to {test_value}",
                actual_value=meta.value,
            )
