from __future__ import annotations

from datetime import date, datetime, timedelta, timezone, tzinfo

import pytest

from throwif import argument
from throwif.errors import ArgumentInvalidError
from throwif.guards import Guard, system_clock

_NOW = datetime(2024, 5, 1, 12, 0, 0)


def _fixed_clock(tz: tzinfo | None) -> datetime:
    if tz is None:
        return _NOW
    return _NOW.replace(tzinfo=timezone.utc).astimezone(tz)


def test_is_in_the_past() -> None:
    guard = Guard(clock=_fixed_clock)
    deadline = _NOW - timedelta(seconds=1)
    with pytest.raises(ArgumentInvalidError) as info:
        guard.is_in_the_past(lambda: deadline)
    assert info.value.message == "deadline is in the past."
    assert info.value.param_name == "deadline"
    deadline = _NOW
    guard.is_in_the_past(lambda: deadline)


def test_is_in_the_future() -> None:
    guard = Guard(clock=_fixed_clock)
    born = _NOW + timedelta(days=1)
    with pytest.raises(ArgumentInvalidError, match="born is in the future."):
        guard.is_in_the_future(lambda: born)
    born = _NOW - timedelta(days=1)
    guard.is_in_the_future(lambda: born)


def test_aware_values_use_their_own_timezone() -> None:
    seen: list[tzinfo | None] = []

    def clock(tz: tzinfo | None) -> datetime:
        seen.append(tz)
        return _fixed_clock(tz)

    guard = Guard(clock=clock)
    paris = timezone(timedelta(hours=2))
    starts_at = datetime(2024, 5, 1, 15, 0, 0, tzinfo=paris)
    guard.is_in_the_past(lambda: starts_at)
    assert seen == [paris]


def test_default_clock_with_real_time() -> None:
    yesterday = datetime.now() - timedelta(days=1)
    with pytest.raises(ArgumentInvalidError):
        argument.is_in_the_past(lambda: yesterday)
    argument.is_in_the_future(lambda: yesterday)
    tomorrow = datetime.now(timezone.utc) + timedelta(days=1)
    argument.is_in_the_past(lambda: tomorrow)


def test_system_clock_naive_utc(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("THROWIF_NAIVE_CLOCK", "utc")
    now = system_clock(None)
    assert now.tzinfo is None
    expected = datetime.now(timezone.utc).replace(tzinfo=None)
    assert abs(expected - now) < timedelta(seconds=5)


def test_system_clock_aware() -> None:
    now = system_clock(timezone.utc)
    assert now.tzinfo is timezone.utc


def test_plain_dates_compare_with_today() -> None:
    guard = Guard(clock=_fixed_clock)
    due = date(2024, 4, 30)
    with pytest.raises(ArgumentInvalidError, match="due is in the past."):
        guard.is_in_the_past(lambda: due)
    guard.is_in_the_future(lambda: due)
    due = date(2024, 5, 1)
    guard.is_in_the_past(lambda: due)
    guard.is_in_the_future(lambda: due)
    due = date(2024, 5, 2)
    with pytest.raises(ArgumentInvalidError, match="due is in the future."):
        guard.is_in_the_future(lambda: due)
