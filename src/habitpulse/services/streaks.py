"""Streak calculations over a habit's completion timestamps."""

from __future__ import annotations

from datetime import date, datetime, timedelta, tzinfo
from typing import Iterable, Optional, Union

Timestamp = Union[date, datetime]

ONE_DAY = timedelta(days=1)


def local_today(tz: Optional[tzinfo] = None) -> date:
    """Current calendar day at the day boundary of ``tz`` (server local when None)."""

    if tz is None:
        return date.today()
    return datetime.now(tz).date()


def local_now(tz: Optional[tzinfo] = None) -> datetime:
    """Naive wall-clock time in ``tz``, the form completions are stored in."""

    if tz is None:
        return datetime.now()
    return datetime.now(tz).replace(tzinfo=None)


def normalize_day(value: Timestamp, tz: Optional[tzinfo] = None) -> date:
    """Strip time-of-day from a completion timestamp.

    Aware datetimes are first converted into ``tz`` (or the server's local zone
    when ``tz`` is None). Naive datetimes are already local wall-clock time.
    """

    if isinstance(value, datetime):
        if value.tzinfo is not None and value.utcoffset() is not None:
            value = value.astimezone(tz) if tz is not None else value.astimezone()
        return value.date()
    if isinstance(value, date):
        return value
    raise TypeError(f"Expected date or datetime, got {type(value).__name__}")


def completion_days(timestamps: Iterable[Timestamp], tz: Optional[tzinfo] = None) -> list[date]:
    """Distinct calendar days, newest first."""

    return sorted({normalize_day(value, tz) for value in timestamps}, reverse=True)


def current_streak(
    timestamps: Iterable[Timestamp],
    *,
    today: date | None = None,
    tz: Optional[tzinfo] = None,
) -> int:
    """Length of the streak ending today or yesterday.

    A streak stays alive through the current day: if the latest completion is
    yesterday the user still has until midnight to extend it. The backward
    walk stops at the first gap. Completions dated after ``today`` are ignored.
    """

    today = today or local_today(tz)
    days = [day for day in completion_days(timestamps, tz) if day <= today]
    if not days:
        return 0

    if days[0] not in (today, today - ONE_DAY):
        return 0

    streak = 1
    for current, following in zip(days, days[1:]):
        if current - following != ONE_DAY:
            break
        streak += 1
    return streak


def longest_streak(timestamps: Iterable[Timestamp], *, tz: Optional[tzinfo] = None) -> int:
    """Longest run of consecutive days anywhere in the history."""

    days = sorted(completion_days(timestamps, tz))
    longest = 0
    run = 0
    last_day: date | None = None
    for day in days:
        if last_day is not None and day - last_day == ONE_DAY:
            run += 1
        else:
            run = 1
        longest = max(longest, run)
        last_day = day
    return longest


def compute_streaks(
    timestamps: Iterable[Timestamp],
    *,
    today: date | None = None,
    tz: Optional[tzinfo] = None,
) -> tuple[int, int]:
    """Return (current_streak, longest_streak)."""

    values = list(timestamps)
    current = current_streak(values, today=today, tz=tz)
    return current, max(current, longest_streak(values, tz=tz))


__all__ = [
    "ONE_DAY",
    "Timestamp",
    "completion_days",
    "compute_streaks",
    "current_streak",
    "local_now",
    "local_today",
    "longest_streak",
    "normalize_day",
]
