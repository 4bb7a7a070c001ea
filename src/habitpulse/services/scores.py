"""Week-over-week score change."""

from __future__ import annotations

from datetime import date, timedelta, tzinfo
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional

from ..errors import InvalidInput
from .streaks import Timestamp, local_today, normalize_day

SUNDAY = 6

# Score reported when last week had no completions but this week does.
# The ratio is undefined there; growth from nothing is shown as a flat 100%.
ZERO_BASELINE_SCORE = 100


def round_half_away_from_zero(value: Decimal) -> int:
    """Round to the nearest integer, ``.5`` going away from zero (2.5 -> 3, -2.5 -> -3)."""

    # Decimal's ROUND_HALF_UP rounds halves away from zero for both signs.
    return int(value.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def score_change(current_week_count: int, last_week_count: int) -> int:
    """Signed percentage change between this week's and last week's completion counts."""

    if current_week_count < 0 or last_week_count < 0:
        raise InvalidInput("Completion counts cannot be negative")
    if last_week_count == 0:
        return ZERO_BASELINE_SCORE if current_week_count > 0 else 0
    delta = Decimal(current_week_count - last_week_count) * 100 / Decimal(last_week_count)
    return round_half_away_from_zero(delta)


def week_bounds(today: date, week_start: int = SUNDAY) -> tuple[date, date, date]:
    """Return (start of this week, start of last week, end of last week).

    ``week_start`` follows ``date.weekday()``: 0 is Monday, 6 is Sunday.
    """

    if not 0 <= week_start <= 6:
        raise ValueError("week_start must be between 0 and 6")
    start_current = today - timedelta(days=(today.weekday() - week_start) % 7)
    start_last = start_current - timedelta(days=7)
    end_last = start_current - timedelta(days=1)
    return start_current, start_last, end_last


def weekly_counts(
    timestamps: Iterable[Timestamp],
    *,
    today: date | None = None,
    week_start: int = SUNDAY,
    tz: Optional[tzinfo] = None,
) -> tuple[int, int]:
    """Count completions in the current calendar week and the one before it."""

    today = today or local_today(tz)
    start_current, start_last, end_last = week_bounds(today, week_start)
    end_current = start_current + timedelta(days=6)

    current = 0
    last = 0
    for value in timestamps:
        day = normalize_day(value, tz)
        if start_current <= day <= end_current:
            current += 1
        elif start_last <= day <= end_last:
            last += 1
    return current, last


__all__ = [
    "SUNDAY",
    "ZERO_BASELINE_SCORE",
    "round_half_away_from_zero",
    "score_change",
    "week_bounds",
    "weekly_counts",
]
