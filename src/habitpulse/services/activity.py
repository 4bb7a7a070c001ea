"""Per-day activity histogram for the dashboard bar chart."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from datetime import date, timedelta, tzinfo
from typing import Iterable, Optional

from .streaks import Timestamp, local_today, normalize_day

# Completions are fetched for a trailing week; the chart shows the tail of it.
FETCH_WINDOW_DAYS = 7
DEFAULT_DISPLAY_DAYS = 5


@dataclass(slots=True)
class ActivityBucket:
    day: date
    label: str
    value: int

    def to_dict(self) -> dict:
        return {"label": self.label, "value": self.value}


def day_label(day: date) -> str:
    """Abbreviated weekday plus day of month, e.g. ``Mon 5``."""

    return f"{day:%a} {day.day}"


def activity_window(today: date, days: int) -> list[date]:
    """Contiguous days ending at ``today``, oldest first."""

    if days < 1:
        raise ValueError("Activity window must cover at least one day")
    start = today - timedelta(days=days - 1)
    return [start + timedelta(days=offset) for offset in range(days)]


def weekly_activity(
    timestamps: Iterable[Timestamp],
    *,
    today: date | None = None,
    days: int = DEFAULT_DISPLAY_DAYS,
    tz: Optional[tzinfo] = None,
) -> list[ActivityBucket]:
    """Count completions per calendar day over the trailing window.

    Every day in the window gets a bucket, zero when nothing was completed.
    """

    today = today or local_today(tz)
    counts = Counter(normalize_day(value, tz) for value in timestamps)
    return [
        ActivityBucket(day=day, label=day_label(day), value=counts.get(day, 0))
        for day in activity_window(today, days)
    ]


__all__ = [
    "ActivityBucket",
    "DEFAULT_DISPLAY_DAYS",
    "FETCH_WINDOW_DAYS",
    "activity_window",
    "day_label",
    "weekly_activity",
]
