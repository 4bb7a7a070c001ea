"""Check-in toggle: the one operation that writes completions."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime, time, tzinfo
from typing import Literal, Optional

from ..domain.repositories.habit import HabitRepository
from ..errors import InvalidInput, NotFound
from ..logging_config import get_logger
from .streaks import local_now

logger = get_logger(__name__)

_DAY_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


@dataclass(slots=True, frozen=True)
class CheckInResult:
    habit_id: int
    day: date
    completed: bool

    @property
    def action(self) -> Literal["created", "removed"]:
        return "created" if self.completed else "removed"

    def to_dict(self) -> dict:
        return {
            "habitId": self.habit_id,
            "date": self.day.isoformat(),
            "completed": self.completed,
            "action": self.action,
        }


def parse_day(raw: object) -> date:
    """Parse a strict ``YYYY-MM-DD`` calendar day."""

    if isinstance(raw, date) and not isinstance(raw, datetime):
        return raw
    if not isinstance(raw, str) or not _DAY_PATTERN.match(raw.strip()):
        raise InvalidInput("Date must be a calendar day in YYYY-MM-DD form")
    try:
        return date.fromisoformat(raw.strip())
    except ValueError as exc:
        raise InvalidInput(f"Invalid calendar date: {raw.strip()}") from exc


def completion_timestamp(day: date, *, tz: Optional[tzinfo] = None) -> datetime:
    """Moment to stamp on a new completion.

    Checking in for today records the actual wall-clock time; back-filled or
    future days are stamped at midnight.
    """

    now = local_now(tz)
    if day == now.date():
        return now
    return datetime.combine(day, time.min)


def toggle_check_in(
    repository: HabitRepository,
    *,
    user_id: int,
    habit_id: int,
    day: date | str,
    tz: Optional[tzinfo] = None,
) -> CheckInResult:
    """Create the completion for (habit, day) if missing, otherwise remove it.

    Raises:
        InvalidInput: ``day`` is not a ``YYYY-MM-DD`` calendar date.
        NotFound: the habit does not exist or belongs to another user.
    """

    parsed = parse_day(day)
    habit = repository.get_habit(habit_id, user_id=user_id)
    if habit is None:
        raise NotFound("Habit not found")

    completed = repository.toggle_completion(
        habit_id,
        parsed,
        user_id=user_id,
        completed_at=completion_timestamp(parsed, tz=tz),
    )
    result = CheckInResult(habit_id=habit_id, day=parsed, completed=completed)
    logger.info(
        "Check-in %s",
        result.action,
        extra={"user_id": user_id, "habit_id": habit_id, "day": parsed.isoformat()},
    )
    return result


__all__ = ["CheckInResult", "completion_timestamp", "parse_day", "toggle_check_in"]
