"""Habit CRUD plus the derived per-habit statistics."""

from __future__ import annotations

from datetime import date, tzinfo
from typing import Any, Iterable, Optional

from ..constants.habits import HabitCategory, HabitFrequency
from ..domain.repositories.habit import HabitRepository
from ..errors import InvalidInput, NotFound
from ..logging_config import get_logger
from ..models.habit import Completion, Habit
from .streaks import completion_days, compute_streaks, local_today

logger = get_logger(__name__)

_EDITABLE_FIELDS = ("name", "description", "frequency", "category", "color", "icon")


def _enum_value(value: Any) -> Any:
    return value.value if isinstance(value, (HabitFrequency, HabitCategory)) else value


def summarize_habit(
    habit: Habit,
    completions: Iterable[Completion],
    *,
    today: date | None = None,
    tz: Optional[tzinfo] = None,
) -> dict:
    """Serialize a habit with its streaks and completion history."""

    stamps = [completion.completed_at for completion in completions]
    current, longest = compute_streaks(stamps, today=today, tz=tz)
    payload = habit.to_dict()
    payload.update(
        {
            "completedDates": [day.isoformat() for day in completion_days(stamps, tz)],
            "streak": current,
            "longestStreak": longest,
            "totalCompletions": len(stamps),
        }
    )
    return payload


def list_habits(
    repository: HabitRepository,
    *,
    user_id: int,
    today: date | None = None,
    tz: Optional[tzinfo] = None,
) -> list[dict]:
    """Return the user's habits, newest first, with derived stats."""

    today = today or local_today(tz)
    return [
        summarize_habit(
            habit,
            repository.completions_for_habit(habit.id, user_id=user_id),
            today=today,
            tz=tz,
        )
        for habit in repository.list_habits(user_id=user_id)
        if habit.id is not None
    ]


def get_owned_habit(repository: HabitRepository, *, user_id: int, habit_id: int) -> Habit:
    """Load a habit, raising NotFound when absent or owned by someone else."""

    habit = repository.get_habit(habit_id, user_id=user_id)
    if habit is None:
        raise NotFound("Habit not found")
    return habit


def _ensure_unique_name(
    repository: HabitRepository, name: str, *, user_id: int, exclude_id: Optional[int] = None
) -> None:
    if repository.get_habit_by_name(name, user_id=user_id, exclude_id=exclude_id):
        raise InvalidInput("You already have a habit with this name")


def create_habit(
    repository: HabitRepository,
    *,
    user_id: int,
    name: str,
    description: Optional[str] = None,
    frequency: HabitFrequency | str = HabitFrequency.DAILY,
    category: HabitCategory | str = HabitCategory.OTHER,
    color: Optional[str] = None,
    icon: Optional[str] = None,
) -> Habit:
    """Create a habit; names are unique per user regardless of case."""

    name = (name or "").strip()
    if not name:
        raise InvalidInput("Habit name is required")
    _ensure_unique_name(repository, name, user_id=user_id)

    habit = repository.create_habit(
        Habit(
            user_id=user_id,
            name=name,
            description=description.strip() if description else None,
            frequency=_enum_value(frequency),
            category=_enum_value(category),
            color=color,
            icon=icon,
        ),
        user_id=user_id,
    )
    logger.info("Habit created", extra={"user_id": user_id, "habit_id": habit.id})
    return habit


def update_habit(
    repository: HabitRepository,
    *,
    user_id: int,
    habit_id: int,
    changes: dict[str, Any],
) -> Habit:
    """Apply the provided fields; omitted or None fields are left untouched."""

    habit = get_owned_habit(repository, user_id=user_id, habit_id=habit_id)

    name = changes.get("name")
    if name is not None:
        name = name.strip()
        if not name:
            raise InvalidInput("Habit name is required")
        if name != habit.name:
            _ensure_unique_name(repository, name, user_id=user_id, exclude_id=habit_id)
        changes = {**changes, "name": name}

    for field_name in _EDITABLE_FIELDS:
        value = changes.get(field_name)
        if value is None:
            continue
        if field_name == "description":
            value = value.strip()
        setattr(habit, field_name, _enum_value(value))

    updated = repository.update_habit(habit, user_id=user_id)
    logger.info("Habit updated", extra={"user_id": user_id, "habit_id": habit_id})
    return updated


def delete_habit(repository: HabitRepository, *, user_id: int, habit_id: int) -> None:
    """Delete a habit and, through the cascade, its completions."""

    get_owned_habit(repository, user_id=user_id, habit_id=habit_id)
    repository.delete_habit(habit_id, user_id=user_id)
    logger.info("Habit deleted", extra={"user_id": user_id, "habit_id": habit_id})


def habit_streaks(
    repository: HabitRepository,
    *,
    user_id: int,
    habit_id: int,
    today: date | None = None,
    tz: Optional[tzinfo] = None,
) -> tuple[int, int]:
    """Return (current, longest) streak for one owned habit."""

    get_owned_habit(repository, user_id=user_id, habit_id=habit_id)
    completions = repository.completions_for_habit(habit_id, user_id=user_id)
    return compute_streaks(
        (completion.completed_at for completion in completions), today=today, tz=tz
    )


__all__ = [
    "create_habit",
    "delete_habit",
    "get_owned_habit",
    "habit_streaks",
    "list_habits",
    "summarize_habit",
    "update_habit",
]
