"""Dashboard aggregation over a user's habits and completions."""

from __future__ import annotations

import calendar
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta, tzinfo
from typing import Any, Optional

from ..constants.habits import TOP_HABIT_PLACEHOLDER
from ..domain.repositories.habit import HabitRepository
from ..logging_config import get_logger
from .activity import DEFAULT_DISPLAY_DAYS, FETCH_WINDOW_DAYS, ActivityBucket, weekly_activity
from .scores import SUNDAY, score_change, week_bounds, weekly_counts
from .streaks import current_streak, local_today

logger = get_logger(__name__)

RUNNING_KEYWORD = "run"
MILES_PER_RUN = 2
RUNNING_TARGET_MILES = 20
FIVE_AM_WINDOW = (time(4, 0), time(5, 5))


@dataclass(slots=True, frozen=True)
class DashboardSettings:
    """Deployment-wide knobs for the calculators."""

    tz: Optional[tzinfo] = None
    week_start: int = SUNDAY
    activity_days: int = DEFAULT_DISPLAY_DAYS

    @classmethod
    def from_config(cls, config: Any) -> "DashboardSettings":
        return cls(
            tz=config.tzinfo(),
            week_start=config.WEEK_START,
            activity_days=config.ACTIVITY_WINDOW_DAYS,
        )


@dataclass(slots=True)
class TopHabit:
    name: str
    streak: int
    icon: Optional[str]

    def to_dict(self) -> dict:
        return {"name": self.name, "streak": self.streak, "icon": self.icon}


@dataclass(slots=True)
class DashboardStats:
    active_habits: int
    top_habit: Optional[TopHabit]
    weekly_activity: list[ActivityBucket] = field(default_factory=list)
    score_change: int = 0
    total_completions: int = 0

    def to_dict(self) -> dict:
        return {
            "activeHabits": self.active_habits,
            "topHabit": self.top_habit.to_dict() if self.top_habit else dict(TOP_HABIT_PLACEHOLDER),
            "weeklyActivity": [bucket.to_dict() for bucket in self.weekly_activity],
            "scoreChange": self.score_change,
            "totalCompletions": self.total_completions,
        }


def _start_of(day: date) -> datetime:
    return datetime.combine(day, time.min)


def _end_of(day: date) -> datetime:
    return datetime.combine(day, time.max)


def find_top_habit(
    repository: HabitRepository,
    *,
    user_id: int,
    today: date,
    tz: Optional[tzinfo] = None,
) -> Optional[TopHabit]:
    """Habit with the highest current streak; the first one wins ties."""

    top: Optional[TopHabit] = None
    for habit in repository.list_habits(user_id=user_id):
        if habit.id is None:
            continue
        completions = repository.completions_for_habit(habit.id, user_id=user_id)
        streak = current_streak(
            (completion.completed_at for completion in completions), today=today, tz=tz
        )
        if top is None or streak > top.streak:
            top = TopHabit(name=habit.name, streak=streak, icon=habit.icon)
    return top


def build_dashboard(
    repository: HabitRepository,
    *,
    user_id: int,
    today: date | None = None,
    settings: DashboardSettings | None = None,
) -> DashboardStats:
    """Assemble the dashboard view; each calculator runs on its own snapshot."""

    settings = settings or DashboardSettings()
    today = today or local_today(settings.tz)

    habits = repository.list_habits(user_id=user_id)
    top = find_top_habit(repository, user_id=user_id, today=today, tz=settings.tz)

    recent = repository.completions_for_user(
        user_id=user_id,
        since=_start_of(today - timedelta(days=FETCH_WINDOW_DAYS - 1)),
        until=_end_of(today),
    )
    activity = weekly_activity(
        (completion.completed_at for completion in recent),
        today=today,
        days=settings.activity_days,
        tz=settings.tz,
    )

    start_current, start_last, _ = week_bounds(today, settings.week_start)
    two_weeks = repository.completions_for_user(
        user_id=user_id,
        since=_start_of(start_last),
        until=_end_of(start_current + timedelta(days=6)),
    )
    current_count, last_count = weekly_counts(
        (completion.completed_at for completion in two_weeks),
        today=today,
        week_start=settings.week_start,
        tz=settings.tz,
    )

    stats = DashboardStats(
        active_habits=len(habits),
        top_habit=top,
        weekly_activity=activity,
        score_change=score_change(current_count, last_count),
        total_completions=repository.count_completions(user_id=user_id),
    )
    logger.info(
        "Dashboard generated",
        extra={
            "user_id": user_id,
            "active_habits": stats.active_habits,
            "top_streak": top.streak if top else 0,
            "score_change": stats.score_change,
        },
    )
    return stats


def running_stats(
    repository: HabitRepository,
    *,
    user_id: int,
    today: date | None = None,
    tz: Optional[tzinfo] = None,
) -> dict:
    """Monthly mileage for the first habit whose name mentions running."""

    today = today or local_today(tz)
    habit = next(
        (
            item
            for item in sorted(repository.list_habits(user_id=user_id), key=lambda h: h.id or 0)
            if RUNNING_KEYWORD in item.name.lower()
        ),
        None,
    )
    if habit is None or habit.id is None:
        return {"found": False}

    month_start = today.replace(day=1)
    last_day = today.replace(day=calendar.monthrange(today.year, today.month)[1])
    runs = sum(
        1
        for completion in repository.completions_for_habit(habit.id, user_id=user_id)
        if completion.completed_on >= month_start
    )
    return {
        "found": True,
        "miles": runs * MILES_PER_RUN,
        "targetMiles": RUNNING_TARGET_MILES,
        "daysLeft": (last_day - today).days,
        "habitName": habit.name,
    }


def five_am_club(
    repository: HabitRepository,
    *,
    user_id: int,
    username: str,
    today: date | None = None,
    tz: Optional[tzinfo] = None,
) -> dict:
    """Whether the user checked anything off between 04:00 and 05:05 today."""

    today = today or local_today(tz)
    opens, closes = FIVE_AM_WINDOW
    early = repository.completions_for_user(
        user_id=user_id,
        since=datetime.combine(today, opens),
        until=datetime.combine(today, closes),
    )
    members = []
    if early:
        members.append(
            {
                "id": user_id,
                "username": username,
                "avatar": username[:1].upper(),
                "isMe": True,
            }
        )
    return {"members": members, "count": len(members), "joined": bool(members)}


__all__ = [
    "DashboardSettings",
    "DashboardStats",
    "TopHabit",
    "build_dashboard",
    "find_top_habit",
    "five_am_club",
    "running_stats",
]
