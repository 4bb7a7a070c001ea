"""Demo data for local development."""

from __future__ import annotations

import random
from datetime import date, datetime, time, timedelta

from sqlmodel import select

from ..constants.habits import HabitCategory
from ..infra.database import SessionFactory
from ..models.habit import Completion, Habit
from ..models.user import User
from .auth import create_user
from .streaks import local_today

DEMO_USERNAME = "demo"
DEMO_PASSWORD = "demo-password"

_DEMO_HABITS = [
    ("Morning run", HabitCategory.FITNESS, "#22c55e", "\U0001F3C3", 0.8),
    ("Read 20 pages", HabitCategory.LEARNING, "#6366f1", "\U0001F4DA", 0.6),
    ("Meditate", HabitCategory.MINDFULNESS, "#f59e0b", "\U0001F9D8", 0.5),
]


def seed_demo(session_factory: SessionFactory, *, days: int = 28, today: date | None = None) -> User:
    """Create the demo user with a few habits and several weeks of check-ins.

    Re-running replaces the demo user's habits.
    """

    today = today or local_today()
    rng = random.Random(42)

    with session_factory() as session:
        user = session.exec(select(User).where(User.username == DEMO_USERNAME)).first()
        if user is not None:
            session.expunge(user)

    if user is None:
        user = create_user(
            username=DEMO_USERNAME,
            email=f"{DEMO_USERNAME}@example.com",
            password=DEMO_PASSWORD,
            session_factory=session_factory,
        )

    with session_factory() as session:
        for habit in session.exec(select(Habit).where(Habit.user_id == user.id)).all():
            session.delete(habit)
        session.flush()

        for name, category, color, icon, rate in _DEMO_HABITS:
            habit = Habit(
                user_id=user.id,
                name=name,
                category=category.value,
                color=color,
                icon=icon,
                created_at=datetime.combine(today - timedelta(days=days), time(8, 0)),
            )
            session.add(habit)
            session.flush()
            for offset in range(days):
                day = today - timedelta(days=offset)
                if rng.random() > rate:
                    continue
                session.add(
                    Completion(
                        habit_id=habit.id,
                        user_id=user.id,
                        completed_at=datetime.combine(day, time(7, rng.randint(0, 59))),
                        completed_on=day,
                    )
                )
        session.commit()

    return user


__all__ = ["DEMO_PASSWORD", "DEMO_USERNAME", "seed_demo"]
