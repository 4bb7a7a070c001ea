"""SQLModel implementation of the habit repository."""

from __future__ import annotations

from datetime import date, datetime
from typing import Callable, Optional

from sqlalchemy import delete, func
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from ...logging_config import get_logger
from ...models.habit import Completion, Habit

logger = get_logger(__name__)


class SQLModelHabitRepository:
    """SQLModel-based habit repository implementation."""

    def __init__(self, session_factory: Callable[[], Session]):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def get_habit(self, habit_id: int, *, user_id: int) -> Optional[Habit]:
        """Retrieve a habit by ID."""
        with self.session_factory() as session:
            obj = session.exec(
                select(Habit).where(Habit.id == habit_id, Habit.user_id == user_id)
            ).first()
            if obj:
                session.expunge(obj)
            return obj

    def get_habit_by_name(
        self, name: str, *, user_id: int, exclude_id: Optional[int] = None
    ) -> Optional[Habit]:
        """Retrieve a habit by name, ignoring case."""
        with self.session_factory() as session:
            statement = select(Habit).where(
                Habit.user_id == user_id,
                func.lower(Habit.name) == name.strip().lower(),
            )
            if exclude_id is not None:
                statement = statement.where(Habit.id != exclude_id)
            obj = session.exec(statement).first()
            if obj:
                session.expunge(obj)
            return obj

    def list_habits(self, *, user_id: int) -> list[Habit]:
        """List the user's habits, newest first."""
        with self.session_factory() as session:
            statement = (
                select(Habit)
                .where(Habit.user_id == user_id)
                .order_by(Habit.created_at.desc(), Habit.id.desc())  # type: ignore[union-attr]
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def create_habit(self, habit: Habit, *, user_id: int) -> Habit:
        """Create a new habit."""
        with self.session_factory() as session:
            habit.user_id = user_id
            session.add(habit)
            session.commit()
            session.refresh(habit)
            session.expunge(habit)
            return habit

    def update_habit(self, habit: Habit, *, user_id: int) -> Habit:
        """Update an existing habit."""
        with self.session_factory() as session:
            habit.user_id = user_id
            habit = session.merge(habit)
            session.commit()
            session.refresh(habit)
            session.expunge(habit)
            return habit

    def delete_habit(self, habit_id: int, *, user_id: int) -> None:
        """Delete a habit by ID; completions go with it."""
        with self.session_factory() as session:
            habit = session.exec(
                select(Habit).where(Habit.id == habit_id, Habit.user_id == user_id)
            ).first()
            if habit:
                session.delete(habit)
                session.commit()

    # Completion operations
    def completions_for_habit(self, habit_id: int, *, user_id: int) -> list[Completion]:
        """Every completion of one habit, newest first."""
        with self.session_factory() as session:
            statement = (
                select(Completion)
                .join(Habit, Habit.id == Completion.habit_id)  # type: ignore[arg-type]
                .where(Habit.user_id == user_id)
                .where(Completion.habit_id == habit_id)
                .order_by(Completion.completed_at.desc())  # type: ignore[attr-defined]
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def completions_for_user(
        self,
        *,
        user_id: int,
        since: Optional[datetime] = None,
        until: Optional[datetime] = None,
    ) -> list[Completion]:
        """Completions across the user's habits, bounds inclusive."""
        with self.session_factory() as session:
            statement = (
                select(Completion)
                .join(Habit, Habit.id == Completion.habit_id)  # type: ignore[arg-type]
                .where(Habit.user_id == user_id)
            )
            if since is not None:
                statement = statement.where(Completion.completed_at >= since)
            if until is not None:
                statement = statement.where(Completion.completed_at <= until)
            statement = statement.order_by(Completion.completed_at)  # type: ignore[arg-type]
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def count_completions(self, *, user_id: int) -> int:
        """Lifetime completion total across the user's habits."""
        with self.session_factory() as session:
            statement = (
                select(func.count(Completion.id))
                .join(Habit, Habit.id == Completion.habit_id)  # type: ignore[arg-type]
                .where(Habit.user_id == user_id)
            )
            return int(session.exec(statement).one() or 0)

    def toggle_completion(
        self, habit_id: int, day: date, *, user_id: int, completed_at: datetime
    ) -> bool:
        """Flip the completion for (habit, day) inside one transaction.

        The delete runs first and its row count decides the direction, so two
        concurrent toggles on a present row end as one removal and one
        re-creation. On a missing row the unique (habit_id, completed_on)
        constraint settles the race: the insert that loses removes the winner's
        row, which is the state two serial toggles would have left.
        """
        with self.session_factory() as session:
            if delete_completion_for_day(session, habit_id, day):
                session.commit()
                return False

            session.add(
                Completion(
                    habit_id=habit_id,
                    user_id=user_id,
                    completed_at=completed_at,
                    completed_on=day,
                )
            )
            try:
                session.commit()
            except IntegrityError:
                session.rollback()
                logger.warning(
                    "Concurrent check-in detected; removing the competing completion",
                    extra={"habit_id": habit_id, "day": day.isoformat()},
                )
                delete_completion_for_day(session, habit_id, day)
                session.commit()
                return False
            return True


def delete_completion_for_day(session: Session, habit_id: int, day: date) -> int:
    """Delete the completion for (habit, day); return how many rows went."""

    statement = delete(Completion).where(
        Completion.habit_id == habit_id,  # type: ignore[arg-type]
        Completion.completed_on == day,  # type: ignore[arg-type]
    )
    result = session.exec(statement)  # type: ignore[call-overload]
    return result.rowcount or 0
