"""Pytest configuration and shared fixtures for HabitPulse tests.

This module provides database fixtures, test data factories, an in-memory
repository double and a Flask test client, so domain logic, repositories,
services and routes can be tested without touching a real app database.
"""

from __future__ import annotations

import tempfile
from datetime import date, datetime, time
from itertools import count
from pathlib import Path
from typing import Optional

import pytest
from sqlmodel import SQLModel, create_engine

# Import all models to ensure they're registered with SQLModel metadata
from habitpulse.infra.database import create_session_factory
from habitpulse.models import Completion, Habit, User


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine():
    """Create an isolated SQLite database file for each test.

    Yields:
        Engine: SQLModel engine connected to test database
    """
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    engine = create_engine(f"sqlite:///{db_path}", echo=False)
    SQLModel.metadata.create_all(engine)

    yield engine

    engine.dispose()
    db_path.unlink(missing_ok=True)


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Session factory matching the one the app builds from its engine."""

    return create_session_factory(db_engine)


@pytest.fixture(scope="function")
def db_session(session_factory):
    """A session for arranging rows directly in the test database."""

    with session_factory() as session:
        yield session


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def user_factory(session_factory):
    """Factory for persisted users."""

    def _create_user(username: str = "tester", email: str | None = None) -> User:
        with session_factory() as session:
            user = User(
                username=username,
                email=email or f"{username}@example.com",
                password_hash="dummy-hash",
            )
            session.add(user)
            session.commit()
            session.refresh(user)
            session.expunge(user)
            return user

    return _create_user


@pytest.fixture
def user(user_factory) -> User:
    """Create a default user for scoping data."""

    return user_factory()


@pytest.fixture
def habit_factory(session_factory, user):
    """Factory for creating test habits.

    Returns:
        Callable: Function that creates and persists Habit instances
    """

    def _create_habit(
        name: str = "Test Habit",
        description: str = "Test habit description",
        icon: str | None = None,
        created_at: datetime | None = None,
        owner: User | None = None,
    ) -> Habit:
        owner = owner or user
        with session_factory() as session:
            habit = Habit(
                user_id=owner.id,
                name=name,
                description=description,
                icon=icon,
                created_at=created_at or datetime.now(),
            )
            session.add(habit)
            session.commit()
            session.refresh(habit)
            session.expunge(habit)
            return habit

    return _create_habit


@pytest.fixture
def completion_factory(session_factory):
    """Factory for completions stamped at a given moment (or 09:00 on a day)."""

    def _create_completion(habit: Habit, when: date | datetime) -> Completion:
        if not isinstance(when, datetime):
            when = datetime.combine(when, time(9, 0))
        with session_factory() as session:
            completion = Completion(
                habit_id=habit.id,
                user_id=habit.user_id,
                completed_at=when,
                completed_on=when.date(),
            )
            session.add(completion)
            session.commit()
            session.refresh(completion)
            session.expunge(completion)
            return completion

    return _create_completion


# =============================================================================
# In-memory repository double
# =============================================================================


class InMemoryHabitRepository:
    """Dict-backed stand-in for the SQLModel habit repository."""

    def __init__(self) -> None:
        self.habits: dict[int, Habit] = {}
        self.completions: list[Completion] = []
        self._habit_ids = count(1)
        self._completion_ids = count(1)

    # Arrangement helpers -----------------------------------------------------
    def add_habit(
        self,
        name: str,
        *,
        user_id: int = 1,
        icon: str | None = None,
        created_at: datetime | None = None,
    ) -> Habit:
        habit = Habit(
            id=next(self._habit_ids),
            user_id=user_id,
            name=name,
            icon=icon,
            created_at=created_at or datetime(2024, 1, 1, 8, 0),
        )
        self.habits[habit.id] = habit
        return habit

    def add_completion(self, habit: Habit, when: date | datetime) -> Completion:
        if not isinstance(when, datetime):
            when = datetime.combine(when, time(9, 0))
        completion = Completion(
            id=next(self._completion_ids),
            habit_id=habit.id,
            user_id=habit.user_id,
            completed_at=when,
            completed_on=when.date(),
        )
        self.completions.append(completion)
        return completion

    # Protocol ------------------------------------------------------------------
    def get_habit(self, habit_id: int, *, user_id: int) -> Optional[Habit]:
        habit = self.habits.get(habit_id)
        if habit is None or habit.user_id != user_id:
            return None
        return habit

    def get_habit_by_name(
        self, name: str, *, user_id: int, exclude_id: Optional[int] = None
    ) -> Optional[Habit]:
        wanted = name.strip().lower()
        for habit in self.habits.values():
            if habit.user_id == user_id and habit.name.lower() == wanted and habit.id != exclude_id:
                return habit
        return None

    def list_habits(self, *, user_id: int) -> list[Habit]:
        owned = [habit for habit in self.habits.values() if habit.user_id == user_id]
        return sorted(owned, key=lambda h: (h.created_at, h.id), reverse=True)

    def create_habit(self, habit: Habit, *, user_id: int) -> Habit:
        habit.id = next(self._habit_ids)
        habit.user_id = user_id
        if habit.created_at is None:
            habit.created_at = datetime.now()
        self.habits[habit.id] = habit
        return habit

    def update_habit(self, habit: Habit, *, user_id: int) -> Habit:
        self.habits[habit.id] = habit
        return habit

    def delete_habit(self, habit_id: int, *, user_id: int) -> None:
        self.habits.pop(habit_id, None)
        self.completions = [c for c in self.completions if c.habit_id != habit_id]

    def completions_for_habit(self, habit_id: int, *, user_id: int) -> list[Completion]:
        return [
            c for c in self.completions if c.habit_id == habit_id and c.user_id == user_id
        ]

    def completions_for_user(
        self,
        *,
        user_id: int,
        since: Optional[datetime] = None,
        until: Optional[datetime] = None,
    ) -> list[Completion]:
        return [
            c
            for c in self.completions
            if c.user_id == user_id
            and (since is None or c.completed_at >= since)
            and (until is None or c.completed_at <= until)
        ]

    def count_completions(self, *, user_id: int) -> int:
        return sum(1 for c in self.completions if c.user_id == user_id)

    def toggle_completion(
        self, habit_id: int, day: date, *, user_id: int, completed_at: datetime
    ) -> bool:
        for completion in self.completions:
            if completion.habit_id == habit_id and completion.completed_on == day:
                self.completions.remove(completion)
                return False
        self.completions.append(
            Completion(
                id=next(self._completion_ids),
                habit_id=habit_id,
                user_id=user_id,
                completed_at=completed_at,
                completed_on=day,
            )
        )
        return True


@pytest.fixture
def memory_repo() -> InMemoryHabitRepository:
    return InMemoryHabitRepository()


# =============================================================================
# Flask app
# =============================================================================


@pytest.fixture
def app(tmp_path, monkeypatch):
    monkeypatch.setenv("HABITPULSE_DATA_DIR", str(tmp_path))
    monkeypatch.delenv("HABITPULSE_TIMEZONE", raising=False)
    monkeypatch.delenv("HABITPULSE_WEEK_START", raising=False)
    monkeypatch.delenv("HABITPULSE_ACTIVITY_DAYS", raising=False)

    from habitpulse import create_app

    application = create_app("testing")
    yield application
    application.extensions["habitpulse"]["engine"].dispose()


@pytest.fixture
def client(app):
    with app.test_client() as client:
        yield client


@pytest.fixture
def auth_client(client):
    """Test client with a registered, logged-in user."""

    response = client.post(
        "/api/auth/register",
        json={"username": "walker", "email": "walker@example.com", "password": "long-enough"},
    )
    assert response.status_code == 201
    return client
