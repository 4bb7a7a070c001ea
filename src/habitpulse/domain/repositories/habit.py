"""Habit repository protocol."""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol

from ...models.habit import Completion, Habit


class HabitRepository(Protocol):
    """Data access for habits and their completions, scoped by owner."""

    def get_habit(self, habit_id: int, *, user_id: int) -> Optional[Habit]:
        """Retrieve a habit by ID if it belongs to the user."""
        ...

    def get_habit_by_name(
        self, name: str, *, user_id: int, exclude_id: Optional[int] = None
    ) -> Optional[Habit]:
        """Retrieve a habit by name, compared case-insensitively."""
        ...

    def list_habits(self, *, user_id: int) -> list[Habit]:
        """List the user's habits, newest first."""
        ...

    def create_habit(self, habit: Habit, *, user_id: int) -> Habit:
        """Create a new habit."""
        ...

    def update_habit(self, habit: Habit, *, user_id: int) -> Habit:
        """Update an existing habit."""
        ...

    def delete_habit(self, habit_id: int, *, user_id: int) -> None:
        """Delete a habit and its completions."""
        ...

    # Completion operations
    def completions_for_habit(self, habit_id: int, *, user_id: int) -> list[Completion]:
        """Every completion of one habit."""
        ...

    def completions_for_user(
        self,
        *,
        user_id: int,
        since: Optional[datetime] = None,
        until: Optional[datetime] = None,
    ) -> list[Completion]:
        """Completions across all of the user's habits, optionally bounded (inclusive)."""
        ...

    def count_completions(self, *, user_id: int) -> int:
        """Lifetime completion total for the user."""
        ...

    def toggle_completion(
        self, habit_id: int, day: date, *, user_id: int, completed_at: datetime
    ) -> bool:
        """Remove the completion for ``day`` if present, otherwise create it.

        Returns the new completed state.
        """
        ...
