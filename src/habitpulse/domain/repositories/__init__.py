"""Repository protocols consumed by the service layer."""

from .habit import HabitRepository

__all__ = ["HabitRepository"]
