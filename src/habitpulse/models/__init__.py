"""SQLModel table exports."""

from .habit import Completion, Habit
from .user import User

__all__ = [
    "Completion",
    "Habit",
    "User",
]
