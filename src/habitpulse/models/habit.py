"""Habit tracking data structures."""

from __future__ import annotations

from datetime import date, datetime
from typing import TYPE_CHECKING, ClassVar, Optional

from sqlalchemy import DateTime, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlmodel import Field, Relationship, SQLModel

from ..constants.habits import HabitCategory, HabitFrequency

if TYPE_CHECKING:  # pragma: no cover
    from .user import User


class Habit(SQLModel, table=True):
    """A named, owned, recurring activity the user checks in on."""

    __tablename__: ClassVar[str] = "habit"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", nullable=False, index=True)
    name: str = Field(nullable=False, max_length=100, index=True)
    description: Optional[str] = Field(default=None, max_length=500)
    frequency: str = Field(default=HabitFrequency.DAILY.value, max_length=16)
    category: str = Field(default=HabitCategory.OTHER.value, max_length=32)
    color: Optional[str] = Field(default=None, max_length=32)
    icon: Optional[str] = Field(default=None, max_length=32)
    created_at: datetime = Field(
        default_factory=datetime.now, sa_type=DateTime, nullable=False, index=True
    )

    completions: list["Completion"] = Relationship(
        back_populates="habit",
        sa_relationship=relationship(
            "Completion", back_populates="habit", cascade="all, delete-orphan"
        ),
    )

    user: "User" = Relationship(sa_relationship=relationship("User", back_populates="habits"))

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "userId": self.user_id,
            "name": self.name,
            "description": self.description,
            "frequency": self.frequency,
            "category": self.category,
            "color": self.color,
            "icon": self.icon,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }


class Completion(SQLModel, table=True):
    """A habit marked done on one calendar day.

    ``completed_at`` keeps the wall-clock moment of the check-in (local time of
    the configured day boundary); ``completed_on`` is its calendar day and
    carries the one-per-day unique constraint.
    """

    __tablename__: ClassVar[str] = "completion"
    __table_args__ = (
        UniqueConstraint("habit_id", "completed_on", name="uq_completion_habit_day"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    habit_id: int = Field(foreign_key="habit.id", nullable=False, index=True)
    user_id: int = Field(foreign_key="user.id", nullable=False, index=True)
    completed_at: datetime = Field(sa_type=DateTime, nullable=False, index=True)
    completed_on: date = Field(nullable=False, index=True)

    habit: "Habit" = Relationship(
        back_populates="completions",
        sa_relationship=relationship("Habit", back_populates="completions"),
    )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "habitId": self.habit_id,
            "userId": self.user_id,
            "completedAt": self.completed_at.isoformat(),
            "date": self.completed_on.isoformat(),
        }
