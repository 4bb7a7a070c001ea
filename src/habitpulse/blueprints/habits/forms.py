"""Habit form definitions."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ...constants.habits import HABIT_NAME_MAX_LENGTH, HabitCategory, HabitFrequency


def _check_name(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    if not value:
        raise ValueError("Habit name is required")
    if len(value) > HABIT_NAME_MAX_LENGTH:
        raise ValueError(f"Habit name too long (max {HABIT_NAME_MAX_LENGTH} chars)")
    return value


def _upper(value):
    if isinstance(value, str):
        return value.strip().upper()
    return value


class HabitForm(BaseModel):
    """Body for creating a habit."""

    model_config = ConfigDict(str_strip_whitespace=True, validate_default=True)

    name: str = Field(default="", description="Short label for the habit")
    description: Optional[str] = Field(default=None, max_length=500)
    frequency: HabitFrequency = Field(default=HabitFrequency.DAILY)
    category: HabitCategory = Field(default=HabitCategory.OTHER)
    color: Optional[str] = Field(default=None, max_length=32)
    icon: Optional[str] = Field(default=None, max_length=32)

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        """Require a non-blank name within the length limit."""
        return _check_name(value)

    @field_validator("frequency", "category", mode="before")
    @classmethod
    def normalize_enum(cls, value):
        """Accept enum values in any case."""
        return _upper(value)


class HabitUpdateForm(BaseModel):
    """Body for editing a habit; omitted fields keep their current value."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: Optional[str] = Field(default=None)
    description: Optional[str] = Field(default=None, max_length=500)
    frequency: Optional[HabitFrequency] = Field(default=None)
    category: Optional[HabitCategory] = Field(default=None)
    color: Optional[str] = Field(default=None, max_length=32)
    icon: Optional[str] = Field(default=None, max_length=32)

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: Optional[str]) -> Optional[str]:
        return _check_name(value)

    @field_validator("frequency", "category", mode="before")
    @classmethod
    def normalize_enum(cls, value):
        return _upper(value)


class CheckInForm(BaseModel):
    """Body for the check-in toggle; the day itself is parsed by the service."""

    date: str = Field(default="", description="Calendar day as YYYY-MM-DD")


__all__ = ["CheckInForm", "HabitForm", "HabitUpdateForm"]
