"""
Habit enumerations shared by forms, services and seed data.
"""

from __future__ import annotations

from enum import Enum


class HabitFrequency(str, Enum):
    """How often a habit is meant to be performed."""

    DAILY = "DAILY"
    WEEKLY = "WEEKLY"


class HabitCategory(str, Enum):
    """Category labels offered by the habit form."""

    HEALTH = "HEALTH"
    FITNESS = "FITNESS"
    PRODUCTIVITY = "PRODUCTIVITY"
    LEARNING = "LEARNING"
    MINDFULNESS = "MINDFULNESS"
    NUTRITION = "NUTRITION"
    SOCIAL = "SOCIAL"
    FINANCE = "FINANCE"
    CREATIVITY = "CREATIVITY"
    OTHER = "OTHER"


HABIT_NAME_MAX_LENGTH = 100

# Shown on the dashboard until the user has a habit to rank.
TOP_HABIT_PLACEHOLDER = {"name": "Start a habit!", "streak": 0, "icon": "\U0001F331"}
