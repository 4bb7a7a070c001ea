"""Database and repository wiring for the Flask app."""

from __future__ import annotations

from flask import Flask, current_app

from .config import BaseConfig
from .domain.repositories.habit import HabitRepository
from .infra.database import SessionFactory, bootstrap_database
from .infra.repositories.habit import SQLModelHabitRepository
from .services.dashboard import DashboardSettings

EXTENSION_KEY = "habitpulse"


def init_db(app: Flask) -> None:
    """Create the engine, the schema and the default repository for the app."""

    config: BaseConfig = app.config["HABITPULSE_CONFIG"]
    engine, session_factory = bootstrap_database(config)
    app.extensions[EXTENSION_KEY] = {
        "engine": engine,
        "session_factory": session_factory,
        "habit_repository": SQLModelHabitRepository(session_factory),
    }


def _state() -> dict:
    state = current_app.extensions.get(EXTENSION_KEY)
    if state is None:  # pragma: no cover - exercised only when init_db was skipped
        raise RuntimeError("Database not initialized")
    return state


def get_session_factory() -> SessionFactory:
    """Session factory bound to the current app's engine."""
    return _state()["session_factory"]


def get_habit_repository() -> HabitRepository:
    """Repository injected into services; tests may swap it on ``app.extensions``."""
    return _state()["habit_repository"]


def get_dashboard_settings() -> DashboardSettings:
    return DashboardSettings.from_config(current_app.config["HABITPULSE_CONFIG"])
