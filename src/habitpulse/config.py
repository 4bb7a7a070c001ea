"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from datetime import tzinfo
from pathlib import Path
from typing import Any, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv
from sqlalchemy.pool import StaticPool

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {value!r}") from exc


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "HabitPulse"
    DB_FILENAME = "habitpulse.db"
    DEBUG = False
    TESTING = False
    SQLITE_PRAGMAS = {"foreign_keys": "on"}

    def __init__(self) -> None:
        self.SECRET_KEY = os.getenv("HABITPULSE_SECRET_KEY", "replace-me")
        self.DATA_DIR = self._resolve_data_dir()
        self.DEV_MODE = _env_bool("HABITPULSE_DEV_MODE", default=True)
        self.DATABASE_URL = os.getenv("HABITPULSE_DATABASE_URL", self._build_sqlite_url())
        self.TIMEZONE = os.getenv("HABITPULSE_TIMEZONE", "").strip()
        self.WEEK_START = _env_int("HABITPULSE_WEEK_START", 6)
        self.ACTIVITY_WINDOW_DAYS = _env_int("HABITPULSE_ACTIVITY_DAYS", 5)
        self.LOG_TO_FILE = _env_bool("HABITPULSE_LOG_TO_FILE", default=True)
        if not self.DEV_MODE and self.SECRET_KEY == "replace-me":
            raise ValueError("HABITPULSE_SECRET_KEY must be set in non-dev mode.")
        if not 0 <= self.WEEK_START <= 6:
            raise ValueError("HABITPULSE_WEEK_START must be between 0 (Monday) and 6 (Sunday).")
        if not 1 <= self.ACTIVITY_WINDOW_DAYS <= 7:
            raise ValueError("HABITPULSE_ACTIVITY_DAYS must be between 1 and 7.")
        # Fail at startup rather than on the first dashboard request.
        self.tzinfo()

    def _resolve_data_dir(self) -> Path:
        """Return the directory where the SQLite file and logs live."""

        data_root = os.getenv("HABITPULSE_DATA_DIR", "instance")
        path = Path(data_root).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    def _build_sqlite_url(self) -> str:
        db_path = self.DATA_DIR / self.DB_FILENAME
        return f"sqlite:///{db_path}"

    def tzinfo(self) -> Optional[tzinfo]:
        """Return the configured day-boundary timezone, or None for server local time."""

        if not self.TIMEZONE:
            return None
        try:
            return ZoneInfo(self.TIMEZONE)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown HABITPULSE_TIMEZONE: {self.TIMEZONE!r}") from exc

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        engine_options: dict[str, Any] = {}
        if self.DATABASE_URL.startswith("sqlite"):
            engine_options["connect_args"] = {"check_same_thread": False}
            if self.DATABASE_URL in {"sqlite://", "sqlite:///:memory:"}:
                # In-memory databases vanish per connection; share one.
                engine_options["poolclass"] = StaticPool
        return engine_options


class DevConfig(BaseConfig):
    """Development configuration using local SQLite."""

    DEBUG = True


class TestConfig(BaseConfig):
    """Configuration for the test-suite: in-memory database, no log files."""

    TESTING = True

    def __init__(self) -> None:
        super().__init__()
        self.DEV_MODE = True
        self.DATABASE_URL = "sqlite://"
        self.LOG_TO_FILE = False
