"""Typed application errors and their JSON translation."""

from __future__ import annotations

from flask import Flask, jsonify
from sqlalchemy.exc import SQLAlchemyError

from .logging_config import get_logger

logger = get_logger(__name__)


class HabitPulseError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code = 500
    default_message = "Something went wrong"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict[str, str]:
        return {"error": self.message}


class NotFound(HabitPulseError):
    """Resource is absent or not owned by the caller."""

    status_code = 404
    default_message = "Not found"


class InvalidInput(HabitPulseError):
    """Malformed value or missing required field."""

    status_code = 400
    default_message = "Invalid input"


class Unauthorized(HabitPulseError):
    """No session, or the session user no longer exists."""

    status_code = 401
    default_message = "Authentication required"


class Internal(HabitPulseError):
    """Unexpected data-access failure."""

    status_code = 500
    default_message = "Internal server error"


def register_error_handlers(app: Flask) -> None:
    """Translate typed errors into ``{"error": ...}`` JSON responses."""

    @app.errorhandler(HabitPulseError)
    def _handle_app_error(error: HabitPulseError):
        if error.status_code >= 500:
            logger.error("Request failed", extra={"error": error.message})
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(SQLAlchemyError)
    def _handle_db_error(error: SQLAlchemyError):
        logger.exception("Data access failure")
        wrapped = Internal()
        return jsonify(wrapped.to_dict()), wrapped.status_code

    @app.errorhandler(404)
    def _handle_missing_route(error):
        return jsonify({"error": "Route not found"}), 404

    @app.errorhandler(405)
    def _handle_bad_method(error):
        return jsonify({"error": "Method not allowed"}), 405


__all__ = [
    "HabitPulseError",
    "Internal",
    "InvalidInput",
    "NotFound",
    "Unauthorized",
    "register_error_handlers",
]
