"""HabitPulse application factory."""

from __future__ import annotations

from datetime import datetime, timezone
from importlib import import_module
from typing import Iterable

from flask import Flask, jsonify

from .config import BaseConfig, DevConfig, TestConfig

_CONFIG_MAP = {
    "development": DevConfig,
    "testing": TestConfig,
    "default": BaseConfig,
}

API_PREFIX = "/api"


def _resolve_config(name: str | None) -> type[BaseConfig]:
    """Return the config class for the provided environment name."""

    if not name:
        return BaseConfig
    return _CONFIG_MAP.get(name.lower(), BaseConfig)


def _blueprint_paths() -> Iterable[str]:
    """Yield blueprint import paths mounted under ``/api``."""

    yield "habitpulse.blueprints.auth"
    yield "habitpulse.blueprints.habits"
    yield "habitpulse.blueprints.dashboard"


def create_app(config_name: str | None = None) -> Flask:
    """Create and configure the Flask application instance."""

    app = Flask(__name__, instance_relative_config=True)
    config_cls = _resolve_config(config_name)
    config_obj = config_cls()
    app.config.from_object(config_obj)
    app.config["HABITPULSE_CONFIG"] = config_obj
    app.json.sort_keys = False

    # Imported lazily so model classes can be used without building an app.
    from .cli import init_app as init_cli
    from .errors import register_error_handlers
    from .extensions import init_db
    from .logging_config import setup_logging

    setup_logging(config_obj)
    register_error_handlers(app)
    _register_blueprints(app)
    init_db(app)
    init_cli(app)

    @app.get("/")
    def root():
        return jsonify({"message": "HabitPulse API is running"})

    @app.get("/health")
    def health():
        return jsonify({"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()})

    return app


def _register_blueprints(app: Flask) -> None:
    """Import and register all blueprints declared in `_blueprint_paths`."""

    for dotted_path in _blueprint_paths():
        module = import_module(dotted_path)
        blueprint = getattr(module, "bp")
        app.register_blueprint(blueprint, url_prefix=f"{API_PREFIX}{blueprint.url_prefix}")


__all__ = ["BaseConfig", "DevConfig", "TestConfig", "create_app"]
