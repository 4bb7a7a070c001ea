"""Flask CLI commands for HabitPulse."""

from __future__ import annotations

import click


def init_app(app) -> None:
    """Register CLI commands on the Flask app."""

    @app.cli.command("habitpulse-init-db")
    def habitpulse_init_db() -> None:
        """Create database tables."""

        from .extensions import EXTENSION_KEY
        from .infra.database import init_database

        init_database(app.extensions[EXTENSION_KEY]["engine"])
        click.echo("Database schema ready.")

    @app.cli.command("habitpulse-seed")
    @click.option("--demo", is_flag=True, default=False, help="Seed the demo user and habits")
    @click.option("--days", default=28, show_default=True, help="Days of check-in history")
    def habitpulse_seed(demo: bool, days: int) -> None:
        """Seed application data (demo)."""

        if not demo:
            click.echo("No action specified. Use --demo to seed demo data.")
            return

        # Import here to avoid circular imports at module import time
        from .extensions import EXTENSION_KEY
        from .services.seed import DEMO_PASSWORD, seed_demo

        user = seed_demo(app.extensions[EXTENSION_KEY]["session_factory"], days=days)
        click.echo(f"Demo user '{user.username}' ready (password: {DEMO_PASSWORD}).")
