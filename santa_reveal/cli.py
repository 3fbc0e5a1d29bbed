from __future__ import annotations

import click
from flask import Flask, current_app

from .errors import SantaError
from .extensions import db
from .services import make_draw_service


def register_commands(app: Flask) -> None:
    @app.cli.command("init-db")
    def init_db():
        """Create all tables (use Flask-Migrate for real deployments)."""
        db.create_all()
        click.echo("Database tables created.")

    @app.cli.command("draw")
    @click.option("--event-id", type=int, default=None, help="Defaults to SANTA_EVENT_ID.")
    def run_draw(event_id: int | None):
        """Run the draw with the configured DRAW_SECRET."""
        event_id = event_id or int(current_app.config["SANTA_EVENT_ID"])
        try:
            result = make_draw_service().run_draw(event_id, current_app.config.get("DRAW_SECRET"))
        except SantaError as e:
            raise click.ClickException(f"{e.reason}: {e.message}") from e
        click.echo(f"Draw complete: {result.assignment_count} matches for event {event_id}.")
