from __future__ import annotations

import os
from typing import Mapping

from flask import Flask, jsonify

from .errors import SantaError
from .extensions import db, login_manager, migrate, csrf
from .views.api import api_bp
from .views.auth import auth_bp
from .views.public import public_bp


def create_app(test_config: Mapping | None = None) -> Flask:
    app = Flask(__name__)

    app.config["SECRET_KEY"] = os.environ.get("SECRET_KEY", "dev-secret-change-me")
    app.config["SQLALCHEMY_DATABASE_URI"] = os.environ.get("DATABASE_URL", "sqlite:///secretsanta.db")
    app.config["SQLALCHEMY_TRACK_MODIFICATIONS"] = False

    # Operator secret for /api/draw; empty means nobody can draw
    app.config["DRAW_SECRET"] = os.environ.get("DRAW_SECRET", "").strip()
    app.config["SANTA_EVENT_ID"] = int(os.environ.get("SANTA_EVENT_ID", "1"))
    # Fixed seed makes draws reproducible (tests); unset in production
    app.config["DRAW_RNG_SEED"] = None

    app.config["REVEAL_ITEM_WIDTH"] = float(os.environ.get("REVEAL_ITEM_WIDTH", "97"))
    app.config["REVEAL_DURATION"] = float(os.environ.get("REVEAL_DURATION", "30"))
    app.config["REVEAL_SETTLE_DELAY"] = float(os.environ.get("REVEAL_SETTLE_DELAY", "0.5"))
    app.config["REVEAL_REPEATS"] = int(os.environ.get("REVEAL_REPEATS", "3"))
    app.config["REVEAL_OFFSET_FROM_END"] = int(os.environ.get("REVEAL_OFFSET_FROM_END", "3"))
    app.config["REVEAL_VISIBLE_ITEMS"] = int(os.environ.get("REVEAL_VISIBLE_ITEMS", "3"))

    app.config["LOG_LEVEL"] = os.environ.get("LOG_LEVEL", "INFO").upper()

    if test_config:
        app.config.update(test_config)

    # module loggers (santa_reveal.*) propagate to app.logger and its handler
    app.logger.setLevel(app.config["LOG_LEVEL"])

    db.init_app(app)
    login_manager.init_app(app)
    migrate.init_app(app, db)
    csrf.init_app(app)

    @app.errorhandler(SantaError)
    def handle_santa_error(e: SantaError):
        if e.status_code >= 500:
            app.logger.error("%s: %s", type(e).__name__, e.message)
        return jsonify(e.to_response()), e.status_code

    # Blueprints
    app.register_blueprint(public_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(api_bp)

    from .cli import register_commands
    register_commands(app)

    return app
