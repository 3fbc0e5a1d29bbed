from __future__ import annotations

import random

from flask import current_app

from .draw import DrawService
from .reveal import RevealService
from .store import SqlAssignmentStore, SqlRevealState


def make_draw_service() -> DrawService:
    seed = current_app.config.get("DRAW_RNG_SEED")
    return DrawService(
        SqlAssignmentStore(),
        current_app.config.get("DRAW_SECRET"),
        rng=random.Random(seed),
    )


def make_reveal_service() -> RevealService:
    return RevealService(SqlRevealState())
