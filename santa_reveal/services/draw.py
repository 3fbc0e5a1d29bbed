from __future__ import annotations

import logging
import random
from dataclasses import dataclass

from ..draw import draw
from ..errors import PartialDrawFailure, PersistenceFailure, Unauthorized
from ..security import check_draw_secret


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DrawResult:
    event_id: int
    assignment_count: int


class DrawService:
    """
    Runs the draw for one event behind the shared-secret check.

    The sequence read participants -> draw -> write matches -> flag event is
    not one transaction. Matches are replaced by (event_id, giver_id) and the
    flag is a plain overwrite, so a failed or concurrent run is repaired by
    running the draw again; the last write wins.
    """

    def __init__(self, store, secret: str | None, rng: random.Random | None = None):
        self.store = store
        self.secret = secret
        self.rng = rng or random.Random()

    def run_draw(self, event_id: int, credential: str | None) -> DrawResult:
        if not check_draw_secret(credential, self.secret):
            logger.warning("Draw for event %s rejected: bad secret", event_id)
            raise Unauthorized()

        ids = self.store.participant_ids(event_id)
        assignment = draw(ids, rng=self.rng)

        self.store.replace_assignments(event_id, assignment)
        try:
            self.store.mark_drawn(event_id)
        except PersistenceFailure as e:
            logger.error(
                "Event %s: %d matches saved but is_drawn not set; rerun the draw",
                event_id, len(assignment),
            )
            raise PartialDrawFailure(
                "Matches were saved but the event could not be flagged as drawn. Run the draw again."
            ) from e

        logger.info("Draw for event %s completed with %d matches", event_id, len(assignment))
        return DrawResult(event_id=event_id, assignment_count=len(assignment))
