from __future__ import annotations

import logging

from ..errors import NotFound, Unauthorized


logger = logging.getLogger(__name__)


class RevealService:
    """Records that a participant has watched their reveal."""

    def __init__(self, state):
        self.state = state

    def commit(self, event_id: int, email: str | None) -> None:
        if not email:
            raise Unauthorized()

        participant = self.state.find_participant(event_id, email)
        if participant is None:
            raise NotFound()

        if participant.has_revealed:
            return

        self.state.mark_revealed(participant.id)
        logger.info("Participant %s revealed their match", participant.id)
