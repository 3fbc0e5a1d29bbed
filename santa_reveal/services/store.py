from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError

from ..errors import PersistenceFailure
from ..extensions import db
from ..models import Event, Match, Participant


logger = logging.getLogger(__name__)


class SqlAssignmentStore:
    """Matches and the event ``is_drawn`` flag, backed by the SQLAlchemy session."""

    def __init__(self, session=None):
        self.session = session or db.session

    def participant_ids(self, event_id: int) -> list[int]:
        try:
            rows = (
                self.session.query(Participant.id)
                .filter(Participant.event_id == event_id)
                .order_by(Participant.id.asc())
                .all()
            )
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.exception("Loading participants of event %s failed", event_id)
            raise PersistenceFailure("Could not load participants.") from e
        return [pid for (pid,) in rows]

    def replace_assignments(self, event_id: int, assignment: dict[int, int]) -> None:
        """
        Upsert one row per giver and drop rows of givers no longer drawn.

        Everything lands in a single commit, so the table never holds a mix
        of two draws for the same event.
        """
        try:
            existing = {
                m.giver_id: m
                for m in self.session.query(Match).filter(Match.event_id == event_id).all()
            }
            for giver_id, receiver_id in assignment.items():
                row = existing.pop(giver_id, None)
                if row is None:
                    self.session.add(Match(event_id=event_id, giver_id=giver_id, receiver_id=receiver_id))
                else:
                    row.receiver_id = receiver_id
            for stale in existing.values():
                self.session.delete(stale)
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.exception("Writing matches of event %s failed", event_id)
            raise PersistenceFailure("Could not save matches.") from e

    def mark_drawn(self, event_id: int) -> None:
        try:
            updated = (
                self.session.query(Event)
                .filter(Event.id == event_id)
                .update({"is_drawn": True}, synchronize_session=False)
            )
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.exception("Flagging event %s as drawn failed", event_id)
            raise PersistenceFailure("Could not flag the event as drawn.") from e
        if not updated:
            raise PersistenceFailure(f"Event {event_id} does not exist.")

    def assignments(self, event_id: int) -> dict[int, int]:
        rows = self.session.query(Match).filter(Match.event_id == event_id).all()
        return {m.giver_id: m.receiver_id for m in rows}

    def receiver_of(self, event_id: int, giver_id: int) -> Participant | None:
        match = (
            self.session.query(Match)
            .filter(Match.event_id == event_id, Match.giver_id == giver_id)
            .first()
        )
        return match.receiver if match else None


class SqlRevealState:
    """Per-participant ``has_revealed`` flag."""

    def __init__(self, session=None):
        self.session = session or db.session

    def find_participant(self, event_id: int, email: str) -> Participant | None:
        try:
            return (
                self.session.query(Participant)
                .filter(Participant.event_id == event_id, Participant.email == email)
                .first()
            )
        except SQLAlchemyError as e:
            self.session.rollback()
            raise PersistenceFailure("update_failed") from e

    def mark_revealed(self, participant_id: int) -> None:
        # Only ever sets the flag; a second call leaves the row as it is.
        try:
            self.session.query(Participant).filter(Participant.id == participant_id).update(
                {"has_revealed": True}, synchronize_session=False
            )
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.exception("Saving reveal of participant %s failed", participant_id)
            raise PersistenceFailure("update_failed") from e
