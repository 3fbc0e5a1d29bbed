from __future__ import annotations


class SantaError(RuntimeError):
    """
    Base of every failure surfaced to a caller.

    Each subclass carries the HTTP status and the short machine-readable
    reason the views answer with. None of them is retried by the server.
    """
    status_code = 500
    reason = "internal_error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.reason)
        self.message = message or self.reason

    def to_response(self) -> dict:
        return {"error": self.reason}


class Unauthorized(SantaError):
    status_code = 401
    reason = "unauthorized"


class NotFound(SantaError):
    status_code = 404
    reason = "participant_not_found"


class InsufficientParticipants(SantaError):
    status_code = 400
    reason = "insufficient_participants"

    def to_response(self) -> dict:
        return {"error": self.message}


class PersistenceFailure(SantaError):
    status_code = 500
    reason = "persistence_failure"

    def to_response(self) -> dict:
        return {"error": self.message}


class PartialDrawFailure(PersistenceFailure):
    """Assignments were written but the event flag was not; retrying the draw is safe."""
    reason = "partial_draw"

    def to_response(self) -> dict:
        return {"error": self.reason, "detail": self.message}
