from datetime import datetime
from flask_login import UserMixin
from .extensions import db, login_manager


class Event(db.Model):
    __tablename__ = "events"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(128), nullable=False)
    draw_at = db.Column(db.DateTime, nullable=True)

    # Flipped once by the draw; never reset through normal operation.
    is_drawn = db.Column(db.Boolean, default=False, nullable=False)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "draw_at": self.draw_at.isoformat() if self.draw_at else None,
            "is_drawn": self.is_drawn,
        }


class Participant(UserMixin, db.Model):
    __tablename__ = "participants"

    id = db.Column(db.Integer, primary_key=True)
    event_id = db.Column(db.Integer, db.ForeignKey("events.id", ondelete="CASCADE"), nullable=False)
    name = db.Column(db.String(64), nullable=False)
    email = db.Column(db.String(255), nullable=False)
    photo_url = db.Column(db.String(512), nullable=True)

    # argon2 hash of the login password
    passkey_hash = db.Column(db.String(255), nullable=True)

    registered_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    has_revealed = db.Column(db.Boolean, default=False, nullable=False)

    event = db.relationship("Event", backref=db.backref("participants", lazy="dynamic"))

    __table_args__ = (
        db.UniqueConstraint("event_id", "email", name="uq_participant_event_email"),
    )

    def to_dict(self, private: bool = False) -> dict:
        data = {"id": self.id, "name": self.name, "photo_url": self.photo_url}
        if private:
            data["has_revealed"] = self.has_revealed
        return data


class Match(db.Model):
    """
    One row per giver per event: giver_id gifts to receiver_id.
    """
    __tablename__ = "matches"
    id = db.Column(db.Integer, primary_key=True)

    event_id = db.Column(db.Integer, db.ForeignKey("events.id", ondelete="CASCADE"), nullable=False)
    giver_id = db.Column(db.Integer, db.ForeignKey("participants.id", ondelete="CASCADE"), nullable=False)
    receiver_id = db.Column(db.Integer, db.ForeignKey("participants.id", ondelete="CASCADE"), nullable=False)

    giver = db.relationship("Participant", foreign_keys=[giver_id])
    receiver = db.relationship("Participant", foreign_keys=[receiver_id])

    __table_args__ = (
        db.UniqueConstraint("event_id", "giver_id", name="uq_match_event_giver"),
    )


@login_manager.user_loader
def load_user(user_id: str):
    return db.session.get(Participant, int(user_id))
