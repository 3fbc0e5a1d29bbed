"""Pytest fixtures: the Flask app on an in-memory SQLite database with one seeded event."""
import pytest

from santa_reveal import create_app
from santa_reveal.extensions import db
from santa_reveal.models import Event, Participant
from santa_reveal.security import hash_password

DRAW_SECRET = "north-pole"
PASSWORD = "hohoho"


@pytest.fixture(scope="function")
def app():
    app = create_app({
        "TESTING": True,
        "SQLALCHEMY_DATABASE_URI": "sqlite://",
        "WTF_CSRF_ENABLED": False,
        "DRAW_SECRET": DRAW_SECRET,
        "SANTA_EVENT_ID": 1,
        "DRAW_RNG_SEED": 1234,
    })
    with app.app_context():
        db.create_all()
        db.session.add(Event(id=1, name="Family Secret Santa"))
        db.session.commit()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture(scope="function")
def client(app):
    return app.test_client()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def add_participants(*names: str, event_id: int = 1, password: str | None = None) -> list[Participant]:
    """Insert participants named ``names``; emails are ``<name>@example.com`` in lower case."""
    passkey_hash = hash_password(password) if password else None
    people = [
        Participant(
            event_id=event_id,
            name=name,
            email=f"{name.lower()}@example.com",
            photo_url=f"https://img.example.com/{name.lower()}.jpg",
            passkey_hash=passkey_hash,
        )
        for name in names
    ]
    db.session.add_all(people)
    db.session.commit()
    return people


def login(client, name: str, password: str = PASSWORD):
    return client.post("/auth/login", json={"email": f"{name.lower()}@example.com", "password": password})
