"""HTTP surface: draw trigger, reveal commit, state and login."""
import pytest

from santa_reveal.errors import PersistenceFailure
from santa_reveal.extensions import db
from santa_reveal.models import Event, Match, Participant
from santa_reveal.services.store import SqlAssignmentStore, SqlRevealState
from tests.conftest import DRAW_SECRET, PASSWORD, add_participants, login


def _draw(client, secret=DRAW_SECRET, method="get"):
    return getattr(client, method)(f"/api/draw?secret={secret}")


class TestDrawEndpoint:

    @pytest.mark.parametrize("method", ["get", "post"])
    def test_draw_success(self, client, method):
        add_participants("A", "B", "C")
        resp = _draw(client, method=method)
        assert resp.status_code == 200
        assert resp.get_json() == {"ok": True, "count": 3}
        assert db.session.get(Event, 1).is_drawn is True

    def test_wrong_secret(self, client):
        add_participants("A", "B", "C")
        resp = _draw(client, secret="elf")
        assert resp.status_code == 401
        assert resp.get_json() == {"error": "unauthorized"}
        assert Match.query.count() == 0
        assert db.session.get(Event, 1).is_drawn is False

    def test_missing_secret(self, client):
        resp = client.get("/api/draw")
        assert resp.status_code == 401

    @pytest.mark.parametrize("names", [(), ("Solo",)])
    def test_too_few_participants(self, client, names):
        add_participants(*names)
        resp = _draw(client)
        assert resp.status_code == 400
        assert "error" in resp.get_json()
        assert Match.query.count() == 0
        assert db.session.get(Event, 1).is_drawn is False

    def test_persistence_failure(self, client, monkeypatch):
        add_participants("A", "B")

        def broken(self, event_id, assignment):
            raise PersistenceFailure("Could not save matches.")

        monkeypatch.setattr(SqlAssignmentStore, "replace_assignments", broken)
        resp = _draw(client)
        assert resp.status_code == 500
        assert resp.get_json() == {"error": "Could not save matches."}

    def test_partial_draw(self, client, monkeypatch):
        add_participants("A", "B", "C")

        def broken(self, event_id):
            raise PersistenceFailure("Could not flag the event as drawn.")

        monkeypatch.setattr(SqlAssignmentStore, "mark_drawn", broken)
        resp = _draw(client)
        assert resp.status_code == 500
        body = resp.get_json()
        assert body["error"] == "partial_draw"
        assert "Run the draw again" in body["detail"]
        assert Match.query.filter_by(event_id=1).count() == 3
        assert db.session.get(Event, 1).is_drawn is False

        monkeypatch.undo()
        assert _draw(client).status_code == 200
        assert db.session.get(Event, 1).is_drawn is True
        assert Match.query.filter_by(event_id=1).count() == 3

    def test_end_to_end_four_participants(self, client):
        people = add_participants("A", "B", "C", "D")
        ids = {p.id for p in people}

        for _ in range(2):
            assert _draw(client).get_json() == {"ok": True, "count": 4}
            rows = Match.query.filter_by(event_id=1).all()
            assert len(rows) == 4
            assert {m.giver_id for m in rows} == ids
            assert {m.receiver_id for m in rows} == ids
            assert all(m.giver_id != m.receiver_id for m in rows)


class TestRevealEndpoint:

    def test_requires_session(self, client):
        resp = client.post("/api/reveal")
        assert resp.status_code == 401
        assert resp.get_json() == {"error": "unauthorized"}

    def test_commit_is_idempotent(self, client):
        add_participants("A", "B", password=PASSWORD)
        assert login(client, "A").status_code == 200

        for _ in range(2):
            resp = client.post("/api/reveal")
            assert resp.status_code == 200
            assert resp.get_json() == {"ok": True}

        db.session.expire_all()
        a = Participant.query.filter_by(email="a@example.com").one()
        b = Participant.query.filter_by(email="b@example.com").one()
        assert a.has_revealed is True
        assert b.has_revealed is False

    def test_participant_of_another_event(self, app, client):
        db.session.add(Event(id=2, name="Office"))
        db.session.commit()
        add_participants("Zed", event_id=2, password=PASSWORD)
        app.config["SANTA_EVENT_ID"] = 2
        assert login(client, "Zed").status_code == 200
        app.config["SANTA_EVENT_ID"] = 1

        resp = client.post("/api/reveal")
        assert resp.status_code == 404
        assert resp.get_json() == {"error": "participant_not_found"}

    def test_update_failure(self, client, monkeypatch):
        add_participants("A", "B", password=PASSWORD)
        login(client, "A")

        def broken(self, participant_id):
            raise PersistenceFailure("update_failed")

        monkeypatch.setattr(SqlRevealState, "mark_revealed", broken)
        resp = client.post("/api/reveal")
        assert resp.status_code == 500
        assert resp.get_json() == {"error": "update_failed"}


class TestStateEndpoint:

    def test_requires_session(self, client):
        assert client.get("/api/state").status_code == 401

    def test_before_draw(self, client):
        add_participants("Bia", "Ana", password=PASSWORD)
        login(client, "Ana")
        data = client.get("/api/state").get_json()
        assert data["event"]["is_drawn"] is False
        assert data["receiver"] is None
        assert data["participant"]["name"] == "Ana"
        assert data["participant"]["has_revealed"] is False
        assert [p["name"] for p in data["participants"]] == ["Ana", "Bia"]
        assert data["animation"]["repeats"] == 3
        assert data["animation"]["offset_from_end"] == 3

    def test_after_draw(self, client):
        add_participants("Ana", "Bia", password=PASSWORD)
        _draw(client)
        login(client, "Ana")
        data = client.get("/api/state").get_json()
        assert data["event"]["is_drawn"] is True
        assert data["receiver"]["name"] == "Bia"
        assert "email" not in data["receiver"]


class TestAuth:

    def test_login_requires_fields(self, client):
        assert client.post("/auth/login", json={"email": "a@example.com"}).status_code == 400

    def test_login_bad_password(self, client):
        add_participants("A", password=PASSWORD)
        assert login(client, "A", password="nope").status_code == 401

    def test_login_unknown_email(self, client):
        assert login(client, "Nobody").status_code == 401

    def test_logout(self, client):
        add_participants("A", password=PASSWORD)
        login(client, "A")
        assert client.get("/api/state").status_code == 200
        client.post("/auth/logout")
        assert client.get("/api/state").status_code == 401


def test_public_event(client):
    add_participants("A", "B")
    data = client.get("/api/event").get_json()
    assert data["event"]["name"] == "Family Secret Santa"
    assert data["num_participants"] == 2
