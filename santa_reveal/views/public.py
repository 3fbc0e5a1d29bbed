from __future__ import annotations

from flask import Blueprint, jsonify
from flask.views import MethodView

from ..models import Participant
from ..policies import current_event, current_event_id


public_bp = Blueprint("public", __name__)


class EventView(MethodView):
    def get(self):
        event = current_event()
        return jsonify(
            event=event.to_dict() if event else None,
            num_participants=Participant.query.filter_by(event_id=current_event_id()).count(),
        )


public_bp.add_url_rule("/api/event", view_func=EventView.as_view("event"))
