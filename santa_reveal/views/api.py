from __future__ import annotations

from flask import Blueprint, current_app, jsonify, request
from flask.views import MethodView
from flask_login import current_user

from ..extensions import csrf
from ..models import Participant
from ..policies import LoginRequiredMixin, current_event, current_event_id
from ..reveal.animation import AnimationConfig
from ..services import make_draw_service, make_reveal_service
from ..services.store import SqlAssignmentStore


api_bp = Blueprint("api", __name__, url_prefix="/api")
csrf.exempt(api_bp)


class DrawView(MethodView):
    """Operator trigger; authorized by the ``secret`` query parameter only."""

    def get(self):
        return self._run()

    def post(self):
        return self._run()

    def _run(self):
        result = make_draw_service().run_draw(current_event_id(), request.args.get("secret"))
        return jsonify(ok=True, count=result.assignment_count)


class RevealView(LoginRequiredMixin):
    def post(self):
        make_reveal_service().commit(current_event_id(), current_user.email)
        return jsonify(ok=True)


class StateView(LoginRequiredMixin):
    def get(self):
        event = current_event()
        participants = (
            Participant.query.filter_by(event_id=current_event_id())
            .order_by(Participant.name.asc())
            .all()
        )

        receiver = None
        if event and event.is_drawn:
            assigned = SqlAssignmentStore().receiver_of(event.id, current_user.id)
            receiver = assigned.to_dict() if assigned is not None else None

        return jsonify(
            event=event.to_dict() if event else None,
            participant=current_user.to_dict(private=True),
            receiver=receiver,
            participants=[p.to_dict() for p in participants],
            animation=AnimationConfig.from_mapping(current_app.config).to_dict(),
        )


api_bp.add_url_rule("/draw", view_func=DrawView.as_view("draw"), methods=["GET", "POST"])
api_bp.add_url_rule("/reveal", view_func=RevealView.as_view("reveal"), methods=["POST"])
api_bp.add_url_rule("/state", view_func=StateView.as_view("state"))
