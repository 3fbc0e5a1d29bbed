from __future__ import annotations

from flask import current_app
from flask_login import current_user
from flask.views import MethodView

from .errors import NotFound, Unauthorized
from .extensions import db
from .models import Event


def current_event_id() -> int:
    return int(current_app.config["SANTA_EVENT_ID"])


def current_event() -> Event | None:
    return db.session.get(Event, current_event_id())


class LoginRequiredMixin(MethodView):
    """JSON views: 401 without a session, 404 when the session user is not in this event."""

    def dispatch_request(self, *args, **kwargs):
        if not current_user.is_authenticated:
            raise Unauthorized()
        if current_user.event_id != current_event_id():
            raise NotFound()
        return super().dispatch_request(*args, **kwargs)
