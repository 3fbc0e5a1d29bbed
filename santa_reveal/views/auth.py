from __future__ import annotations

from flask import Blueprint, current_app, jsonify, request
from flask.views import MethodView
from flask_login import login_user, logout_user, current_user
from flask_wtf.csrf import generate_csrf

from ..models import Participant
from ..policies import current_event_id
from ..security import verify_password


auth_bp = Blueprint("auth", __name__, url_prefix="/auth")


class CsrfTokenView(MethodView):
    def get(self):
        return jsonify(csrf_token=generate_csrf())


class LoginView(MethodView):
    def post(self):
        data = request.get_json(silent=True) or {}
        email = (data.get("email") or "").strip().lower()
        password = data.get("password") or ""

        if not email or not password:
            return jsonify(error="email_and_password_required"), 400

        user = Participant.query.filter_by(event_id=current_event_id(), email=email).first()
        if not user or not verify_password(password, user.passkey_hash):
            current_app.logger.info("Failed login for %s", email)
            return jsonify(error="invalid_credentials"), 401

        login_user(user)
        return jsonify(ok=True)


class LogoutView(MethodView):
    def post(self):
        if current_user.is_authenticated:
            logout_user()
        return jsonify(ok=True)


auth_bp.add_url_rule("/csrf", view_func=CsrfTokenView.as_view("csrf"))
auth_bp.add_url_rule("/login", view_func=LoginView.as_view("login"), methods=["POST"])
auth_bp.add_url_rule("/logout", view_func=LogoutView.as_view("logout"), methods=["POST"])
