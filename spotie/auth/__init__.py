#!/usr/bin/env python
"""Authentication utilities and Flask-Login integration."""

from __future__ import annotations

from flask import flash, jsonify, redirect, request, url_for
from flask_login import LoginManager, current_user

login_manager = LoginManager()
login_manager.session_protection = "strong"
login_manager.login_message = None


def current_email() -> str:
    """Email of the signed-in user; only valid behind ``login_required``."""
    return current_user.email


def init_auth(app):
    """Attach Flask-Login to the Flask app."""
    from spotie.database.db_manager import User, db

    login_manager.init_app(app)
    login_manager.login_view = "auth.login"

    @login_manager.user_loader
    def load_user(user_id: str) -> User | None:
        try:
            return db.session.get(User, int(user_id))
        except (TypeError, ValueError):
            return None

    @login_manager.unauthorized_handler
    def _unauthorized():
        if request.path.startswith("/api/"):
            return jsonify({"error": "authentication_required"}), 401
        flash("Please sign in to continue.", "warning")
        return redirect(url_for("auth.login", next=request.path))

    return login_manager


__all__ = ["login_manager", "init_auth", "current_email"]
