#!/usr/bin/env python
"""Account pages: registration, login and logout."""

from __future__ import annotations

import logging
import re
from typing import Dict, Tuple
from urllib.parse import urlparse

from flask import Blueprint, flash, redirect, render_template, request, url_for
from flask_login import current_user, login_user, logout_user

from spotie.database.db_manager import User, db

logger = logging.getLogger(__name__)

auth_bp = Blueprint("auth", __name__, url_prefix="/user")
_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _validate_credentials(payload) -> Tuple[str, str, Dict[str, str]]:
    email = (payload.get("email") or "").strip().lower()
    password = (payload.get("password") or "").strip()
    errors: Dict[str, str] = {}
    if not email or not _EMAIL_RE.match(email):
        errors["email"] = "Please provide a valid email address."
    if len(password) < 8:
        errors["password"] = "Password must be at least 8 characters long."
    return email, password, errors


def _safe_next(target: str | None) -> str:
    # Only same-site relative paths are followed after login
    if target:
        parsed = urlparse(target)
        if not parsed.scheme and not parsed.netloc and target.startswith("/"):
            return target
    return url_for("catalog.home")


@auth_bp.route("/register", methods=["GET", "POST"])
def register():
    if request.method == "GET":
        return render_template("user/register.html", title="Sign up", errors={})

    email, password, errors = _validate_credentials(request.form)
    if errors:
        return render_template("user/register.html", title="Sign up", errors=errors, email=email), 400

    existing = User.query.filter_by(email=email).first()
    if existing:
        errors = {"email": "An account with this email already exists."}
        return render_template("user/register.html", title="Sign up", errors=errors, email=email), 409

    user = User(email=email)
    user.set_password(password)
    db.session.add(user)
    db.session.commit()
    logger.info("Registered user %s", email)

    login_user(user, remember=True)
    flash("Welcome to Spotie!", "success")
    return redirect(url_for("catalog.home"))


@auth_bp.route("/login", methods=["GET", "POST"])
def login():
    if request.method == "GET":
        if current_user.is_authenticated:
            return redirect(url_for("catalog.home"))
        return render_template("user/login.html", title="Sign in", errors={}, next=request.args.get("next"))

    email = (request.form.get("email") or "").strip().lower()
    password = (request.form.get("password") or "").strip()
    next_url = request.form.get("next") or request.args.get("next")

    if not email or not password:
        errors = {"form": "Email and password are required."}
        return render_template("user/login.html", title="Sign in", errors=errors, email=email, next=next_url), 400

    user = User.query.filter_by(email=email).first()
    if user is None or not user.check_password(password):
        errors = {"form": "Invalid email or password."}
        return render_template("user/login.html", title="Sign in", errors=errors, email=email, next=next_url), 401

    if not user.is_active:
        errors = {"form": "Account is disabled."}
        return render_template("user/login.html", title="Sign in", errors=errors, email=email, next=next_url), 403

    login_user(user, remember=True)
    return redirect(_safe_next(next_url))


@auth_bp.route("/logout", methods=["POST"])
def logout():
    if current_user.is_authenticated:
        logout_user()
    return redirect(url_for("catalog.home"))


__all__ = ["auth_bp"]
