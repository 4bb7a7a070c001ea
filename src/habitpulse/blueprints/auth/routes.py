"""Registration, login and session routes."""

from __future__ import annotations

from flask import g, jsonify, session

from ...errors import InvalidInput, Unauthorized
from ...extensions import get_session_factory
from ...services.auth import authenticate, create_user, delete_user
from .. import json_body, validate_form
from . import bp
from .decorators import SESSION_USER_KEY, current_user_id, login_required
from .forms import LoginForm, RegisterForm


@bp.post("/register")
def register():
    """Create an account and start a session for it."""

    form = validate_form(RegisterForm, json_body())
    user = create_user(
        username=form.username,
        email=form.email,
        password=form.password,
        session_factory=get_session_factory(),
    )
    session.clear()
    session[SESSION_USER_KEY] = user.id
    return jsonify({"user": user.to_dict()}), 201


@bp.post("/login")
def login():
    """Check credentials and start a session."""

    try:
        form = validate_form(LoginForm, json_body())
    except InvalidInput as exc:
        raise InvalidInput("Username and password required") from exc
    user = authenticate(
        username=form.username,
        password=form.password,
        session_factory=get_session_factory(),
    )
    if user is None:
        raise Unauthorized("Invalid credentials")
    session.clear()
    session[SESSION_USER_KEY] = user.id
    return jsonify({"user": user.to_dict()})


@bp.post("/logout")
def logout():
    session.clear()
    return jsonify({"message": "Logged out"})


@bp.get("/me")
@login_required
def me():
    return jsonify({"user": g.current_user.to_dict()})


@bp.delete("/delete-account")
@login_required
def delete_account():
    """Remove the signed-in user, their habits and completions, and end the session."""

    delete_user(current_user_id(), get_session_factory())
    session.clear()
    return jsonify({"message": "Account deleted successfully"})
