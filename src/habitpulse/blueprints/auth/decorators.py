"""Session helpers shared by protected blueprints."""

from __future__ import annotations

from functools import wraps
from typing import Callable, TypeVar

from flask import g, session

from ...errors import Unauthorized
from ...extensions import get_session_factory
from ...services.auth import get_user

F = TypeVar("F", bound=Callable)

SESSION_USER_KEY = "user_id"


def login_required(view: F) -> F:
    """Reject the request with Unauthorized unless a live user is in the session."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        user_id = session.get(SESSION_USER_KEY)
        if user_id is None:
            raise Unauthorized()
        user = get_user(int(user_id), get_session_factory())
        if user is None:
            session.pop(SESSION_USER_KEY, None)
            raise Unauthorized("Session is no longer valid")
        g.current_user = user
        return view(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def current_user_id() -> int:
    """ID of the user attached by ``login_required``."""
    return g.current_user.id
