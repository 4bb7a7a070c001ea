"""Dashboard statistics routes."""

from __future__ import annotations

from flask import current_app, g, jsonify

from ...extensions import get_dashboard_settings, get_habit_repository
from ...services.dashboard import build_dashboard, five_am_club, running_stats
from ..auth import current_user_id, login_required
from . import bp


def _resolve_stats_builder():
    state = current_app.extensions.get("dashboard", {})
    builder = state.get("stats_builder")
    if callable(builder):
        return builder
    return build_dashboard


@bp.get("/stats")
@login_required
def stats():
    """Active habits, top streak, weekly activity, score change and totals."""

    builder = _resolve_stats_builder()
    summary = builder(
        get_habit_repository(),
        user_id=current_user_id(),
        settings=get_dashboard_settings(),
    )
    return jsonify(summary.to_dict())


@bp.get("/stats/running")
@login_required
def running():
    return jsonify(
        running_stats(
            get_habit_repository(),
            user_id=current_user_id(),
            tz=get_dashboard_settings().tz,
        )
    )


@bp.get("/stats/5am-club")
@login_required
def five_am():
    return jsonify(
        five_am_club(
            get_habit_repository(),
            user_id=current_user_id(),
            username=g.current_user.username,
            tz=get_dashboard_settings().tz,
        )
    )
