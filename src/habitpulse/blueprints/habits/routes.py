"""Habit routes."""

from __future__ import annotations

from flask import jsonify

from ...extensions import get_dashboard_settings, get_habit_repository
from ...services import habits as habit_service
from ...services.checkins import toggle_check_in
from .. import json_body, validate_form
from ..auth import current_user_id, login_required
from . import bp
from .forms import CheckInForm, HabitForm, HabitUpdateForm


@bp.get("/")
@login_required
def list_habits():
    """Habits newest first, each with streak and completion history."""

    settings = get_dashboard_settings()
    habits = habit_service.list_habits(
        get_habit_repository(), user_id=current_user_id(), tz=settings.tz
    )
    return jsonify({"habits": habits})


@bp.post("/")
@login_required
def create_habit():
    form = validate_form(HabitForm, json_body())
    habit = habit_service.create_habit(
        get_habit_repository(),
        user_id=current_user_id(),
        **form.model_dump(),
    )
    return jsonify({"habit": habit.to_dict()}), 201


@bp.put("/<int:habit_id>")
@login_required
def update_habit(habit_id: int):
    form = validate_form(HabitUpdateForm, json_body())
    habit = habit_service.update_habit(
        get_habit_repository(),
        user_id=current_user_id(),
        habit_id=habit_id,
        changes=form.model_dump(exclude_none=True),
    )
    return jsonify({"habit": habit.to_dict()})


@bp.delete("/<int:habit_id>")
@login_required
def delete_habit(habit_id: int):
    habit_service.delete_habit(get_habit_repository(), user_id=current_user_id(), habit_id=habit_id)
    return jsonify({"message": "Habit deleted successfully"})


@bp.get("/<int:habit_id>/streak")
@login_required
def habit_streak(habit_id: int):
    settings = get_dashboard_settings()
    current, longest = habit_service.habit_streaks(
        get_habit_repository(),
        user_id=current_user_id(),
        habit_id=habit_id,
        tz=settings.tz,
    )
    return jsonify({"streak": current, "longestStreak": longest})


@bp.post("/<int:habit_id>/check-in")
@login_required
def check_in(habit_id: int):
    """Toggle the completion for the given day."""

    form = validate_form(CheckInForm, json_body())
    result = toggle_check_in(
        get_habit_repository(),
        user_id=current_user_id(),
        habit_id=habit_id,
        day=form.date,
        tz=get_dashboard_settings().tz,
    )
    return jsonify(result.to_dict())
