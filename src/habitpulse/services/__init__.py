"""Service layer: calculators, check-ins, habit CRUD and auth."""

from .activity import ActivityBucket, weekly_activity
from .checkins import CheckInResult, parse_day, toggle_check_in
from .dashboard import DashboardSettings, DashboardStats, build_dashboard
from .scores import score_change, week_bounds, weekly_counts
from .streaks import compute_streaks, current_streak, longest_streak, normalize_day

__all__ = [
    "ActivityBucket",
    "CheckInResult",
    "DashboardSettings",
    "DashboardStats",
    "build_dashboard",
    "compute_streaks",
    "current_streak",
    "longest_streak",
    "normalize_day",
    "parse_day",
    "score_change",
    "toggle_check_in",
    "week_bounds",
    "weekly_activity",
    "weekly_counts",
]
