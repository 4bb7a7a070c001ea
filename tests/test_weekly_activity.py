"""Tests for the per-day activity histogram."""

from __future__ import annotations

from datetime import date, datetime, timedelta

import pytest

from habitpulse.services.activity import activity_window, day_label, weekly_activity

TODAY = date(2024, 1, 10)  # a Wednesday


def test_window_is_contiguous_and_oldest_first():
    window = activity_window(TODAY, 5)
    assert window == [date(2024, 1, 6) + timedelta(days=i) for i in range(5)]


def test_window_rejects_empty_span():
    with pytest.raises(ValueError):
        activity_window(TODAY, 0)


def test_labels_use_weekday_and_day_of_month():
    assert day_label(date(2024, 1, 8)) == "Mon 8"
    assert day_label(date(2024, 1, 10)) == "Wed 10"


def test_no_completions_gives_zero_buckets():
    buckets = weekly_activity([], today=TODAY)
    assert [bucket.value for bucket in buckets] == [0, 0, 0, 0, 0]
    assert [bucket.label for bucket in buckets] == ["Sat 6", "Sun 7", "Mon 8", "Tue 9", "Wed 10"]


@pytest.mark.parametrize("days", [1, 5, 7])
def test_length_matches_window_regardless_of_data(days):
    completions = [TODAY, TODAY - timedelta(days=30)]
    assert len(weekly_activity(completions, today=TODAY, days=days)) == days


def test_counts_completions_per_day():
    completions = [
        datetime(2024, 1, 10, 6, 0),
        datetime(2024, 1, 10, 18, 30),
        datetime(2024, 1, 8, 12, 0),
        datetime(2024, 1, 2, 12, 0),  # outside the window
    ]
    buckets = weekly_activity(completions, today=TODAY)
    assert [b.to_dict() for b in buckets] == [
        {"label": "Sat 6", "value": 0},
        {"label": "Sun 7", "value": 0},
        {"label": "Mon 8", "value": 1},
        {"label": "Tue 9", "value": 0},
        {"label": "Wed 10", "value": 2},
    ]
