"""
dailyglow/tests/test_engagement.py

Tests for streak tracking, view history and favorites.
"""

from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from dailyglow.features.engagement.service import (
    EngagementState,
    merge_favorite_order,
    next_milestone,
    recent_affirmation_ids,
    record_view,
    streak_progress,
    streak_tier,
    toggle_favorite,
    update_streak_on_open,
)


class TestStreakOnOpen:
    """Day-boundary streak rules."""

    def test_first_open_starts_at_one(self, fixed_now):
        update = update_streak_on_open(None, 0, fixed_now)
        assert update.streak == 1
        assert update.last_opened_date == fixed_now
        assert not update.celebrate

    def test_same_day_is_idempotent(self, fixed_now):
        first = update_streak_on_open(None, 0, fixed_now)
        second = update_streak_on_open(first.last_opened_date, first.streak, fixed_now)
        later = update_streak_on_open(first.last_opened_date, first.streak, fixed_now + timedelta(hours=10))
        assert second.streak == later.streak == 1
        assert later.last_opened_date == fixed_now

    def test_next_day_increments(self, fixed_now):
        update = update_streak_on_open(fixed_now, 4, fixed_now + timedelta(days=1))
        assert update.streak == 5
        assert update.last_opened_date == fixed_now + timedelta(days=1)

    def test_next_day_counts_calendar_days_not_hours(self):
        late = datetime(2024, 3, 1, 23, 55, tzinfo=timezone.utc)
        early = datetime(2024, 3, 2, 0, 5, tzinfo=timezone.utc)
        assert update_streak_on_open(late, 2, early).streak == 3

    def test_gap_restarts_at_one(self, fixed_now):
        now = fixed_now + timedelta(days=5)
        update = update_streak_on_open(fixed_now, 12, now)
        assert update.streak == 1
        assert update.last_opened_date == now

    def test_clock_going_backwards_changes_nothing(self, fixed_now):
        update = update_streak_on_open(fixed_now, 3, fixed_now - timedelta(days=2))
        assert update.streak == 3
        assert update.last_opened_date == fixed_now

    def test_calendar_timezone_moves_the_boundary(self):
        tz = ZoneInfo("Asia/Tokyo")
        # 14:00 and 16:00 UTC straddle midnight in Tokyo
        first = datetime(2024, 3, 1, 14, 0, tzinfo=timezone.utc)
        second = datetime(2024, 3, 1, 16, 0, tzinfo=timezone.utc)
        assert update_streak_on_open(first, 1, second, tz).streak == 2
        assert update_streak_on_open(first, 1, second).streak == 1

    @pytest.mark.parametrize("previous,celebrate", [(6, True), (13, True), (5, False), (7, False)])
    def test_celebrate_every_seventh_day(self, fixed_now, previous, celebrate):
        update = update_streak_on_open(fixed_now, previous, fixed_now + timedelta(days=1))
        assert update.celebrate is celebrate

    def test_same_day_never_celebrates(self, fixed_now):
        assert not update_streak_on_open(fixed_now, 7, fixed_now).celebrate

    def test_naive_timestamps_are_treated_as_utc(self):
        last = datetime(2024, 3, 1, 9, 0)
        now = datetime(2024, 3, 2, 9, 0, tzinfo=timezone.utc)
        assert update_streak_on_open(last, 1, now).streak == 2


class TestMilestones:
    @pytest.mark.parametrize("streak,expected", [(0, 7), (6, 7), (7, 30), (99, 100), (400, 1000), (5000, 1000)])
    def test_next_milestone(self, streak, expected):
        assert next_milestone(streak) == expected

    def test_progress_is_bounded(self):
        assert streak_progress(0) == 0.0
        assert streak_progress(7) == 0.0
        assert streak_progress(18) == pytest.approx(11 / 23)
        assert streak_progress(5000) == 1.0

    @pytest.mark.parametrize(
        "streak,tier",
        [(0, "none"), (1, "spark"), (7, "flame"), (30, "blaze"), (100, "diamond"), (365, "crown")],
    )
    def test_streak_tier(self, streak, tier):
        assert streak_tier(streak) == tier


class TestViews:
    def test_view_increments_and_appends(self):
        state = record_view("a", EngagementState())
        assert state.total_viewed == 1
        assert state.viewed_ids == ("a",)

    def test_repeat_view_moves_to_end(self):
        state = EngagementState(total_viewed=3, viewed_ids=("a", "b", "c"))
        state = record_view("a", state)
        assert state.viewed_ids == ("b", "c", "a")
        assert state.total_viewed == 4

    def test_history_is_capped(self):
        state = EngagementState()
        for i in range(5):
            state = record_view(f"id-{i}", state, history_limit=3)
        assert state.viewed_ids == ("id-2", "id-3", "id-4")
        assert state.total_viewed == 5

    def test_input_state_unchanged(self):
        state = EngagementState(viewed_ids=("a",))
        record_view("b", state)
        assert state.viewed_ids == ("a",)

    def test_recent_is_most_recent_first(self):
        assert recent_affirmation_ids(["a", "b", "c"], limit=2) == ["c", "b"]


class TestFavorites:
    def test_toggle_adds_then_removes(self):
        empty = EngagementState()
        added = toggle_favorite("id-1", empty)
        assert added.favorite_ids == frozenset({"id-1"})
        removed = toggle_favorite("id-1", added)
        assert removed.favorite_ids == frozenset()

    @pytest.mark.parametrize("favorites", [frozenset(), frozenset({"x"}), frozenset({"x", "y"})])
    @pytest.mark.parametrize("target", ["x", "z"])
    def test_toggle_twice_is_identity(self, favorites, target):
        state = EngagementState(total_viewed=2, viewed_ids=("x",), favorite_ids=favorites)
        assert toggle_favorite(target, toggle_favorite(target, state)) == state

    def test_merge_keeps_existing_order(self):
        assert merge_favorite_order(["c", "a", "b"], frozenset({"a", "c", "d"})) == ["c", "a", "d"]
