"""
dailyglow/tests/test_glow_session.py

GlowSession sequences the pure engines and persists through the gateway.
"""

import random
from datetime import timedelta

import pytest

from dailyglow.core.errors import EmptyPoolError, NotFoundError, ValidationError
from dailyglow.features.affirmations.catalog import load_seed_pool
from dailyglow.features.preferences.store import TODAY_AFFIRMATION_KEY, VIEWED_IDS_KEY
from dailyglow.features.session.service import GlowSession
from dailyglow.models.analytics import AnalyticsWindow
from dailyglow.models.category import Category, Mood
from dailyglow.models.journal import JournalEntryCreate
from dailyglow.models.preferences import OnboardingRequest, PreferencesUpdate


def reopen(gateway, settings, seed=99):
    return GlowSession(gateway, pool=load_seed_pool(), settings=settings, rng=random.Random(seed))


class TestConstruction:
    def test_empty_pool_is_fatal(self, gateway, test_settings):
        with pytest.raises(EmptyPoolError):
            GlowSession(gateway, pool=[], settings=test_settings)

    def test_fresh_session_defaults(self, session):
        assert session.prefs.streak_count == 0
        assert session.viewed_ids == []
        assert session.today_id is None


class TestOpenApp:
    def test_first_open(self, session, fixed_now):
        result = session.open_app(fixed_now)
        assert result.streak.streak == 1
        assert result.streak.next_milestone == 7
        assert result.today.id in {a.id for a in session.pool}

    def test_reopen_same_day_keeps_pick_and_streak(self, session, fixed_now):
        first = session.open_app(fixed_now)
        second = session.open_app(fixed_now + timedelta(hours=8))
        assert second.today.id == first.today.id
        assert second.streak.streak == 1

    def test_consecutive_days_extend_streak(self, session, fixed_now):
        for day in range(7):
            result = session.open_app(fixed_now + timedelta(days=day))
        assert result.streak.streak == 7
        assert result.streak.celebrate
        assert result.streak.tier == "flame"

    def test_state_survives_restart(self, session, gateway, test_settings, fixed_now):
        today = session.open_app(fixed_now).today
        restarted = reopen(gateway, test_settings)

        assert restarted.prefs.streak_count == 1
        assert restarted.today_affirmation(fixed_now).id == today.id
        assert gateway.get(TODAY_AFFIRMATION_KEY) == today.id


class TestDailyPick:
    def test_pick_is_recorded_in_history(self, session, fixed_now):
        pick = session.today_affirmation(fixed_now)
        assert session.viewed_ids[-1] == pick.id
        assert pick.show_count == 1
        assert pick.last_shown == fixed_now

    def test_new_day_avoids_last_week(self, session, fixed_now):
        picks = [session.today_affirmation(fixed_now + timedelta(days=d)).id for d in range(8)]
        # Pool of 45: the window is seven picks wide
        for i in range(7, len(picks)):
            assert picks[i] not in picks[i - 7:i]

    def test_refresh_forces_a_new_pick(self, session, fixed_now):
        first = session.today_affirmation(fixed_now)
        refreshed = session.generate_daily_affirmation(fixed_now)
        assert refreshed.id != first.id
        assert session.today_id == refreshed.id

    def test_preferred_categories_drive_the_pick(self, session, fixed_now):
        session.today_affirmation(fixed_now)
        session.update_preferences(PreferencesUpdate(selected_categories=[Category.GRATITUDE]))
        assert session.last_refresh is None
        assert session.today_affirmation(fixed_now).category == Category.GRATITUDE


class TestViewsAndFavorites:
    def test_view_counts(self, session, fixed_now):
        target = session.pool[0]
        session.view(target.id, fixed_now)
        session.view(target.id, fixed_now)
        assert session.prefs.total_affirmations_viewed == 2
        assert session.viewed_ids.count(target.id) == 1
        assert session.recent()[0].id == target.id

    def test_unknown_id_raises_not_found(self, session, fixed_now):
        with pytest.raises(NotFoundError):
            session.view("no-such-id", fixed_now)
        with pytest.raises(NotFoundError):
            session.toggle_favorite("no-such-id")

    def test_toggle_favorite_round_trip(self, session, gateway):
        target = session.pool[3].id
        assert session.toggle_favorite(target) is True
        assert [a.id for a in session.favorites()] == [target]
        assert session.toggle_favorite(target) is False
        assert session.favorites() == []
        assert gateway.load_preferences().favorite_affirmation_ids == []

    def test_favorites_keep_order(self, session):
        ids = [session.pool[5].id, session.pool[1].id, session.pool[9].id]
        for affirmation_id in ids:
            session.toggle_favorite(affirmation_id)
        assert [a.id for a in session.favorites()] == ids

    def test_statistics_and_export(self, session, fixed_now):
        session.open_app(fixed_now)
        session.view(session.pool[0].id, fixed_now)
        session.toggle_favorite(session.pool[0].id)
        stats = session.statistics()
        assert stats.total_viewed == 1
        assert stats.favorite_count == 1
        assert session.pool[0].text in session.export_favorites(fixed_now)


class TestJournal:
    def test_add_and_analyze(self, session, fixed_now):
        session.add_journal_entry(
            JournalEntryCreate(content="Grateful for sunshine", mood=Mood.GRATEFUL, gratitude=["sun", " "]),
            fixed_now,
        )
        analytics = session.journal_analytics(AnalyticsWindow.WEEK, fixed_now)
        assert analytics.entry_count == 1
        assert analytics.summary.total_gratitude_items == 1
        assert [w.word for w in analytics.words] == ["grateful", "sunshine"]

    def test_entry_with_unknown_affirmation_rejected(self, session, fixed_now):
        with pytest.raises(NotFoundError):
            session.add_journal_entry(JournalEntryCreate(content="x", affirmation_id="missing"), fixed_now)

    def test_delete_entry(self, session, fixed_now):
        entry = session.add_journal_entry(JournalEntryCreate(content="temp"), fixed_now)
        session.delete_journal_entry(entry.id)
        assert session.prefs.journal_entries == []
        with pytest.raises(NotFoundError):
            session.delete_journal_entry(entry.id)


class TestAchievementsAndReset:
    def test_unlocks_are_persisted_once(self, session, gateway, fixed_now):
        session.view(session.pool[0].id, fixed_now)
        first = session.achievements(fixed_now)
        second = session.achievements(fixed_now + timedelta(days=1))

        assert "first_glow" in first.newly_unlocked
        assert second.newly_unlocked == []
        assert gateway.load_preferences().achievement_unlocks["first_glow"] == fixed_now

    def test_reset_keeps_profile_and_journal(self, session, fixed_now):
        session.update_preferences(PreferencesUpdate(user_name="Noor"))
        session.open_app(fixed_now)
        session.toggle_favorite(session.pool[0].id)
        session.add_journal_entry(JournalEntryCreate(content="kept"), fixed_now)

        today = session.reset_all_data(fixed_now)

        assert session.prefs.user_name == "Noor"
        assert len(session.prefs.journal_entries) == 1
        assert session.prefs.streak_count == 0
        assert session.prefs.favorite_affirmation_ids == []
        assert session.viewed_ids == [today.id]

    def test_onboarding(self, session, gateway, fixed_now):
        result = session.complete_onboarding(
            OnboardingRequest(user_name="Lee", selected_categories=[Category.PEACE]),
            fixed_now,
        )
        assert session.prefs.onboarding_completed
        assert result.today.category == Category.PEACE
        assert result.streak.streak == 1
        assert gateway.get(VIEWED_IDS_KEY) == [result.today.id]


class TestPreferenceValidation:
    def test_invalid_merge_raises_app_validation_error(self, session):
        # model_construct skips request-level validation, so the merged blob is what rejects it
        changes = PreferencesUpdate.model_construct(daily_affirmation_count=50)
        with pytest.raises(ValidationError) as excinfo:
            session.update_preferences(changes)
        assert excinfo.value.status_code == 400
        assert "daily_affirmation_count" in excinfo.value.message
        assert session.prefs.daily_affirmation_count == 3

    def test_none_values_leave_preferences_unchanged(self, session):
        session.update_preferences(PreferencesUpdate(user_name="Ola"))
        session.update_preferences(PreferencesUpdate(user_name=None, sound_enabled=None))
        assert session.prefs.user_name == "Ola"
        assert session.prefs.sound_enabled is True

    def test_time_of_day_pick(self, session, fixed_now):
        # 09:30 UTC is a morning hour
        pick = session.time_of_day_affirmation(fixed_now)
        assert pick.category in {Category.MOTIVATION, Category.SUCCESS, Category.GRATITUDE, Category.HEALTH}
