"""
dailyglow/features/session/service.py

GlowSession: the one authoritative in-memory view of user state for an
installation. Holds the affirmation pool, the preferences blob, the viewed
history and today's pick, and writes every change of consequence back
through the persistence gateway.

The engines it calls are pure; this class only sequences them.
"""

from __future__ import annotations

import random
from datetime import datetime
from typing import Dict, List, Optional

import pydantic
from pydantic import BaseModel, ConfigDict

from dailyglow.core.config import Settings, settings as default_settings
from dailyglow.core.errors import NotFoundError, ValidationError
from dailyglow.core.logging import log_event
from dailyglow.features.achievements.service import summarize_achievements
from dailyglow.features.affirmations import service as affirmations
from dailyglow.features.affirmations.catalog import load_seed_pool
from dailyglow.features.engagement import service as engagement
from dailyglow.features.journal import reducers, service as journal
from dailyglow.features.preferences.store import (
    LAST_REFRESH_KEY,
    TODAY_AFFIRMATION_KEY,
    VIEWED_IDS_KEY,
    PreferencesGateway,
)
from dailyglow.models.achievement import AchievementSummary, EngagementCounters
from dailyglow.models.affirmation import Affirmation
from dailyglow.models.analytics import AnalyticsWindow, JournalAnalytics
from dailyglow.models.journal import JournalEntry, JournalEntryCreate
from dailyglow.models.preferences import OnboardingRequest, PreferencesUpdate, UserPreferences


_CLEARABLE_PREFERENCES = frozenset({"current_mood", "premium_expiration_date"})


class StreakState(BaseModel):
    model_config = ConfigDict(frozen=True)

    streak: int
    last_opened_date: Optional[datetime] = None
    celebrate: bool = False
    next_milestone: int
    milestone_progress: float
    tier: str


class OpenResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    streak: StreakState
    today: Affirmation


class GlowSession:
    def __init__(
        self,
        gateway: PreferencesGateway,
        pool: Optional[List[Affirmation]] = None,
        settings: Optional[Settings] = None,
        rng: Optional[random.Random] = None,
    ):
        self.gateway = gateway
        self.pool: List[Affirmation] = pool if pool is not None else load_seed_pool()
        affirmations.validate_pool(self.pool)
        self.settings = settings or default_settings
        self.rng = rng or random.Random()
        self._by_id: Dict[str, Affirmation] = {a.id: a for a in self.pool}

        self.prefs: UserPreferences = UserPreferences()
        self.viewed_ids: List[str] = []
        self.today_id: Optional[str] = None
        self.last_refresh: Optional[datetime] = None
        self.load()

    # Persistence ------------------------------------------------------
    def load(self) -> None:
        self.prefs = self.gateway.load_preferences()
        viewed = self.gateway.get(VIEWED_IDS_KEY, [])
        self.viewed_ids = [i for i in viewed if isinstance(i, str)] if isinstance(viewed, list) else []
        today = self.gateway.get(TODAY_AFFIRMATION_KEY)
        self.today_id = today if isinstance(today, str) else None
        self.last_refresh = self.gateway.get_datetime(LAST_REFRESH_KEY)

    def persist(self) -> None:
        self.gateway.save_preferences(self.prefs)
        self.gateway.set(VIEWED_IDS_KEY, self.viewed_ids)
        if self.today_id:
            self.gateway.set(TODAY_AFFIRMATION_KEY, self.today_id)
        else:
            self.gateway.remove(TODAY_AFFIRMATION_KEY)
        self.gateway.set_datetime(LAST_REFRESH_KEY, self.last_refresh)

    # Helpers ----------------------------------------------------------
    @property
    def tz(self):
        return self.settings.calendar_tz

    def get_affirmation(self, affirmation_id: str) -> Affirmation:
        affirmation = self._by_id.get(affirmation_id)
        if affirmation is None:
            raise NotFoundError(f"Affirmation {affirmation_id} not found")
        return affirmation

    def engagement_state(self) -> engagement.EngagementState:
        return engagement.EngagementState(
            total_viewed=self.prefs.total_affirmations_viewed,
            viewed_ids=tuple(self.viewed_ids),
            favorite_ids=frozenset(self.prefs.favorite_affirmation_ids),
        )

    def _apply_engagement(self, state: engagement.EngagementState) -> None:
        self.viewed_ids = list(state.viewed_ids)
        self.prefs = self.prefs.model_copy(
            update={
                "total_affirmations_viewed": state.total_viewed,
                "favorite_affirmation_ids": engagement.merge_favorite_order(
                    self.prefs.favorite_affirmation_ids, state.favorite_ids
                ),
            }
        )

    def _streak_state(self, celebrate: bool = False) -> StreakState:
        streak = self.prefs.streak_count
        return StreakState(
            streak=streak,
            last_opened_date=self.prefs.last_opened_date,
            celebrate=celebrate,
            next_milestone=engagement.next_milestone(streak),
            milestone_progress=engagement.streak_progress(streak),
            tier=engagement.streak_tier(streak),
        )

    # Streaks ----------------------------------------------------------
    def check_in(self, now: datetime) -> StreakState:
        update = engagement.update_streak_on_open(
            self.prefs.last_opened_date,
            self.prefs.streak_count,
            now,
            self.tz,
            celebration_interval=self.settings.STREAK_CELEBRATION_INTERVAL,
        )
        if update.last_opened_date != self.prefs.last_opened_date or update.streak != self.prefs.streak_count:
            self.prefs = self.prefs.model_copy(
                update={"streak_count": update.streak, "last_opened_date": update.last_opened_date}
            )
            log_event("info", "streak.updated", event_type="streak.updated", extra={"streak": update.streak})
        if update.celebrate:
            log_event("info", "streak.milestone", event_type="streak.milestone", extra={"streak": update.streak})
        return self._streak_state(celebrate=update.celebrate)

    def streak(self) -> StreakState:
        return self._streak_state()

    def open_app(self, now: datetime) -> OpenResult:
        state = self.check_in(now)
        today = self.today_affirmation(now, persist=False)
        self.persist()
        return OpenResult(streak=state, today=today)

    # Daily affirmation ------------------------------------------------
    def today_affirmation(self, now: datetime, *, persist: bool = True) -> Affirmation:
        if (
            self.today_id in self._by_id
            and affirmations.is_daily_affirmation_still_valid(self.last_refresh, now, self.tz)
        ):
            return self._by_id[self.today_id]
        return self.generate_daily_affirmation(now, persist=persist)

    def generate_daily_affirmation(self, now: datetime, *, persist: bool = True) -> Affirmation:
        candidates, reset = affirmations.plan_daily_selection(
            self.pool,
            self.viewed_ids,
            self.prefs.selected_categories,
            repeat_window=self.settings.RECENT_REPEAT_WINDOW,
        )
        if reset:
            self.viewed_ids = []
        chosen = self.rng.choice(candidates)

        self.today_id = chosen.id
        self.last_refresh = now
        chosen.mark_as_shown(now)
        history = [i for i in self.viewed_ids if i != chosen.id] + [chosen.id]
        self.viewed_ids = history[-self.settings.VIEW_HISTORY_LIMIT:]

        log_event(
            "info",
            "affirmation.selected",
            event_type="affirmation.selected",
            affirmation_id=chosen.id,
            extra={"history_reset": reset, "candidates": len(candidates)},
        )
        if persist:
            self.persist()
        return chosen

    # Views and favorites ----------------------------------------------
    def view(self, affirmation_id: str, now: datetime) -> Affirmation:
        affirmation = self.get_affirmation(affirmation_id)
        state = engagement.record_view(
            affirmation_id,
            self.engagement_state(),
            history_limit=self.settings.VIEW_HISTORY_LIMIT,
        )
        self._apply_engagement(state)
        affirmation.mark_as_shown(now)
        self.persist()
        return affirmation

    def toggle_favorite(self, affirmation_id: str) -> bool:
        self.get_affirmation(affirmation_id)
        state = engagement.toggle_favorite(affirmation_id, self.engagement_state())
        self._apply_engagement(state)
        self.persist()
        is_favorite = affirmation_id in state.favorite_ids
        log_event(
            "info",
            "favorite.toggled",
            event_type="favorite.toggled",
            affirmation_id=affirmation_id,
            extra={"is_favorite": is_favorite},
        )
        return is_favorite

    def favorites(self) -> List[Affirmation]:
        return affirmations.favorite_affirmations(self.pool, self.prefs.favorite_affirmation_ids)

    def recent(self) -> List[Affirmation]:
        ids = engagement.recent_affirmation_ids(self.viewed_ids, self.settings.RECENT_AFFIRMATIONS_LIMIT)
        return [self._by_id[i] for i in ids if i in self._by_id]

    def statistics(self) -> affirmations.AffirmationStatistics:
        return affirmations.affirmation_statistics(
            self.pool,
            self.prefs.total_affirmations_viewed,
            self.prefs.favorite_affirmation_ids,
            self.viewed_ids,
            self.prefs.streak_count,
        )

    def recommended(self, now: datetime) -> List[Affirmation]:
        return affirmations.recommended_affirmations(
            self.pool,
            now,
            self.prefs.favorite_affirmation_ids,
            user_name=self.prefs.user_name,
            limit=self.settings.RECOMMENDATION_LIMIT,
            tz=self.tz,
            rng=self.rng,
        )

    def time_of_day_affirmation(self, now: datetime) -> Affirmation:
        return affirmations.time_appropriate_affirmation(self.pool, now, self.tz, rng=self.rng)

    def export_favorites(self, now: datetime) -> str:
        return affirmations.export_favorites(
            self.pool, self.prefs.favorite_affirmation_ids, now, user_name=self.prefs.user_name
        )

    # Journal ----------------------------------------------------------
    def add_journal_entry(self, request: JournalEntryCreate, now: datetime) -> JournalEntry:
        if request.affirmation_id is not None:
            self.get_affirmation(request.affirmation_id)
        self.prefs, entry = journal.add_entry(self.prefs, request, now)
        self.persist()
        log_event("info", "journal.entry_added", event_type="journal.entry_added", entry_id=entry.id)
        return entry

    def delete_journal_entry(self, entry_id: str) -> None:
        self.prefs = journal.delete_entry(self.prefs, entry_id)
        self.persist()
        log_event("info", "journal.entry_deleted", event_type="journal.entry_deleted", entry_id=entry_id)

    def journal_analytics(self, window: AnalyticsWindow, now: datetime) -> JournalAnalytics:
        return reducers.reduce_journal_analytics(
            self.prefs.journal_entries,
            window,
            now,
            self.tz,
            min_word_length=self.settings.WORD_MIN_LENGTH,
            top_words=self.settings.WORD_TOP_N,
        )

    # Preferences ------------------------------------------------------
    def update_preferences(self, changes: PreferencesUpdate) -> UserPreferences:
        # An explicit null clears nullable fields and leaves the rest untouched
        fields = {
            key: value
            for key, value in changes.model_dump(exclude_unset=True).items()
            if value is not None or key in _CLEARABLE_PREFERENCES
        }
        categories_changed = "selected_categories" in fields and fields["selected_categories"] != self.prefs.selected_categories
        try:
            self.prefs = UserPreferences.model_validate({**self.prefs.model_dump(), **fields})
        except pydantic.ValidationError as exc:
            raise ValidationError.from_pydantic(exc) from exc
        if categories_changed:
            # A new category filter invalidates today's pick
            self.last_refresh = None
        self.persist()
        return self.prefs

    def complete_onboarding(self, request: OnboardingRequest, now: datetime) -> OpenResult:
        self.prefs = UserPreferences.model_validate(
            {
                **self.prefs.model_dump(),
                **request.model_dump(),
                "onboarding_completed": True,
            }
        )
        self.last_refresh = None
        return self.open_app(now)

    def achievements(self, now: datetime) -> AchievementSummary:
        counters = EngagementCounters(
            total_viewed=self.prefs.total_affirmations_viewed,
            streak=self.prefs.streak_count,
            favorites=len(self.prefs.favorite_affirmation_ids),
            journal_entries=len(self.prefs.journal_entries),
        )
        summary, unlocks = summarize_achievements(counters, self.prefs.achievement_unlocks, now)
        if summary.newly_unlocked:
            self.prefs = self.prefs.model_copy(update={"achievement_unlocks": unlocks})
            self.persist()
            for achievement_id in summary.newly_unlocked:
                log_event("info", "achievement.unlocked", event_type="achievement.unlocked", achievement_id=achievement_id)
        return summary

    def reset_all_data(self, now: datetime) -> Affirmation:
        """Clear engagement data (favorites, views, streak, achievements); keep profile and journal."""
        self.prefs = self.prefs.model_copy(
            update={
                "favorite_affirmation_ids": [],
                "total_affirmations_viewed": 0,
                "streak_count": 0,
                "last_opened_date": None,
                "achievement_unlocks": {},
            }
        )
        self.viewed_ids = []
        self.today_id = None
        self.last_refresh = None
        for affirmation in self.pool:
            affirmation.last_shown = None
            affirmation.show_count = 0
        log_event("info", "session.reset", event_type="session.reset")
        return self.generate_daily_affirmation(now)
