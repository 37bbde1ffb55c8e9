from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from dailyglow.core.clock import ensure_aware
from dailyglow.models.category import Category, Mood
from dailyglow.models.journal import JournalEntry


class ThemePreference(str, Enum):
    LIGHT = "Light"
    DARK = "Dark"
    SYSTEM = "System"


class UserPreferences(BaseModel):
    """
    Singleton per-installation user state. Persisted as one JSON blob.
    """

    model_config = ConfigDict(extra="ignore", validate_assignment=True)

    user_name: str = ""
    selected_categories: List[Category] = Field(default_factory=list)
    notification_enabled: bool = True
    notification_time: str = Field(default="08:00", pattern=r"^\d{2}:\d{2}$")
    daily_affirmation_count: int = Field(default=3, ge=1, le=10)
    current_mood: Optional[Mood] = None
    preferred_theme: ThemePreference = ThemePreference.SYSTEM
    sound_enabled: bool = True
    haptics_enabled: bool = True
    widget_enabled: bool = False
    is_premium: bool = False
    premium_expiration_date: Optional[datetime] = None
    streak_count: int = Field(default=0, ge=0)
    last_opened_date: Optional[datetime] = None
    total_affirmations_viewed: int = Field(default=0, ge=0)
    favorite_affirmation_ids: List[str] = Field(default_factory=list)
    journal_entries: List[JournalEntry] = Field(default_factory=list)
    onboarding_completed: bool = False
    achievement_unlocks: Dict[str, datetime] = Field(default_factory=dict)

    @field_validator("selected_categories")
    @classmethod
    def _dedupe_categories(cls, value: List[Category]) -> List[Category]:
        return list(dict.fromkeys(value))

    @field_validator("favorite_affirmation_ids")
    @classmethod
    def _dedupe_favorites(cls, value: List[str]) -> List[str]:
        return list(dict.fromkeys(value))

    def is_favorite(self, affirmation_id: str) -> bool:
        return affirmation_id in self.favorite_affirmation_ids

    def has_active_premium(self, now: datetime) -> bool:
        if not self.is_premium:
            return False
        if self.premium_expiration_date is None:
            return True
        return ensure_aware(self.premium_expiration_date) > ensure_aware(now)


class PreferencesUpdate(BaseModel):
    """Partial update of user-editable preference fields."""

    user_name: Optional[str] = Field(default=None, max_length=100)
    selected_categories: Optional[List[Category]] = None
    notification_enabled: Optional[bool] = None
    notification_time: Optional[str] = Field(default=None, pattern=r"^\d{2}:\d{2}$")
    daily_affirmation_count: Optional[int] = Field(default=None, ge=1, le=10)
    current_mood: Optional[Mood] = None
    preferred_theme: Optional[ThemePreference] = None
    sound_enabled: Optional[bool] = None
    haptics_enabled: Optional[bool] = None
    widget_enabled: Optional[bool] = None
    is_premium: Optional[bool] = None
    premium_expiration_date: Optional[datetime] = None


class OnboardingRequest(BaseModel):
    user_name: str = Field(default="", max_length=100)
    selected_categories: List[Category] = Field(default_factory=list)
    current_mood: Optional[Mood] = None
    notification_enabled: bool = True
    notification_time: str = Field(default="08:00", pattern=r"^\d{2}:\d{2}$")
