"""
dailyglow/models/achievement.py
Achievement read models. Progress is derived from engagement counters,
never mutated independently.
"""

from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class AchievementCategory(str, Enum):
    STREAK = "streak"
    VIEWS = "views"
    FAVORITES = "favorites"
    JOURNAL = "journal"


class AchievementDefinition(BaseModel):
    """Static catalog entry."""

    model_config = ConfigDict(frozen=True)

    id: str
    category: AchievementCategory
    title: str
    description: str
    required_value: int = Field(ge=1)
    reward_points: int = Field(ge=0)


class Achievement(BaseModel):
    """Catalog entry evaluated against the user's counters."""

    model_config = ConfigDict(frozen=True)

    id: str
    category: AchievementCategory
    title: str
    description: str
    required_value: int = Field(ge=1)
    progress: int = Field(ge=0)
    is_unlocked: bool
    unlocked_date: Optional[datetime] = None
    reward_points: int = Field(ge=0)

    @property
    def progress_percentage(self) -> float:
        return min(1.0, self.progress / self.required_value)


class EngagementCounters(BaseModel):
    """Inputs the achievement evaluator reads."""

    model_config = ConfigDict(frozen=True)

    total_viewed: int = Field(default=0, ge=0)
    streak: int = Field(default=0, ge=0)
    favorites: int = Field(default=0, ge=0)
    journal_entries: int = Field(default=0, ge=0)


class AchievementSummary(BaseModel):
    """Response for the achievements endpoint."""

    model_config = ConfigDict(frozen=True)

    achievements: List[Achievement]
    newly_unlocked: List[str] = Field(default_factory=list)
    unlocked_count: int = Field(ge=0)
    total_points: int = Field(ge=0)
    level: int = Field(ge=1)
    points_to_next_level: int = Field(ge=0)
    progress_by_category: Dict[AchievementCategory, float]
    computed_at: datetime
