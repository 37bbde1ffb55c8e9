"""
dailyglow/models/analytics.py
Journal analytics read models. All frozen; produced by pure reducers.
"""

from datetime import date, datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from dailyglow.models.category import Mood


class AnalyticsWindow(str, Enum):
    WEEK = "week"
    MONTH = "month"
    THREE_MONTHS = "three_months"
    YEAR = "year"
    ALL = "all"

    @property
    def days(self) -> Optional[int]:
        """Window length in days; None means all time."""
        return _WINDOW_DAYS[self]


_WINDOW_DAYS = {
    AnalyticsWindow.WEEK: 7,
    AnalyticsWindow.MONTH: 30,
    AnalyticsWindow.THREE_MONTHS: 90,
    AnalyticsWindow.YEAR: 365,
    AnalyticsWindow.ALL: None,
}


class MoodDataPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    day: date
    value: float = Field(description="Mean mood value for the day")
    mood: Mood = Field(description="Dominant mood for the day")


class FrequencyDataPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    day: date
    count: int = Field(ge=0)


class GratitudeDataPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    date: datetime
    count: int = Field(ge=0)


class WordCount(BaseModel):
    model_config = ConfigDict(frozen=True)

    word: str
    count: int = Field(ge=1)


class JournalSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_entries: int = Field(ge=0)
    average_word_count: int = Field(ge=0)
    most_active_weekday: Optional[str] = None
    most_active_hour_range: Optional[str] = None
    unique_tag_count: int = Field(ge=0)
    total_gratitude_items: int = Field(ge=0)


class JournalInsight(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str
    title: str
    value: str


class JournalAnalytics(BaseModel):
    """Bundle of every journal chart and statistic for one window."""

    model_config = ConfigDict(frozen=True)

    window: AnalyticsWindow
    entry_count: int = Field(ge=0)
    mood_trend: List[MoodDataPoint]
    frequency: List[FrequencyDataPoint]
    gratitude: List[GratitudeDataPoint]
    words: List[WordCount]
    longest_streak: int = Field(ge=0)
    summary: JournalSummary
    insights: List[JournalInsight]
    computed_at: datetime
