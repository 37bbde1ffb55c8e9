from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Mapping, Sequence, Tuple

from dailyglow.models.achievement import (
    Achievement,
    AchievementCategory,
    AchievementDefinition,
    AchievementSummary,
    EngagementCounters,
)

POINTS_PER_LEVEL = 100


def _define(id: str, category: AchievementCategory, title: str, description: str, required: int, points: int) -> AchievementDefinition:
    return AchievementDefinition(
        id=id,
        category=category,
        title=title,
        description=description,
        required_value=required,
        reward_points=points,
    )


# Static catalog
ACHIEVEMENT_CATALOG: List[AchievementDefinition] = [
    _define("first_glow", AchievementCategory.VIEWS, "First Glow", "View your first affirmation", 1, 10),
    _define("views_10", AchievementCategory.VIEWS, "Warming Up", "View 10 affirmations", 10, 20),
    _define("views_50", AchievementCategory.VIEWS, "Glowing", "View 50 affirmations", 50, 50),
    _define("views_100", AchievementCategory.VIEWS, "Radiant", "View 100 affirmations", 100, 100),
    _define("streak_3", AchievementCategory.STREAK, "Getting Started", "Open Daily Glow 3 days in a row", 3, 15),
    _define("streak_7", AchievementCategory.STREAK, "Week of Light", "Keep a 7-day streak", 7, 50),
    _define("streak_30", AchievementCategory.STREAK, "Monthly Glow", "Keep a 30-day streak", 30, 150),
    _define("streak_100", AchievementCategory.STREAK, "Unstoppable", "Keep a 100-day streak", 100, 500),
    _define("first_favorite", AchievementCategory.FAVORITES, "Heart Collector", "Save your first favorite", 1, 10),
    _define("favorites_10", AchievementCategory.FAVORITES, "Curator", "Save 10 favorites", 10, 40),
    _define("first_entry", AchievementCategory.JOURNAL, "Dear Diary", "Write your first journal entry", 1, 10),
    _define("entries_10", AchievementCategory.JOURNAL, "Reflective Soul", "Write 10 journal entries", 10, 50),
    _define("entries_50", AchievementCategory.JOURNAL, "Storyteller", "Write 50 journal entries", 50, 200),
]


def _counter_for(category: AchievementCategory, counters: EngagementCounters) -> int:
    if category == AchievementCategory.STREAK:
        return counters.streak
    if category == AchievementCategory.VIEWS:
        return counters.total_viewed
    if category == AchievementCategory.FAVORITES:
        return counters.favorites
    return counters.journal_entries


def evaluate_achievements(
    counters: EngagementCounters,
    unlocks: Mapping[str, datetime],
    now: datetime,
    catalog: Sequence[AchievementDefinition] = ACHIEVEMENT_CATALOG,
) -> Tuple[List[Achievement], Dict[str, datetime]]:
    """
    Recompute every achievement from the counters.

    Returns (achievements, unlocks'). An unlock date is recorded the first
    time the requirement is met and kept even if the counter later drops
    (a broken streak does not revoke a streak achievement).
    """
    updated_unlocks = dict(unlocks)
    achievements = []
    for definition in catalog:
        value = _counter_for(definition.category, counters)
        if value >= definition.required_value and definition.id not in updated_unlocks:
            updated_unlocks[definition.id] = now
        unlocked_at = updated_unlocks.get(definition.id)
        achievements.append(
            Achievement(
                id=definition.id,
                category=definition.category,
                title=definition.title,
                description=definition.description,
                required_value=definition.required_value,
                progress=definition.required_value if unlocked_at else min(value, definition.required_value),
                is_unlocked=unlocked_at is not None,
                unlocked_date=unlocked_at,
                reward_points=definition.reward_points,
            )
        )
    return achievements, updated_unlocks


def total_points(achievements: Sequence[Achievement]) -> int:
    return sum(a.reward_points for a in achievements if a.is_unlocked)


def level_for_points(points: int) -> int:
    return 1 + points // POINTS_PER_LEVEL


def points_to_next_level(points: int) -> int:
    return level_for_points(points) * POINTS_PER_LEVEL - points


def progress_by_category(achievements: Sequence[Achievement]) -> Dict[AchievementCategory, float]:
    """Fraction of unlocked achievements per category."""
    result: Dict[AchievementCategory, float] = {}
    for category in AchievementCategory:
        members = [a for a in achievements if a.category == category]
        if members:
            result[category] = sum(1 for a in members if a.is_unlocked) / len(members)
        else:
            result[category] = 0.0
    return result


def summarize_achievements(
    counters: EngagementCounters,
    unlocks: Mapping[str, datetime],
    now: datetime,
) -> Tuple[AchievementSummary, Dict[str, datetime]]:
    achievements, updated_unlocks = evaluate_achievements(counters, unlocks, now)
    newly_unlocked = [a.id for a in achievements if a.id in updated_unlocks and a.id not in unlocks]
    points = total_points(achievements)
    summary = AchievementSummary(
        achievements=achievements,
        newly_unlocked=newly_unlocked,
        unlocked_count=sum(1 for a in achievements if a.is_unlocked),
        total_points=points,
        level=level_for_points(points),
        points_to_next_level=points_to_next_level(points),
        progress_by_category=progress_by_category(achievements),
        computed_at=now,
    )
    return summary, updated_unlocks
