"""
dailyglow/features/affirmations/service.py

Affirmation selection engine: daily pick with repeat avoidance, mood and
category filtering, search and recommendations.

All functions take the pool explicitly and an optional `rng` so callers
(and tests) control randomness. Empty filtered sets never raise; the engine
widens its candidate set instead. An empty base pool is the only fatal case.
"""

from __future__ import annotations

import random
from collections import Counter
from datetime import datetime, tzinfo
from typing import Iterable, List, Optional, Sequence, Set, Tuple

from pydantic import BaseModel, ConfigDict, Field

from dailyglow.core.clock import calendar_day, local_time, utc_now
from dailyglow.core.errors import DuplicateAffirmationError, EmptyPoolError
from dailyglow.models.affirmation import Affirmation
from dailyglow.models.category import Category, Mood

DEFAULT_REPEAT_WINDOW = 7


class AffirmationStatistics(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_viewed: int = Field(ge=0)
    favorite_count: int = Field(ge=0)
    current_streak: int = Field(ge=0)
    categories_explored: int = Field(ge=0)
    most_viewed_category: Optional[Category] = None
    average_per_day: float = Field(ge=0)


def validate_pool(pool: Sequence[Affirmation]) -> None:
    """Startup precondition: pool is non-empty and ids are unique."""
    if not pool:
        raise EmptyPoolError("Affirmation pool is empty")
    seen: Set[str] = set()
    for affirmation in pool:
        if affirmation.id in seen:
            raise DuplicateAffirmationError(f"Duplicate affirmation id in pool: {affirmation.id}")
        seen.add(affirmation.id)


def plan_daily_selection(
    pool: Sequence[Affirmation],
    recently_viewed_ids: Sequence[str],
    preferred_categories: Optional[Iterable[Category]] = None,
    repeat_window: int = DEFAULT_REPEAT_WINDOW,
) -> Tuple[List[Affirmation], bool]:
    """
    Candidate set for the daily pick.

    Returns (candidates, history_reset). `history_reset` is True when every
    filtered affirmation was recently viewed and the caller should clear its
    viewed history.
    """
    if not pool:
        raise EmptyPoolError("Affirmation pool is empty")

    preferred = set(preferred_categories or ())
    filtered = [a for a in pool if a.category in preferred] if preferred else list(pool)
    if not filtered:
        # Preferences point at categories with no seed records
        filtered = list(pool)

    recent_limit = min(repeat_window, len(filtered) // 2)
    history = list(recently_viewed_ids)
    recent_ids = set(history[-recent_limit:]) if recent_limit > 0 else set()
    candidates = [a for a in filtered if a.id not in recent_ids]

    if not candidates:
        return filtered, True
    return candidates, False


def select_daily_affirmation(
    pool: Sequence[Affirmation],
    recently_viewed_ids: Sequence[str],
    preferred_categories: Optional[Iterable[Category]] = None,
    now: Optional[datetime] = None,
    *,
    rng: Optional[random.Random] = None,
    repeat_window: int = DEFAULT_REPEAT_WINDOW,
) -> Affirmation:
    """Pick today's affirmation uniformly from the non-recent candidates.

    `now` is accepted for symmetry with the other daily operations; the pick
    itself does not depend on it. Recording the pick is the caller's job.
    """
    candidates, _ = plan_daily_selection(
        pool,
        recently_viewed_ids,
        preferred_categories,
        repeat_window=repeat_window,
    )
    return (rng or random).choice(candidates)


def is_daily_affirmation_still_valid(
    last_refresh_date: Optional[datetime],
    now: datetime,
    tz: Optional[tzinfo] = None,
) -> bool:
    if last_refresh_date is None:
        return False
    return calendar_day(last_refresh_date, tz) == calendar_day(now, tz)


def get_affirmations_for_mood(
    pool: Sequence[Affirmation],
    mood: Mood,
    limit: Optional[int] = None,
    *,
    rng: Optional[random.Random] = None,
) -> List[Affirmation]:
    categories = set(mood.suggested_categories)
    matches = [a for a in pool if a.category in categories]
    (rng or random).shuffle(matches)
    if limit is not None:
        return matches[:limit]
    return matches


def get_affirmations_for_category(
    pool: Sequence[Affirmation],
    category: Category,
    limit: Optional[int] = None,
) -> List[Affirmation]:
    matches = [a for a in pool if a.category == category]
    if limit is not None:
        return matches[:limit]
    return matches


def search_affirmations(pool: Sequence[Affirmation], query: str) -> List[Affirmation]:
    """Case-insensitive substring match on text or category name."""
    needle = (query or "").strip().lower()
    if not needle:
        return []
    return [
        a for a in pool
        if needle in a.text.lower() or needle in a.category.display_name.lower()
    ]


def time_of_day_mood(hour: int) -> Mood:
    if 5 <= hour < 10:
        return Mood.ENERGIZED
    if 10 <= hour < 14:
        return Mood.MOTIVATED
    if 14 <= hour < 18:
        return Mood.FOCUSED
    if 18 <= hour < 22:
        return Mood.CALM
    return Mood.PEACEFUL


# Collections keyed by time of day; falls back to the whole pool
_TIME_OF_DAY_CATEGORIES = (
    (range(5, 12), (Category.MOTIVATION, Category.SUCCESS, Category.GRATITUDE, Category.HEALTH)),
    (range(12, 17), (Category.MOTIVATION,)),
    (range(17, 22), (Category.SUCCESS, Category.PEACE, Category.GRATITUDE)),
)


def time_appropriate_affirmation(
    pool: Sequence[Affirmation],
    now: Optional[datetime] = None,
    tz: Optional[tzinfo] = None,
    *,
    rng: Optional[random.Random] = None,
) -> Affirmation:
    if not pool:
        raise EmptyPoolError("Affirmation pool is empty")
    hour = local_time(now or utc_now(), tz).hour
    categories: Tuple[Category, ...] = (Category.PEACE,)
    for hours, cats in _TIME_OF_DAY_CATEGORIES:
        if hour in hours:
            categories = cats
            break
    matches = [a for a in pool if a.category in categories] or list(pool)
    return (rng or random).choice(matches)


def recommended_affirmations(
    pool: Sequence[Affirmation],
    now: datetime,
    favorite_ids: Iterable[str],
    user_name: str = "",
    limit: int = 5,
    tz: Optional[tzinfo] = None,
    *,
    rng: Optional[random.Random] = None,
) -> List[Affirmation]:
    """Mood-of-the-hour picks plus, for named users, one per favorite category."""
    mood = time_of_day_mood(local_time(now, tz).hour)
    recommendations = get_affirmations_for_mood(pool, mood, limit=3, rng=rng)

    if user_name.strip():
        favorites = set(favorite_ids)
        favorite_categories: List[Category] = []
        for affirmation in pool:
            if affirmation.id in favorites and affirmation.category not in favorite_categories:
                favorite_categories.append(affirmation.category)
        for category in favorite_categories[:2]:
            recommendations.extend(get_affirmations_for_category(pool, category, limit=1))

    unique: List[Affirmation] = []
    seen: Set[str] = set()
    for affirmation in recommendations:
        if affirmation.id not in seen:
            seen.add(affirmation.id)
            unique.append(affirmation)
    return unique[:limit]


def favorite_affirmations(pool: Sequence[Affirmation], favorite_ids: Sequence[str]) -> List[Affirmation]:
    """Favorites in the order they were favorited; unknown ids are skipped."""
    by_id = {a.id: a for a in pool}
    return [by_id[i] for i in favorite_ids if i in by_id]


def affirmation_statistics(
    pool: Sequence[Affirmation],
    total_viewed: int,
    favorite_ids: Sequence[str],
    viewed_ids: Sequence[str],
    current_streak: int,
) -> AffirmationStatistics:
    by_id = {a.id: a for a in pool}
    viewed_categories = [by_id[i].category for i in viewed_ids if i in by_id]
    counts = Counter(viewed_categories)
    most_viewed = counts.most_common(1)[0][0] if counts else None
    average = total_viewed / current_streak if current_streak > 0 else 0.0
    return AffirmationStatistics(
        total_viewed=total_viewed,
        favorite_count=len(favorite_affirmations(pool, favorite_ids)),
        current_streak=current_streak,
        categories_explored=len(counts),
        most_viewed_category=most_viewed,
        average_per_day=average,
    )


def export_favorites(
    pool: Sequence[Affirmation],
    favorite_ids: Sequence[str],
    now: Optional[datetime] = None,
    user_name: str = "",
) -> str:
    blocks = [
        f"{a.display_text(user_name)}\n- {a.category.display_name}"
        for a in favorite_affirmations(pool, favorite_ids)
    ]
    generated = (now or utc_now()).strftime("%Y-%m-%d %H:%M")
    header = f"My Daily Glow Favorite Affirmations\nGenerated on: {generated}"
    return header + "\n\n" + "\n\n".join(blocks) if blocks else header + "\n"
