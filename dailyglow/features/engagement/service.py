from __future__ import annotations

from datetime import datetime, tzinfo
from typing import FrozenSet, List, NamedTuple, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field

from dailyglow.core.clock import days_between

DEFAULT_VIEW_HISTORY_LIMIT = 100
DEFAULT_CELEBRATION_INTERVAL = 7

# (upper bound exclusive, tier) pairs; anything above the last bound is "crown"
_STREAK_TIERS = ((1, "none"), (7, "spark"), (30, "flame"), (100, "blaze"), (365, "diamond"))
_MILESTONES = (7, 30, 100, 365, 1000)


class EngagementState(BaseModel):
    """Immutable view/favorite bookkeeping. Operations return new states."""

    model_config = ConfigDict(frozen=True)

    total_viewed: int = Field(default=0, ge=0)
    viewed_ids: Tuple[str, ...] = ()
    favorite_ids: FrozenSet[str] = frozenset()


class StreakUpdate(NamedTuple):
    streak: int
    last_opened_date: Optional[datetime]
    celebrate: bool = False


def record_view(
    affirmation_id: str,
    state: EngagementState,
    history_limit: int = DEFAULT_VIEW_HISTORY_LIMIT,
) -> EngagementState:
    """Count a view and move the id to the most-recent end of the history."""
    history = [i for i in state.viewed_ids if i != affirmation_id]
    history.append(affirmation_id)
    if len(history) > history_limit:
        history = history[-history_limit:]
    return state.model_copy(
        update={
            "total_viewed": state.total_viewed + 1,
            "viewed_ids": tuple(history),
        }
    )


def toggle_favorite(affirmation_id: str, state: EngagementState) -> EngagementState:
    if affirmation_id in state.favorite_ids:
        favorites = state.favorite_ids - {affirmation_id}
    else:
        favorites = state.favorite_ids | {affirmation_id}
    return state.model_copy(update={"favorite_ids": frozenset(favorites)})


def update_streak_on_open(
    last_opened_date: Optional[datetime],
    current_streak: int,
    now: datetime,
    tz: Optional[tzinfo] = None,
    celebration_interval: int = DEFAULT_CELEBRATION_INTERVAL,
) -> StreakUpdate:
    """
    Day-boundary streak bookkeeping.

    Same calendar day (or a clock that went backwards) leaves both the streak
    and the last-opened timestamp untouched. The next day extends the streak;
    any longer gap restarts it at 1.
    """
    if last_opened_date is None:
        new_streak = 1
    else:
        gap = days_between(last_opened_date, now, tz)
        if gap <= 0:
            return StreakUpdate(current_streak, last_opened_date, False)
        new_streak = current_streak + 1 if gap == 1 else 1

    celebrate = celebration_interval > 0 and new_streak % celebration_interval == 0
    return StreakUpdate(new_streak, now, celebrate)


def next_milestone(streak: int) -> int:
    for milestone in _MILESTONES:
        if streak < milestone:
            return milestone
    return _MILESTONES[-1]


def previous_milestone(streak: int) -> int:
    reached = [m for m in _MILESTONES[:-1] if m <= streak]
    return reached[-1] if reached else 0


def streak_progress(streak: int) -> float:
    """Fraction of the way from the previous milestone to the next one."""
    upper = next_milestone(streak)
    lower = previous_milestone(streak)
    if upper <= lower:
        return 1.0
    return min(1.0, max(0.0, (streak - lower) / (upper - lower)))


def streak_tier(streak: int) -> str:
    for bound, tier in _STREAK_TIERS:
        if streak < bound:
            return tier
    return "crown"


def recent_affirmation_ids(viewed_ids: Sequence[str], limit: int = 20) -> List[str]:
    """Most recent first."""
    return list(reversed(viewed_ids))[:limit]


def merge_favorite_order(existing: Sequence[str], favorites: FrozenSet[str]) -> List[str]:
    """Keep the user's favoriting order; new ids go to the end."""
    kept = [i for i in existing if i in favorites]
    added = sorted(favorites.difference(kept))
    return kept + added
