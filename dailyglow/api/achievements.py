from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends

from dailyglow.api.dependencies import get_now, get_session
from dailyglow.features.session.service import GlowSession
from dailyglow.models.achievement import AchievementSummary

router = APIRouter()


@router.get("/v1/achievements", response_model=AchievementSummary)
def get_achievements(
    session: Annotated[GlowSession, Depends(get_session)],
    now: Annotated[datetime, Depends(get_now)],
) -> AchievementSummary:
    """Achievements recomputed from current counters; new unlocks are stamped with 'now'."""
    return session.achievements(now)
