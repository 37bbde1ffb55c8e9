from __future__ import annotations

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends

from dailyglow.api.affirmations import present_affirmation
from dailyglow.api.dependencies import get_now, get_session
from dailyglow.features.session.service import GlowSession, StreakState

router = APIRouter()


@router.get("/v1/streaks/current", response_model=StreakState)
def get_current_streak(session: Annotated[GlowSession, Depends(get_session)]):
    """Return the current streak without checking in."""
    return session.streak()


@router.post("/v1/streaks/open")
def handle_app_open(
    session: Annotated[GlowSession, Depends(get_session)],
    now: Annotated[datetime, Depends(get_now)],
):
    """App foregrounded: update the streak and make sure today's pick exists."""
    result = session.open_app(now)
    return {
        "streak": result.streak.model_dump(mode="json"),
        "today": present_affirmation(result.today, session),
    }
