from __future__ import annotations

from datetime import datetime
from typing import Annotated, List, Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import PlainTextResponse

from dailyglow.api.dependencies import get_now, get_session
from dailyglow.features.affirmations import service as affirmations
from dailyglow.features.affirmations.service import AffirmationStatistics
from dailyglow.features.session.service import GlowSession
from dailyglow.models.affirmation import Affirmation
from dailyglow.models.category import Category, Mood

router = APIRouter()

SessionDep = Annotated[GlowSession, Depends(get_session)]
NowDep = Annotated[datetime, Depends(get_now)]


def present_affirmation(affirmation: Affirmation, session: GlowSession) -> dict:
    return {
        "id": affirmation.id,
        "text": affirmation.display_text(session.prefs.user_name),
        "category": affirmation.category.value,
        "mood": affirmation.mood.value,
        "is_favorite": session.prefs.is_favorite(affirmation.id),
        "show_count": affirmation.show_count,
        "last_shown": affirmation.last_shown.isoformat() if affirmation.last_shown else None,
    }


@router.get("/v1/affirmations/today")
def get_today(session: SessionDep, now: NowDep):
    """Today's affirmation; reused until the calendar day changes."""
    return present_affirmation(session.today_affirmation(now), session)


@router.post("/v1/affirmations/today/refresh")
def refresh_today(session: SessionDep, now: NowDep):
    return present_affirmation(session.generate_daily_affirmation(now), session)


@router.get("/v1/affirmations/search")
def search(session: SessionDep, q: str = Query("", max_length=200)):
    return {"results": [present_affirmation(a, session) for a in affirmations.search_affirmations(session.pool, q)]}


@router.get("/v1/affirmations/mood/{mood}")
def for_mood(mood: Mood, session: SessionDep, limit: Optional[int] = Query(None, ge=1, le=100)):
    picks = affirmations.get_affirmations_for_mood(session.pool, mood, limit, rng=session.rng)
    return {
        "mood": mood.value,
        "icon": mood.icon,
        "color": mood.color,
        "affirmations": [present_affirmation(a, session) for a in picks],
    }


@router.get("/v1/affirmations/category/{category}")
def for_category(category: Category, session: SessionDep, limit: Optional[int] = Query(None, ge=1, le=100)):
    picks = affirmations.get_affirmations_for_category(session.pool, category, limit)
    return {
        "category": category.value,
        "description": category.description,
        "icon": category.icon,
        "color": category.color,
        "affirmations": [present_affirmation(a, session) for a in picks],
    }


@router.get("/v1/affirmations/recommended")
def recommended(session: SessionDep, now: NowDep):
    return {"affirmations": [present_affirmation(a, session) for a in session.recommended(now)]}


@router.get("/v1/affirmations/time-of-day")
def time_of_day(session: SessionDep, now: NowDep):
    """One affirmation suited to the hour in the calendar timezone."""
    local = now.astimezone(session.tz)
    return {
        "mood": affirmations.time_of_day_mood(local.hour).value,
        "affirmation": present_affirmation(session.time_of_day_affirmation(now), session),
    }


@router.get("/v1/affirmations/recent")
def recent(session: SessionDep):
    return {"affirmations": [present_affirmation(a, session) for a in session.recent()]}


@router.get("/v1/affirmations/statistics", response_model=AffirmationStatistics)
def statistics(session: SessionDep) -> AffirmationStatistics:
    return session.statistics()


@router.post("/v1/affirmations/{affirmation_id}/view")
def view(affirmation_id: str, session: SessionDep, now: NowDep):
    affirmation = session.view(affirmation_id, now)
    return {
        "affirmation": present_affirmation(affirmation, session),
        "total_viewed": session.prefs.total_affirmations_viewed,
    }


@router.get("/v1/favorites")
def list_favorites(session: SessionDep) -> dict:
    favorites: List[Affirmation] = session.favorites()
    return {"favorites": [present_affirmation(a, session) for a in favorites], "count": len(favorites)}


@router.post("/v1/favorites/{affirmation_id}/toggle")
def toggle_favorite(affirmation_id: str, session: SessionDep):
    is_favorite = session.toggle_favorite(affirmation_id)
    return {"affirmation_id": affirmation_id, "is_favorite": is_favorite}


@router.get("/v1/favorites/export", response_class=PlainTextResponse)
def export_favorites(session: SessionDep, now: NowDep):
    return session.export_favorites(now)
