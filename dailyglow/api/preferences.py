from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends

from dailyglow.api.affirmations import present_affirmation
from dailyglow.api.dependencies import get_now, get_session
from dailyglow.features.session.service import GlowSession
from dailyglow.models.preferences import OnboardingRequest, PreferencesUpdate

router = APIRouter(prefix="/v1/preferences", tags=["preferences"])

SessionDep = Annotated[GlowSession, Depends(get_session)]
NowDep = Annotated[datetime, Depends(get_now)]


def _profile(session: GlowSession, now: datetime) -> dict:
    # Journal entries have their own endpoints; keep this payload small
    data = session.prefs.model_dump(mode="json", exclude={"journal_entries", "achievement_unlocks"})
    data["has_active_premium"] = session.prefs.has_active_premium(now)
    data["journal_entry_count"] = len(session.prefs.journal_entries)
    return data


@router.get("")
def get_preferences(session: SessionDep, now: NowDep):
    return _profile(session, now)


@router.patch("")
def update_preferences(body: PreferencesUpdate, session: SessionDep, now: NowDep):
    session.update_preferences(body)
    return _profile(session, now)


@router.post("/onboarding")
def complete_onboarding(body: OnboardingRequest, session: SessionDep, now: NowDep):
    result = session.complete_onboarding(body, now)
    return {
        "preferences": _profile(session, now),
        "streak": result.streak.model_dump(mode="json"),
        "today": present_affirmation(result.today, session),
    }


@router.post("/reset")
def reset_all_data(session: SessionDep, now: NowDep):
    today = session.reset_all_data(now)
    return {"preferences": _profile(session, now), "today": present_affirmation(today, session)}
