"""
Journal API

Entry CRUD plus read-only analytics for a time window.
Analytics accept an optional 'now' query parameter for deterministic testing.
"""

from datetime import datetime
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query

from dailyglow.api.dependencies import get_now, get_session
from dailyglow.features.journal import service as journal
from dailyglow.features.session.service import GlowSession
from dailyglow.models.analytics import AnalyticsWindow, JournalAnalytics
from dailyglow.models.journal import JournalEntry, JournalEntryCreate

router = APIRouter(prefix="/v1/journal", tags=["journal"])

SessionDep = Annotated[GlowSession, Depends(get_session)]


@router.get("/entries")
def list_entries(
    session: SessionDep,
    tag: Optional[str] = Query(None, max_length=50),
    limit: Optional[int] = Query(None, ge=1, le=500),
):
    entries = journal.list_entries(session.prefs, tag=tag, limit=limit)
    return {"entries": [e.model_dump(mode="json") for e in entries], "count": len(entries)}


@router.post("/entries", response_model=JournalEntry, status_code=201)
def create_entry(
    body: JournalEntryCreate,
    session: SessionDep,
    now: Annotated[datetime, Depends(get_now)],
) -> JournalEntry:
    return session.add_journal_entry(body, now)


@router.get("/entries/{entry_id}", response_model=JournalEntry)
def get_entry(entry_id: str, session: SessionDep) -> JournalEntry:
    return journal.get_entry(session.prefs, entry_id)


@router.delete("/entries/{entry_id}", status_code=204)
def delete_entry(entry_id: str, session: SessionDep):
    session.delete_journal_entry(entry_id)


@router.get("/analytics", response_model=JournalAnalytics)
def get_analytics(
    session: SessionDep,
    now: Annotated[datetime, Depends(get_now)],
    window: AnalyticsWindow = Query(AnalyticsWindow.MONTH),
) -> JournalAnalytics:
    """
    Mood trend, entry frequency, gratitude counts, common words and summary
    statistics for the selected window.

    **Deterministic:** same entries + same 'now' always produce the same output.
    """
    return session.journal_analytics(window, now)
