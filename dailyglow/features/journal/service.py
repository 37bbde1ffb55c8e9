from __future__ import annotations

from datetime import datetime
from typing import List, Optional, Tuple

from dailyglow.core.clock import ensure_aware
from dailyglow.core.errors import NotFoundError
from dailyglow.models.journal import JournalEntry, JournalEntryCreate
from dailyglow.models.preferences import UserPreferences


def _clean(values: List[str]) -> List[str]:
    """Strip blanks, keep insertion order, drop duplicates."""
    return list(dict.fromkeys(v.strip() for v in values if v and v.strip()))


def add_entry(
    prefs: UserPreferences,
    request: JournalEntryCreate,
    now: datetime,
) -> Tuple[UserPreferences, JournalEntry]:
    entry = JournalEntry(
        date=ensure_aware(request.date or now),
        content=request.content,
        mood=request.mood,
        affirmation_id=request.affirmation_id,
        tags=_clean(request.tags),
        gratitude=[g.strip() for g in request.gratitude if g and g.strip()],
    )
    updated = prefs.model_copy(update={"journal_entries": [*prefs.journal_entries, entry]})
    return updated, entry


def delete_entry(prefs: UserPreferences, entry_id: str) -> UserPreferences:
    remaining = [e for e in prefs.journal_entries if e.id != entry_id]
    if len(remaining) == len(prefs.journal_entries):
        raise NotFoundError(f"Journal entry {entry_id} not found")
    return prefs.model_copy(update={"journal_entries": remaining})


def get_entry(prefs: UserPreferences, entry_id: str) -> JournalEntry:
    for entry in prefs.journal_entries:
        if entry.id == entry_id:
            return entry
    raise NotFoundError(f"Journal entry {entry_id} not found")


def list_entries(
    prefs: UserPreferences,
    *,
    tag: Optional[str] = None,
    limit: Optional[int] = None,
) -> List[JournalEntry]:
    """Newest first, optionally filtered by tag."""
    entries = [e for e in prefs.journal_entries if tag is None or tag in e.tags]
    entries.sort(key=lambda e: ensure_aware(e.date), reverse=True)
    if limit is not None:
        return entries[:limit]
    return entries
