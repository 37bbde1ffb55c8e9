"""
dailyglow/models/journal.py
Journal entries. Entries are immutable once written; edits replace the entry.
"""

from datetime import datetime
from typing import List, Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

from dailyglow.core.clock import utc_now
from dailyglow.models.category import Mood


class JournalEntry(BaseModel):
    """A single journal entry with optional mood, tags and gratitude items."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid4()))
    date: datetime = Field(default_factory=utc_now)
    content: str = ""
    mood: Optional[Mood] = None
    affirmation_id: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    gratitude: List[str] = Field(default_factory=list)

    @property
    def word_count(self) -> int:
        return len(self.content.split())


class JournalEntryCreate(BaseModel):
    """Request body for a new journal entry."""

    content: str = Field(default="", max_length=20000)
    mood: Optional[Mood] = None
    affirmation_id: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    gratitude: List[str] = Field(default_factory=list)
    date: Optional[datetime] = Field(default=None, description="Defaults to now")
