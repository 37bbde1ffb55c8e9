from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from dailyglow.core.clock import utc_now
from dailyglow.models.category import Category, Mood

_AFFIRMATION_NAMESPACE = uuid.uuid5(uuid.NAMESPACE_URL, "https://dailyglow.app/affirmations")

NAME_PLACEHOLDER = "[NAME]"


def stable_affirmation_id(category: Category, text: str) -> str:
    """Deterministic id so favorites and history survive restarts."""
    return str(uuid.uuid5(_AFFIRMATION_NAMESPACE, f"{category.value}:{text}"))


class Affirmation(BaseModel):
    """A single affirmation record from the seed pool."""

    id: str
    text: str = Field(..., min_length=1)
    category: Category
    mood: Mood = Mood.CALM
    is_favorite: bool = False
    date_added: datetime = Field(default_factory=utc_now)
    last_shown: Optional[datetime] = None
    show_count: int = Field(default=0, ge=0)
    is_personalized: bool = False
    personalized_text: Optional[str] = None

    @classmethod
    def create(cls, text: str, category: Category, **fields) -> "Affirmation":
        return cls(id=stable_affirmation_id(category, text), text=text, category=category, **fields)

    def display_text(self, user_name: str = "") -> str:
        if self.is_personalized and self.personalized_text:
            return self.personalized_text.replace(NAME_PLACEHOLDER, user_name)
        return self.text.replace(NAME_PLACEHOLDER, user_name)

    def mark_as_shown(self, now: Optional[datetime] = None) -> None:
        self.last_shown = now or utc_now()
        self.show_count += 1
