"""Shared FastAPI dependencies."""

from datetime import datetime
from typing import Optional

from fastapi import HTTPException, Query

from dailyglow.core.clock import parse_now
from dailyglow.core.database import get_database_url
from dailyglow.features.preferences.store import SqlGateway
from dailyglow.features.session.service import GlowSession

_session: Optional[GlowSession] = None


def get_session() -> GlowSession:
    """Process-wide session, built lazily on first request."""
    global _session
    if _session is None:
        _session = GlowSession(SqlGateway(get_database_url()))
    return _session


def reset_session() -> None:
    global _session
    _session = None


def get_now(now: Optional[str] = Query(None, description="Optional ISO timestamp for deterministic results")) -> datetime:
    try:
        return parse_now(now)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid 'now' timestamp format. Use ISO 8601.")
