"""
Health and diagnostics API.

Lightweight endpoints for operational monitoring without exposing secrets.
"""

import logging
from datetime import datetime, timezone
from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from dailyglow.api.dependencies import get_session
from dailyglow.features.preferences.store import SqlGateway
from dailyglow.features.session.service import GlowSession
from dailyglow.core.database import check_connection

logger = logging.getLogger("dailyglow")

root_router = APIRouter(tags=["health"])


@root_router.get("/healthz")
def healthz():
    """Lightweight liveness check (no deps)."""
    return {"status": "ok"}


@root_router.get("/readyz")
def readyz(session: Annotated[GlowSession, Depends(get_session)]):
    """Readiness: affirmation pool loaded and storage reachable."""
    storage_ok = True
    if isinstance(session.gateway, SqlGateway):
        storage_ok = check_connection(session.gateway.engine)

    body = {
        "ok": storage_ok and bool(session.pool),
        "pool_size": len(session.pool),
        "storage": type(session.gateway).__name__,
        "storage_connected": storage_ok,
        "computed_at": datetime.now(timezone.utc).isoformat(),
    }
    if not body["ok"]:
        logger.warning("readyz.not_ready", extra={"event_type": "readyz.not_ready"})
        return JSONResponse(status_code=503, content=body)
    return body
