import logging
import os
import time
from contextlib import asynccontextmanager

import pydantic
from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

# Load env from the working directory before settings are read
if "PYTEST_CURRENT_TEST" not in os.environ:
    load_dotenv()

from dailyglow.core.config import settings, validate_config  # noqa: E402
from dailyglow.core.logging import configure_logging  # noqa: E402
from dailyglow.core.middleware.request_id import RequestIdMiddleware  # noqa: E402
from dailyglow.core.errors import (  # noqa: E402
    AppError,
    app_error_handler,
    http_error_handler,
    pydantic_error_handler,
    unhandled_exception_handler,
)
from dailyglow.api import achievements, affirmations, health, journal, preferences, streaks  # noqa: E402

configure_logging(settings.ENV)
validate_config(strict=getattr(settings, "CONFIG_STRICT", False))


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger = logging.getLogger("dailyglow")
    logger.info("Starting Daily Glow backend...")
    app.state.startup_time = time.time()
    try:
        yield
    finally:
        logging.getLogger("dailyglow").info("Stopping Daily Glow backend...")


app = FastAPI(title="Daily Glow", lifespan=lifespan)

app.add_middleware(RequestIdMiddleware)

app.add_exception_handler(AppError, app_error_handler)
app.add_exception_handler(HTTPException, http_error_handler)
app.add_exception_handler(pydantic.ValidationError, pydantic_error_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(affirmations.router, tags=["affirmations"])
app.include_router(streaks.router, tags=["streaks"])
app.include_router(journal.router)
app.include_router(achievements.router, tags=["achievements"])
app.include_router(preferences.router)
app.include_router(health.root_router)
