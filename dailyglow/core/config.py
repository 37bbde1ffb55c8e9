import logging
from datetime import timezone, tzinfo
from functools import lru_cache
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Environment
    ENV: str = "development"
    CONFIG_STRICT: bool = False

    # Storage
    DATABASE_URL: Optional[str] = "sqlite:///./dailyglow.db"
    TEST_DATABASE_URL: Optional[str] = None

    # Calendar day boundary used for streaks, daily picks and journal grouping
    CALENDAR_TIMEZONE: str = "UTC"

    # Affirmation selection
    RECENT_REPEAT_WINDOW: int = 7
    VIEW_HISTORY_LIMIT: int = 100
    RECENT_AFFIRMATIONS_LIMIT: int = 20
    RECOMMENDATION_LIMIT: int = 5

    # Engagement
    STREAK_CELEBRATION_INTERVAL: int = 7

    # Journal analytics
    WORD_MIN_LENGTH: int = 5
    WORD_TOP_N: int = 20

    # HTTP
    CORS_ORIGINS: str = "http://localhost:3000"  # comma-separated

    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def calendar_tz(self) -> tzinfo:
        return resolve_timezone(self.CALENDAR_TIMEZONE)

    @property
    def cors_origins(self) -> list[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]


@lru_cache(maxsize=None)
def resolve_timezone(name: str) -> tzinfo:
    """Zone for `name`; an unknown zone falls back to UTC with one warning."""
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError, OSError):
        logging.getLogger("dailyglow").warning(
            "config.unknown_timezone",
            extra={"event_type": "config.unknown_timezone", "timezone": name},
        )
        return timezone.utc


settings = Settings()


def validate_config(strict: Optional[bool] = None, settings_obj: Optional[Settings] = None, logger: Optional[logging.Logger] = None) -> bool:
    """Validate configuration values.

    In strict mode raise RuntimeError; otherwise emit warnings only.
    """
    cfg = settings_obj or settings
    log = logger or logging.getLogger("dailyglow")
    strict_mode = strict if strict is not None else getattr(cfg, "CONFIG_STRICT", False)

    problems = []
    try:
        ZoneInfo(cfg.CALENDAR_TIMEZONE)
    except (ZoneInfoNotFoundError, ValueError, OSError):
        problems.append(f"CALENDAR_TIMEZONE={cfg.CALENDAR_TIMEZONE!r} is not a known timezone")

    positive_keys = [
        "RECENT_REPEAT_WINDOW",
        "VIEW_HISTORY_LIMIT",
        "RECENT_AFFIRMATIONS_LIMIT",
        "RECOMMENDATION_LIMIT",
        "STREAK_CELEBRATION_INTERVAL",
        "WORD_MIN_LENGTH",
        "WORD_TOP_N",
    ]
    problems.extend(f"{key} must be positive" for key in positive_keys if getattr(cfg, key, 0) <= 0)

    if not cfg.DATABASE_URL and not cfg.TEST_DATABASE_URL:
        problems.append("DATABASE_URL is not configured; preferences will not persist")

    if problems:
        message = "Invalid configuration: " + "; ".join(problems)
        if strict_mode:
            raise RuntimeError(message)
        log.warning(message)
        return False

    return True
