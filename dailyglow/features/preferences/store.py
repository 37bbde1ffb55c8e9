"""
dailyglow/features/preferences/store.py

Persistence gateway: a small key-value contract plus structured
load/save of the UserPreferences blob.

Reads never raise. A missing key, an unreadable row or a blob that no longer
validates falls back to the default and logs a warning. Writes propagate.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import pydantic
from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import SQLAlchemyError

from dailyglow.core.database import build_engine, create_all_tables, kv_store
from dailyglow.models.preferences import UserPreferences

logger = logging.getLogger("dailyglow")

PREFERENCES_KEY = "user_preferences"
VIEWED_IDS_KEY = "viewed_affirmation_ids"
TODAY_AFFIRMATION_KEY = "today_affirmation_id"
LAST_REFRESH_KEY = "last_refresh_date"

ALL_KEYS = (PREFERENCES_KEY, VIEWED_IDS_KEY, TODAY_AFFIRMATION_KEY, LAST_REFRESH_KEY)


class PreferencesGateway:
    """Base gateway. Subclasses implement the raw string read/write."""

    def _read(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def _write(self, key: str, raw: str) -> None:
        raise NotImplementedError

    def remove(self, key: str) -> None:
        raise NotImplementedError

    def get(self, key: str, default: Any = None) -> Any:
        try:
            raw = self._read(key)
        except SQLAlchemyError:
            logger.warning("store.read_failed", extra={"event_type": "store.read_failed", "key": key}, exc_info=True)
            return default
        if raw is None:
            return default
        try:
            return json.loads(raw)
        except ValueError:
            logger.warning("store.corrupt_value", extra={"event_type": "store.corrupt_value", "key": key})
            return default

    def set(self, key: str, value: Any) -> None:
        self._write(key, json.dumps(value, default=str))

    def get_datetime(self, key: str) -> Optional[datetime]:
        value = self.get(key)
        if not value:
            return None
        try:
            moment = datetime.fromisoformat(value)
        except (TypeError, ValueError):
            return None
        return moment if moment.tzinfo else moment.replace(tzinfo=timezone.utc)

    def set_datetime(self, key: str, value: Optional[datetime]) -> None:
        if value is None:
            self.remove(key)
        else:
            self.set(key, value.isoformat())

    def load_preferences(self) -> UserPreferences:
        data = self.get(PREFERENCES_KEY)
        if not isinstance(data, dict):
            return UserPreferences()
        try:
            return UserPreferences.model_validate(data)
        except pydantic.ValidationError:
            logger.warning("store.preferences_invalid", extra={"event_type": "store.preferences_invalid"})
            return UserPreferences()

    def save_preferences(self, prefs: UserPreferences) -> None:
        self.set(PREFERENCES_KEY, prefs.model_dump(mode="json"))

    def clear(self) -> None:
        for key in ALL_KEYS:
            self.remove(key)


class InMemoryGateway(PreferencesGateway):
    """Dict-backed gateway for tests and ephemeral sessions."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def _read(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def _write(self, key: str, raw: str) -> None:
        self._data[key] = raw

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self):
        return sorted(self._data)


class SqlGateway(PreferencesGateway):
    """
    SQLAlchemy-backed gateway over the kv_store table.

    Last writer wins; there is a single logical writer per installation.
    """

    def __init__(self, database_url: Optional[str] = None, engine=None):
        if engine is None:
            if not database_url:
                raise ValueError("SqlGateway needs a database_url or an engine")
            engine = build_engine(database_url)
        self._engine = engine
        create_all_tables(self._engine)

    @property
    def engine(self):
        return self._engine

    def _read(self, key: str) -> Optional[str]:
        with self._engine.connect() as conn:
            row = conn.execute(select(kv_store.c.value).where(kv_store.c.key == key)).first()
        return row[0] if row else None

    def _write(self, key: str, raw: str) -> None:
        now = datetime.now(timezone.utc)
        with self._engine.begin() as conn:
            result = conn.execute(
                update(kv_store).where(kv_store.c.key == key).values(value=raw, updated_at=now)
            )
            if result.rowcount == 0:
                conn.execute(insert(kv_store).values(key=key, value=raw, updated_at=now))

    def remove(self, key: str) -> None:
        with self._engine.begin() as conn:
            conn.execute(delete(kv_store).where(kv_store.c.key == key))
