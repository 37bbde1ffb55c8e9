# dailyglow/conftest.py
import random
from datetime import datetime, timezone

import pytest

from dailyglow.core.config import Settings
from dailyglow.features.affirmations.catalog import load_seed_pool
from dailyglow.features.preferences.store import InMemoryGateway
from dailyglow.features.session.service import GlowSession
from dailyglow.models.affirmation import Affirmation
from dailyglow.models.category import Category


@pytest.fixture
def fixed_now():
    """Fixed timestamp for deterministic testing."""
    return datetime(2024, 3, 1, 9, 30, 0, tzinfo=timezone.utc)


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def test_settings():
    """UTC calendar and no .env influence."""
    return Settings(_env_file=None, CALENDAR_TIMEZONE="UTC", DATABASE_URL="sqlite://")


@pytest.fixture
def seed_pool():
    return load_seed_pool()


@pytest.fixture
def motivation_pool():
    """Five Motivation affirmations."""
    return [Affirmation.create(f"Motivation affirmation {i}", Category.MOTIVATION) for i in range(5)]


@pytest.fixture
def gateway():
    return InMemoryGateway()


@pytest.fixture
def session(gateway, seed_pool, test_settings, rng):
    return GlowSession(gateway, pool=seed_pool, settings=test_settings, rng=rng)


@pytest.fixture
def client(session):
    """TestClient bound to an in-memory session."""
    from fastapi.testclient import TestClient

    from dailyglow.api.dependencies import get_session
    from dailyglow.main import app

    app.dependency_overrides[get_session] = lambda: session
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.pop(get_session, None)
