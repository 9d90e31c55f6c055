from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from clock_server.api.deps import get_clock
from clock_server.main import app

FIXED_INSTANT = datetime(2024, 1, 5, 14, 30, 45, 123456, tzinfo=timezone.utc)


@pytest.fixture()
def client():
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides = {}


@pytest.fixture()
def fixed_clock():
    """Pin the API clock to FIXED_INSTANT for the duration of a test."""
    app.dependency_overrides[get_clock] = lambda: (lambda: FIXED_INSTANT)
    yield FIXED_INSTANT
    app.dependency_overrides.pop(get_clock, None)
