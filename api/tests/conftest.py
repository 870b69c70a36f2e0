"""Shared test fixtures."""

import pytest
from httpx import ASGITransport, AsyncClient

from factories import make_config, make_period
from teesheet.main import app
from teesheet.models import ScheduleConfig


@pytest.fixture
async def client():
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def prime_am_config() -> ScheduleConfig:
    """Weekdays 06:00-17:00, one 'Prime AM' period 07:00-11:00 every 8 minutes, twilight 16:00."""
    return make_config(time_periods=[make_period("Prime AM", "07:00", "11:00", 8, prime=True)])
