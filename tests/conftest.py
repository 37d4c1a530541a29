"""
Pytest configuration and fixtures for the leaderboard API tests.

Unit tests run against an in-process Redis double (fakeredis), one fresh
server per test, injected into the components the same way the application
injects its real client.
"""

import pytest
import pytest_asyncio
import fakeredis
from httpx import ASGITransport, AsyncClient

from leaderboard_api.database import IdentityStore, RankingEngine
from leaderboard_api.main import create_app

ACTIVITY_PREFIX = "lb:act:"
TIMESTAMP_PREFIX = "lb:ts:"
USER_PREFIX = "lb:user:"


@pytest_asyncio.fixture
async def redis_client():
    """Fresh fake Redis server per test."""
    client = fakeredis.FakeAsyncRedis(server=fakeredis.FakeServer(), decode_responses=True)
    yield client
    await client.aclose()


@pytest.fixture
def engine(redis_client):
    return RankingEngine(redis_client, ACTIVITY_PREFIX, TIMESTAMP_PREFIX)


@pytest.fixture
def users(redis_client):
    return IdentityStore(redis_client, USER_PREFIX)


@pytest_asyncio.fixture
async def sample_scores(engine):
    """The three-submission scenario used throughout the ranking tests."""
    await engine.submit_score("activity-1", "user@1", 110)
    await engine.submit_score("activity-1", "user@2", 120)
    await engine.submit_score("activity-2", "user@1", 210)
    return engine


@pytest_asyncio.fixture
async def api(redis_client):
    """HTTP client bound to an app that uses the fake Redis client."""
    app = create_app(client=redis_client)
    await app.state.db.initialize()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    await app.state.db.close()
