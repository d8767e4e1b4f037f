"""Service test fixtures — FastAPI test client with an isolated result cache.

Invariants:
    - Every test gets a fresh ResultCache (no hits leak between tests)
    - get_result_cache dependency overridden, cleared after each test

Design Decisions:
    - httpx AsyncClient over ASGITransport: exercises routing, validation and
      error handlers without a running server
"""

import pytest
from httpx import ASGITransport, AsyncClient

from ruliad.core.result_cache import ResultCache
from ruliad.main import app
from ruliad.services.analysis_service import get_result_cache


@pytest.fixture
def result_cache():
    return ResultCache(8)


@pytest.fixture
async def client(result_cache):
    """FastAPI test client with the cache dependency overridden."""
    app.dependency_overrides[get_result_cache] = lambda: result_cache

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
