"""Pytest configuration and fixtures for hubsearch.

Environment is pinned before app.main is imported: no database, no
telemetry exporter, rate limiting off, a known invalidation secret.
HTTP tests run against app.main:app with app.state.search_service swapped
for a service over an in-memory catalog (ASGITransport does not run lifespan).
"""

import os

os.environ["DATABASE_URL"] = ""
os.environ["TELEMETRY_ENABLED"] = "false"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["SEARCH_INVALIDATE_SECRET"] = "test-invalidate-secret"

import pytest
from httpx import ASGITransport, AsyncClient

from app.application.services.search_index import SearchIndexCache
from app.application.use_cases.search import SearchService
from app.core.config import get_settings
from tests.factories import (
    FakeClock,
    InMemoryCatalogSource,
    at,
    project,
    resource,
    subagent,
)

get_settings.cache_clear()

from app.main import app  # noqa: E402

TEST_INVALIDATE_SECRET = "test-invalidate-secret"


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def catalog() -> InMemoryCatalogSource:
    """Small catalog spanning several entity types, platforms and categories."""
    return InMemoryCatalogSource(
        projects=[
            project(
                "p1",
                "Cursor Setup Guide",
                description="Configure rules and shortcuts",
                category="setup",
                platforms=["cursor"],
                upvote_count=5,
                view_count=40,
                created_at=at(3),
            ),
        ],
        resources=[
            resource(
                "r1",
                "Claude Code Debugging",
                description="Tracing failures step by step",
                type="video",
                platforms=["claude"],
                view_count=12,
                created_at=at(1),
            ),
            resource(
                "r2",
                "Unreviewed Submission",
                status="PENDING",
                created_at=at(2),
            ),
        ],
        subagents=[
            subagent(
                "a1",
                "Python Expert Agent",
                role="Reviews Python services",
                category="backend",
                platforms=["claude", "cursor"],
                use_count=7,
                created_at=at(5),
            ),
        ],
    )


@pytest.fixture
def index_cache(catalog: InMemoryCatalogSource, clock: FakeClock) -> SearchIndexCache:
    return SearchIndexCache(catalog, ttl_seconds=300, clock=clock)


@pytest.fixture
def search_service(index_cache: SearchIndexCache) -> SearchService:
    return SearchService(index_cache)


@pytest.fixture
async def client(search_service: SearchService) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI) wired to the in-memory catalog."""
    previous = getattr(app.state, "search_service", None)
    app.state.search_service = search_service
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.state.search_service = previous

