"""Presentation-layer dependency injection (composition root).

The SearchService is built once per process in the app lifespan and stored
on app.state; routes receive it through get_search_service. Tests can set
app.state.search_service to a service over an in-memory catalog source.
"""

from __future__ import annotations

from fastapi import Request

from app.application.interfaces import ICatalogSource
from app.application.services.search_index import SearchIndexCache
from app.application.use_cases.search import SearchService
from app.core.config import Settings, get_settings
from app.domain.exceptions import SearchIndexUnavailableException


def create_search_service(
    source: ICatalogSource | None = None, settings: Settings | None = None
) -> SearchService:
    """Build SearchService and its index cache from settings (composition root).

    Without a source the SQL catalog repository is used.
    """
    settings = settings or get_settings()
    if source is None:
        from app.infrastructure.persistence.repositories import CatalogReadRepository

        source = CatalogReadRepository()
    index_cache = SearchIndexCache(
        source,
        ttl_seconds=settings.search_index_ttl_seconds,
        threshold=settings.search_fuzzy_threshold,
        min_match_chars=settings.search_min_match_chars,
    )
    return SearchService(index_cache, max_limit=settings.search_max_limit)


def get_search_service(request: Request) -> SearchService:
    """Process-wide SearchService (set in lifespan)."""
    service = getattr(request.app.state, "search_service", None)
    if service is None:
        raise SearchIndexUnavailableException("search service not initialized")
    return service
