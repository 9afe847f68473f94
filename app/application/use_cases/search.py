"""Catalog search use case: ranked, filtered, faceted, paginated fuzzy search.

SearchService is constructed once per process and shared by all requests.
It owns a SearchIndexCache and reads catalog data only through it.
"""

from __future__ import annotations

import logging
import time
from typing import Any

from app.application.dtos.search import (
    IndexStats,
    SearchDocument,
    SearchFacets,
    SearchOutcome,
    SearchQuery,
    SearchResultItem,
    SearchSuggestion,
)
from app.application.services.facets import build_facets
from app.application.services.fuzzy_index import FuzzyIndex, FuzzyMatch
from app.application.services.highlighting import build_highlights
from app.application.services.search_index import SearchIndexCache
from app.domain.enums import SearchSort
from app.domain.exceptions import (
    SearchIndexUnavailableException,
    UpstreamFetchException,
)
from app.shared.telemetry.tracing import add_span_attributes, traced

logger = logging.getLogger(__name__)

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 20
MAX_LIMIT = 50
DEFAULT_SUGGEST_LIMIT = 8


def coerce_positive_int(value: Any, default: int) -> int:
    """Parse value as an int >= 1; anything else (None, "abc", 0, -3) yields default."""
    if value is None or isinstance(value, bool):
        return default
    try:
        parsed = int(str(value).strip())
    except ValueError:
        return default
    return parsed if parsed >= 1 else default


def build_query(
    q: str | None,
    type: str | None = None,
    platform: str | None = None,
    category: str | None = None,
    sort: str | None = None,
    page: Any = None,
    limit: Any = None,
    *,
    default_limit: int = DEFAULT_LIMIT,
    max_limit: int = MAX_LIMIT,
) -> SearchQuery:
    """Build a SearchQuery from raw request values, clamping instead of rejecting.

    Malformed page/limit fall back to defaults; limit is capped at max_limit;
    unknown sort values mean relevance; blank filters are ignored.
    """
    return SearchQuery(
        q=q or "",
        type=type or None,
        platform=platform or None,
        category=category or None,
        sort=SearchSort.parse(sort),
        page=coerce_positive_int(page, DEFAULT_PAGE),
        limit=min(coerce_positive_int(limit, default_limit), max_limit),
    )


class SearchService:
    """Query engine, suggestion engine, and health/stats reporter over one index cache."""

    def __init__(self, index_cache: SearchIndexCache, max_limit: int = MAX_LIMIT) -> None:
        self.index_cache = index_cache
        self.max_limit = max_limit

    async def _ensure_index(self) -> tuple[FuzzyIndex, bool]:
        """Return (index, cached). Serves the last good index if a rebuild fails."""
        try:
            rebuilt = await self.index_cache.ensure_fresh()
        except UpstreamFetchException as e:
            stale = self.index_cache.index
            if stale is None:
                raise
            logger.warning(
                "Serving stale search index after failed rebuild: %s", e.message
            )
            return stale, True
        index = self.index_cache.index
        if index is None:
            raise SearchIndexUnavailableException("index missing after rebuild")
        return index, not rebuilt

    @staticmethod
    def _apply_filters(
        documents: list[SearchDocument], query: SearchQuery
    ) -> list[SearchDocument]:
        if query.type:
            documents = [d for d in documents if d.entity_type.value == query.type]
        if query.platform:
            documents = [d for d in documents if query.platform in d.platforms]
        if query.category:
            documents = [d for d in documents if d.category == query.category]
        return documents

    @staticmethod
    def _apply_sort(
        documents: list[SearchDocument], sort: SearchSort
    ) -> list[SearchDocument]:
        # "recent" orders by creation time; sorted() is stable so relevance breaks ties.
        if sort is SearchSort.RECENT:
            return sorted(documents, key=lambda d: d.created_at, reverse=True)
        if sort is SearchSort.POPULAR:
            return sorted(documents, key=lambda d: d.popularity, reverse=True)
        return documents

    @staticmethod
    def _to_result(
        document: SearchDocument, match: FuzzyMatch | None, q: str
    ) -> SearchResultItem:
        score = 1 - match.score if match is not None and match.score else 1.0
        has_matches = match is not None and bool(match.matches)
        return SearchResultItem(
            id=document.id,
            entity_type=document.entity_type,
            entity_id=document.entity_id,
            title=document.title,
            description=document.description,
            url=document.url,
            category=document.category,
            platforms=list(document.platforms),
            thumbnail=document.thumbnail,
            score=score,
            highlights=build_highlights(document, q, has_matches),
        )

    @traced("search.query")
    async def search(self, query: SearchQuery) -> SearchOutcome:
        """Run a full search: match, filter, sort, facet, paginate, score, highlight.

        An empty or whitespace-only query returns an empty outcome without
        touching the index.
        """
        started = time.perf_counter()
        if not query.q.strip():
            return SearchOutcome(
                results=[],
                facets=SearchFacets(),
                total=0,
                latency=_elapsed_ms(started),
                cached=self.index_cache.is_fresh(),
            )

        index, cached = await self._ensure_index()
        matches = index.search(query.q)
        by_id = {m.document.id: m for m in matches}

        candidates = self._apply_filters([m.document for m in matches], query)
        candidates = self._apply_sort(candidates, query.sort)
        facets = build_facets(candidates)

        limit = min(max(query.limit, 1), self.max_limit)
        page = max(query.page, 1)
        offset = (page - 1) * limit
        page_docs = candidates[offset : offset + limit]

        results = [self._to_result(d, by_id.get(d.id), query.q) for d in page_docs]
        add_span_attributes(
            sort=query.sort.value, page=page, limit=limit, count=len(candidates)
        )
        return SearchOutcome(
            results=results,
            facets=facets,
            total=len(candidates),
            latency=_elapsed_ms(started),
            cached=cached,
        )

    async def suggest(
        self, query: str, limit: int = DEFAULT_SUGGEST_LIMIT
    ) -> list[SearchSuggestion]:
        """Top-N title suggestions in match order; no filters, sorting or facets."""
        if not query.strip():
            return []
        index, _ = await self._ensure_index()
        return [
            SearchSuggestion(
                text=m.document.title,
                entity_type=m.document.entity_type,
                entity_id=m.document.entity_id,
                url=m.document.url,
            )
            for m in index.search(query, limit=limit)
        ]

    def invalidate(self) -> None:
        """Force the next search or suggest call to rebuild the index."""
        self.index_cache.invalidate()

    async def health_check(self) -> bool:
        """Return True if an index exists after a freshness pass; never raises."""
        try:
            await self.index_cache.ensure_fresh()
        except Exception:
            logger.warning("Search health check failed", exc_info=True)
            return False
        return self.index_cache.index is not None

    def get_stats(self) -> IndexStats:
        return IndexStats(
            number_of_documents=len(self.index_cache.documents),
            is_indexing=False,
            index_age_seconds=self.index_cache.index_age(),
            ttl_seconds=self.index_cache.ttl_seconds,
        )


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 3)
