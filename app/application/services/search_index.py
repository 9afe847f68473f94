"""Search index cache: owns the in-memory fuzzy index and decides when to rebuild it.

Rebuilds are pull-based: ensure_fresh() rebuilds when no index exists or the
TTL has elapsed, and invalidate() forces the next call to rebuild. Concurrent
callers that find the index stale share one in-flight rebuild (single-flight).
A rebuild either installs a complete new snapshot or leaves the previous one
untouched.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from typing import Any

from app.application.dtos.search import SearchDocument
from app.application.interfaces.repositories import ICatalogSource
from app.application.services.entity_transformer import transform_entity
from app.application.services.fuzzy_index import FuzzyIndex
from app.domain.enums import IndexableModel
from app.domain.exceptions import UpstreamFetchException
from app.shared.telemetry.tracing import add_span_attributes, traced

logger = logging.getLogger(__name__)

DEFAULT_INDEX_TTL_SECONDS = 5 * 60


@dataclass(frozen=True)
class IndexSnapshot:
    """Index, its backing documents, and build time; replaced as one reference."""

    index: FuzzyIndex
    documents: tuple[SearchDocument, ...]
    built_at: float
    # False when invalidate() ran while this snapshot was being built.
    trusted: bool = True


class SearchIndexCache:
    """TTL-cached fuzzy index over all catalog collections.

    Args:
        source: Catalog collaborator read on every rebuild.
        ttl_seconds: Maximum age of a trusted index.
        clock: Monotonic clock in seconds (injectable for tests).
        threshold: Fuzzy distance threshold passed to FuzzyIndex.
        min_match_chars: Minimum query term length passed to FuzzyIndex.
    """

    def __init__(
        self,
        source: ICatalogSource,
        ttl_seconds: float = DEFAULT_INDEX_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
        threshold: float = 0.4,
        min_match_chars: int = 2,
    ) -> None:
        self._source = source
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._threshold = threshold
        self._min_match_chars = min_match_chars
        self._snapshot: IndexSnapshot | None = None
        self._inflight: asyncio.Task[IndexSnapshot] | None = None
        self._generation = 0

    @property
    def snapshot(self) -> IndexSnapshot | None:
        return self._snapshot

    @property
    def index(self) -> FuzzyIndex | None:
        snapshot = self._snapshot
        return snapshot.index if snapshot is not None else None

    @property
    def documents(self) -> tuple[SearchDocument, ...]:
        snapshot = self._snapshot
        return snapshot.documents if snapshot is not None else ()

    @property
    def is_rebuilding(self) -> bool:
        return self._inflight is not None and not self._inflight.done()

    def index_age(self) -> float | None:
        """Seconds since the current index was built, or None before the first build."""
        snapshot = self._snapshot
        if snapshot is None:
            return None
        return self._clock() - snapshot.built_at

    def is_fresh(self) -> bool:
        snapshot = self._snapshot
        if snapshot is None or not snapshot.trusted:
            return False
        return self._clock() - snapshot.built_at < self.ttl_seconds

    def invalidate(self) -> None:
        """Drop the cached index so the next ensure_fresh() rebuilds regardless of TTL.

        A rebuild already in flight is detached: it may have read data older
        than this call, so its result is only installed if nothing newer is.
        """
        self._generation += 1
        self._snapshot = None
        self._inflight = None
        logger.info("Search index invalidated")

    async def ensure_fresh(self) -> bool:
        """Rebuild the index if missing or expired.

        Returns:
            True if this call waited for a rebuild, False if the index was already fresh.

        Raises:
            UpstreamFetchException: A collection read failed; the previous index is kept.
        """
        if self.is_fresh():
            return False
        task = self._inflight
        if task is None or task.done():
            task = asyncio.ensure_future(self._rebuild())
            task.add_done_callback(self._on_rebuild_done)
            self._inflight = task
        await asyncio.shield(task)
        return True

    def _on_rebuild_done(self, task: asyncio.Task[IndexSnapshot]) -> None:
        if self._inflight is task:
            self._inflight = None
        if not task.cancelled():
            # Mark the exception retrieved; awaiting callers re-raise it themselves.
            task.exception()

    async def _fetch(
        self, model: IndexableModel, fetch: Callable[[], Awaitable[Sequence[Any]]]
    ) -> list[SearchDocument]:
        try:
            rows = await fetch()
        except UpstreamFetchException:
            raise
        except Exception as e:
            raise UpstreamFetchException(model.value, str(e)) from e
        return [transform_entity(model, row) for row in rows]

    @traced("search_index.rebuild")
    async def _rebuild(self) -> IndexSnapshot:
        generation = self._generation
        started = time.perf_counter()
        logger.info("Building search index...")
        fetchers: dict[IndexableModel, Callable[[], Awaitable[Sequence[Any]]]] = {
            IndexableModel.PROJECT: self._source.list_projects,
            IndexableModel.RESOURCE: self._source.list_approved_resources,
            IndexableModel.SKILL: self._source.list_skills,
            IndexableModel.SUBAGENT: self._source.list_subagents,
            IndexableModel.MCP_SERVER: self._source.list_mcp_servers,
            IndexableModel.PLATFORM_PROFILE: self._source.list_platform_profiles,
            IndexableModel.PROMPT_TEMPLATE: self._source.list_prompt_templates,
            IndexableModel.END_TO_END_GUIDE: self._source.list_guides,
        }
        # The first failed read cancels the remaining ones.
        try:
            async with asyncio.TaskGroup() as tg:
                tasks = [
                    tg.create_task(self._fetch(model, fetch))
                    for model, fetch in fetchers.items()
                ]
        except ExceptionGroup as group:
            failed, _ = group.split(UpstreamFetchException)
            if failed is None:
                raise
            error = failed.exceptions[0]
            logger.error(
                "Search index rebuild aborted: %s (%s)",
                error.details.get("collection"),
                error.details.get("reason"),
                exc_info=error,
            )
            raise error

        documents = tuple(doc for task in tasks for doc in task.result())
        index = FuzzyIndex(
            documents,
            threshold=self._threshold,
            min_match_chars=self._min_match_chars,
        )
        snapshot = IndexSnapshot(
            index=index,
            documents=documents,
            built_at=self._clock(),
            trusted=generation == self._generation,
        )
        if snapshot.trusted or self._snapshot is None:
            self._snapshot = snapshot
        add_span_attributes(document_count=len(documents))
        logger.info(
            "Search index built with %d documents in %.1fms",
            len(documents),
            (time.perf_counter() - started) * 1000,
        )
        return snapshot
