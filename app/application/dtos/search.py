"""DTOs for catalog search: indexed documents, queries, results (no dependency on ORM)."""

from dataclasses import dataclass, field
from typing import Literal

from app.domain.enums import EntityType, SearchSort


@dataclass(frozen=True)
class SearchDocument:
    """Normalized unit stored in the in-memory index.

    id is "{entity_type}_{entity_id}". content always contains title and
    description. platforms and tags are never None. Timestamps are Unix
    seconds.
    """

    id: str
    entity_type: EntityType
    entity_id: str
    title: str
    description: str
    content: str
    category: str | None
    platforms: list[str]
    tags: list[str]
    author: str | None
    status: str
    created_at: int
    updated_at: int
    popularity: int
    url: str
    thumbnail: str | None
    # Reserved for hybrid (embedding) search; never populated.
    vectors: dict[str, list[float]] | None = None


@dataclass(frozen=True)
class SearchQuery:
    """Normalized search input. page is 1-based; limit is already clamped."""

    q: str
    type: str | None = None
    platform: str | None = None
    category: str | None = None
    sort: SearchSort = SearchSort.RELEVANCE
    page: int = 1
    limit: int = 20


@dataclass(frozen=True)
class SearchFacets:
    """Frequency tables over a filtered (not paginated) candidate set."""

    entity_type: dict[str, int] = field(default_factory=dict)
    platform: dict[str, int] = field(default_factory=dict)
    category: dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class SearchResultItem:
    """Single search hit (read-model). highlights omits fields that were not highlighted."""

    id: str
    entity_type: EntityType
    entity_id: str
    title: str
    description: str
    url: str
    category: str | None
    platforms: list[str]
    thumbnail: str | None
    score: float
    highlights: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class SearchOutcome:
    """Result of SearchService.search.

    total is the filtered candidate count before pagination. cached is True
    when the index was already fresh (no rebuild for this call).
    """

    results: list[SearchResultItem]
    facets: SearchFacets
    total: int
    latency: float
    cached: bool = True


@dataclass(frozen=True)
class SearchSuggestion:
    text: str
    entity_type: EntityType
    entity_id: str
    url: str
    type: Literal["entity", "query"] = "entity"


@dataclass(frozen=True)
class IndexStats:
    """Snapshot of the in-memory index. is_indexing is reserved for async rebuilds."""

    number_of_documents: int
    is_indexing: bool
    index_age_seconds: float | None
    ttl_seconds: float
