"""Search API schemas. Wire format is camelCase."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.application.dtos.search import (
    IndexStats,
    SearchFacets,
    SearchOutcome,
    SearchResultItem,
    SearchSuggestion,
)


class CamelModel(BaseModel):
    """Base for response models serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SearchResultItemResponse(CamelModel):
    """Single search hit. _highlights is empty when the hit had no match locations."""

    id: str
    entity_type: str
    entity_id: str
    title: str
    description: str
    url: str
    category: str | None = None
    platforms: list[str] = Field(default_factory=list)
    thumbnail: str | None = None
    score: float = Field(..., alias="_score", description="Similarity, higher is better")
    highlights: dict[str, str] = Field(default_factory=dict, alias="_highlights")

    @classmethod
    def from_item(cls, item: SearchResultItem) -> "SearchResultItemResponse":
        return cls(
            id=item.id,
            entity_type=item.entity_type.value,
            entity_id=item.entity_id,
            title=item.title,
            description=item.description,
            url=item.url,
            category=item.category,
            platforms=item.platforms,
            thumbnail=item.thumbnail,
            score=item.score,
            highlights=item.highlights,
        )


class SearchFacetsResponse(CamelModel):
    """Counts over the filtered (not paginated) candidate set."""

    entity_type: dict[str, int] = Field(default_factory=dict)
    platform: dict[str, int] = Field(default_factory=dict)
    category: dict[str, int] = Field(default_factory=dict)

    @classmethod
    def from_facets(cls, facets: SearchFacets) -> "SearchFacetsResponse":
        return cls(
            entity_type=facets.entity_type,
            platform=facets.platform,
            category=facets.category,
        )


class SearchMeta(CamelModel):
    total: int
    page: int
    limit: int
    total_pages: int
    latency: float = Field(..., description="Server-side latency in milliseconds")
    cached: bool = Field(..., description="True when the index was already fresh")


class SearchResponse(CamelModel):
    """Response for GET /search."""

    results: list[SearchResultItemResponse]
    facets: SearchFacetsResponse
    meta: SearchMeta

    @classmethod
    def from_outcome(
        cls, outcome: SearchOutcome, page: int, limit: int
    ) -> "SearchResponse":
        total_pages = -(-outcome.total // limit) if limit else 0
        return cls(
            results=[SearchResultItemResponse.from_item(r) for r in outcome.results],
            facets=SearchFacetsResponse.from_facets(outcome.facets),
            meta=SearchMeta(
                total=outcome.total,
                page=page,
                limit=limit,
                total_pages=total_pages,
                latency=outcome.latency,
                cached=outcome.cached,
            ),
        )


class SuggestionResponse(CamelModel):
    text: str
    type: Literal["entity", "query"] = "entity"
    entity_type: str
    entity_id: str
    url: str

    @classmethod
    def from_suggestion(cls, s: SearchSuggestion) -> "SuggestionResponse":
        return cls(
            text=s.text,
            type=s.type,
            entity_type=s.entity_type.value,
            entity_id=s.entity_id,
            url=s.url,
        )


class SuggestResponse(CamelModel):
    """Response for GET /search/suggest."""

    suggestions: list[SuggestionResponse]


class InvalidateResponse(CamelModel):
    """Response for POST /search/invalidate (202)."""

    status: Literal["invalidated"] = "invalidated"


class IndexStatsResponse(CamelModel):
    """Response for GET /health/search."""

    number_of_documents: int
    is_indexing: bool = False
    index_age_seconds: float | None = None
    ttl_seconds: float

    @classmethod
    def from_stats(cls, stats: IndexStats) -> "IndexStatsResponse":
        return cls(
            number_of_documents=stats.number_of_documents,
            is_indexing=stats.is_indexing,
            index_age_seconds=stats.index_age_seconds,
            ttl_seconds=stats.ttl_seconds,
        )
