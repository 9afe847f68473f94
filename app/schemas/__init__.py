"""Pydantic request/response schemas for the API."""

from app.schemas.health import (
    HealthResponse,
    ReadinessErrorResponse,
    ReadinessResponse,
)
from app.schemas.search import (
    IndexStatsResponse,
    InvalidateResponse,
    SearchFacetsResponse,
    SearchMeta,
    SearchResponse,
    SearchResultItemResponse,
    SuggestionResponse,
    SuggestResponse,
)

__all__ = [
    "HealthResponse",
    "IndexStatsResponse",
    "InvalidateResponse",
    "ReadinessErrorResponse",
    "ReadinessResponse",
    "SearchFacetsResponse",
    "SearchMeta",
    "SearchResponse",
    "SearchResultItemResponse",
    "SuggestionResponse",
    "SuggestResponse",
]
