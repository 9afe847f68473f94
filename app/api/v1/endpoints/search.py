"""Search API: fuzzy catalog search, title suggestions, and index invalidation."""

import hmac
import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Header, HTTPException, Query, Request, status

from app.api.v1.dependencies import get_search_service
from app.application.use_cases.search import SearchService, build_query, coerce_positive_int
from app.core.config import get_settings
from app.core.limiter import limit_search, limit_suggest
from app.domain.exceptions import ValidationException
from app.schemas.search import (
    InvalidateResponse,
    SearchResponse,
    SuggestionResponse,
    SuggestResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()

INVALIDATE_SECRET_HEADER = "X-Search-Invalidate-Secret"


def _check_query_length(q: str | None) -> None:
    max_length = get_settings().search_max_query_length
    if q and len(q) > max_length:
        raise ValidationException(
            f"Query must be at most {max_length} characters",
            field="q",
        )


@router.get("", response_model=SearchResponse)
@limit_search
async def search(
    request: Request,
    search_svc: Annotated[SearchService, Depends(get_search_service)],
    q: str | None = Query(None, description="Free-text query; empty returns no results"),
    type: str | None = Query(None, description="Entity type filter (e.g. skill, mcp)"),
    platform: str | None = Query(None, description="Platform filter (e.g. cursor)"),
    category: str | None = Query(None, description="Category filter"),
    sort: str | None = Query(None, description="relevance | recent | popular"),
    page: str | None = Query(None, description="1-based page; invalid values mean 1"),
    limit: str | None = Query(None, description="Page size; capped at 50"),
) -> SearchResponse:
    """Ranked, filtered, faceted search across every catalog collection."""
    _check_query_length(q)
    settings = get_settings()
    query = build_query(
        q,
        type=type,
        platform=platform,
        category=category,
        sort=sort,
        page=page,
        limit=limit,
        default_limit=settings.search_default_limit,
        max_limit=settings.search_max_limit,
    )
    outcome = await search_svc.search(query)
    return SearchResponse.from_outcome(outcome, page=query.page, limit=query.limit)


@router.get("/suggest", response_model=SuggestResponse)
@limit_suggest
async def suggest(
    request: Request,
    search_svc: Annotated[SearchService, Depends(get_search_service)],
    q: str | None = Query(None, description="Prefix or partial title"),
    limit: str | None = Query(None, description="Number of suggestions (1-20)"),
) -> SuggestResponse:
    """Top matching titles for type-ahead."""
    _check_query_length(q)
    settings = get_settings()
    n = min(
        coerce_positive_int(limit, settings.suggest_default_limit),
        settings.suggest_max_limit,
    )
    suggestions = await search_svc.suggest(q or "", limit=n)
    return SuggestResponse(
        suggestions=[SuggestionResponse.from_suggestion(s) for s in suggestions]
    )


@router.post(
    "/invalidate",
    response_model=InvalidateResponse,
    status_code=status.HTTP_202_ACCEPTED,
)
async def invalidate(
    search_svc: Annotated[SearchService, Depends(get_search_service)],
    secret: Annotated[str | None, Header(alias=INVALIDATE_SECRET_HEADER)] = None,
) -> InvalidateResponse:
    """Drop the cached index so the next search rebuilds it.

    Called by catalog write paths after create/update/delete.
    """
    configured = get_settings().search_invalidate_secret
    if configured is None or not configured.get_secret_value():
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Search invalidation is not configured",
        )
    if not secret or not hmac.compare_digest(
        secret.encode(), configured.get_secret_value().encode()
    ):
        logger.warning("Rejected search invalidation with bad secret")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid invalidation secret",
        )
    search_svc.invalidate()
    return InvalidateResponse()
