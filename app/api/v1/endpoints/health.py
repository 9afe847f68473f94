"""Health check endpoints: liveness, readiness, and search index stats."""

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.api.v1.dependencies import get_search_service
from app.application.use_cases.search import SearchService
from app.schemas.health import (
    HealthResponse,
    ReadinessErrorResponse,
    ReadinessResponse,
)
from app.schemas.search import IndexStatsResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return simple ok status for liveness."""
    return HealthResponse()


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={503: {"description": "Search index unavailable", "model": ReadinessErrorResponse}},
)
async def readiness_check(
    search_svc: Annotated[SearchService, Depends(get_search_service)],
) -> ReadinessResponse | JSONResponse:
    """Return 200 once a search index exists; 503 if none could be built.

    Runs a freshness pass, so the first probe after startup builds the index.
    """
    if await search_svc.health_check():
        return ReadinessResponse()
    return JSONResponse(
        status_code=503,
        content=ReadinessErrorResponse(
            status="not_ready",
            message="Search index unavailable",
        ).model_dump(),
    )


@router.get("/search", response_model=IndexStatsResponse)
def search_index_stats(
    search_svc: Annotated[SearchService, Depends(get_search_service)],
) -> IndexStatsResponse:
    """Document count and age of the in-memory index. Does not trigger a rebuild."""
    return IndexStatsResponse.from_stats(search_svc.get_stats())
