"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. Routes get
the SearchService from app.api.v1.dependencies.
"""

from fastapi import APIRouter

from app.api.v1.endpoints import health, search

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(search.router, prefix="/search", tags=["search"])
