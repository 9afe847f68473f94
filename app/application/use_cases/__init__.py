"""Application use cases: one entry point per workflow."""

from app.application.use_cases.search import SearchService, build_query

__all__ = [
    "SearchService",
    "build_query",
]
