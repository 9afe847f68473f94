"""Application DTOs (no ORM dependency)."""

from app.application.dtos.catalog import (
    GuideRecord,
    McpServerRecord,
    PlatformProfileRecord,
    PlatformRef,
    ProjectRecord,
    PromptTemplateRecord,
    ResourceRecord,
    SkillRecord,
    SubAgentRecord,
    UserRecord,
)
from app.application.dtos.search import (
    IndexStats,
    SearchDocument,
    SearchFacets,
    SearchOutcome,
    SearchQuery,
    SearchResultItem,
    SearchSuggestion,
)

__all__ = [
    "GuideRecord",
    "IndexStats",
    "McpServerRecord",
    "PlatformProfileRecord",
    "PlatformRef",
    "ProjectRecord",
    "PromptTemplateRecord",
    "ResourceRecord",
    "SearchDocument",
    "SearchFacets",
    "SearchOutcome",
    "SearchQuery",
    "SearchResultItem",
    "SearchSuggestion",
    "SkillRecord",
    "SubAgentRecord",
    "UserRecord",
]
