"""Domain enumerations for the catalog search service.

Enums represent the closed sets the search index is built from: the entity
type tags stored on every document, the source model names used by the
transform dispatcher, and the supported sort orders.
"""

from enum import Enum


class EntityType(str, Enum):
    """Entity type tag stored on every search document.

    Values never contain "_": the composite document id is split on the
    first underscore to recover the type.
    """

    PROJECT = "project"
    RESOURCE = "resource"
    SKILL = "skill"
    SUBAGENT = "subagent"
    MCP = "mcp"
    PLATFORM = "platform"
    PROMPT = "prompt"
    GUIDE = "guide"


class IndexableModel(str, Enum):
    """Source model names that can be transformed into search documents."""

    PROJECT = "Project"
    RESOURCE = "Resource"
    SKILL = "Skill"
    SUBAGENT = "SubAgent"
    MCP_SERVER = "MCPServer"
    PLATFORM_PROFILE = "PlatformProfile"
    PROMPT_TEMPLATE = "PromptTemplate"
    END_TO_END_GUIDE = "EndToEndGuide"

    @property
    def entity_type(self) -> EntityType:
        """Entity type tag produced when transforming this model."""
        return MODEL_TO_ENTITY_TYPE[self]


MODEL_TO_ENTITY_TYPE: dict[IndexableModel, EntityType] = {
    IndexableModel.PROJECT: EntityType.PROJECT,
    IndexableModel.RESOURCE: EntityType.RESOURCE,
    IndexableModel.SKILL: EntityType.SKILL,
    IndexableModel.SUBAGENT: EntityType.SUBAGENT,
    IndexableModel.MCP_SERVER: EntityType.MCP,
    IndexableModel.PLATFORM_PROFILE: EntityType.PLATFORM,
    IndexableModel.PROMPT_TEMPLATE: EntityType.PROMPT,
    IndexableModel.END_TO_END_GUIDE: EntityType.GUIDE,
}


class SearchSort(str, Enum):
    """Result ordering. RELEVANCE keeps the fuzzy-match order."""

    RELEVANCE = "relevance"
    RECENT = "recent"
    POPULAR = "popular"

    @classmethod
    def parse(cls, value: str | None) -> "SearchSort":
        """Return the matching sort order; unknown or empty values fall back to RELEVANCE."""
        if not value:
            return cls.RELEVANCE
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.RELEVANCE


class ResourceStatus(str, Enum):
    """Moderation state of a submitted resource. Only APPROVED resources are indexed."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
