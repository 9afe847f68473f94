"""Persistence models: read-only ORM entities for the catalog collections."""

from app.infrastructure.persistence.models.collections import MCPServer, Skill, SubAgent
from app.infrastructure.persistence.models.guide import EndToEndGuide
from app.infrastructure.persistence.models.mixins import (
    CatalogModel,
    CuidMixin,
    TimestampMixin,
    UsageMixin,
)
from app.infrastructure.persistence.models.platform import PlatformProfile, PromptTemplate
from app.infrastructure.persistence.models.project import Project
from app.infrastructure.persistence.models.resource import Resource
from app.infrastructure.persistence.models.user import User

__all__ = [
    "User",
    "Project",
    "Resource",
    "Skill",
    "SubAgent",
    "MCPServer",
    "PlatformProfile",
    "PromptTemplate",
    "EndToEndGuide",
    "CatalogModel",
    "CuidMixin",
    "TimestampMixin",
    "UsageMixin",
]
