"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs only; no infrastructure imports.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from app.application.dtos.catalog import (
        GuideRecord,
        McpServerRecord,
        PlatformProfileRecord,
        ProjectRecord,
        PromptTemplateRecord,
        ResourceRecord,
        SkillRecord,
        SubAgentRecord,
    )


class ICatalogSource(Protocol):
    """Protocol for the catalog data store read by the search index builder (DIP).

    Each method returns the full collection with relations resolved. Calls
    may run concurrently, so implementations must not share a session
    between them.
    """

    async def list_projects(self) -> Sequence[ProjectRecord]:
        """Return all projects with their author resolved."""

    async def list_approved_resources(self) -> Sequence[ResourceRecord]:
        """Return resources whose moderation status is APPROVED."""

    async def list_skills(self) -> Sequence[SkillRecord]:
        """Return all skills."""

    async def list_subagents(self) -> Sequence[SubAgentRecord]:
        """Return all sub-agents."""

    async def list_mcp_servers(self) -> Sequence[McpServerRecord]:
        """Return all MCP servers."""

    async def list_platform_profiles(self) -> Sequence[PlatformProfileRecord]:
        """Return all platform profiles."""

    async def list_prompt_templates(self) -> Sequence[PromptTemplateRecord]:
        """Return all prompt templates with their platform resolved."""

    async def list_guides(self) -> Sequence[GuideRecord]:
        """Return all end-to-end guides."""
