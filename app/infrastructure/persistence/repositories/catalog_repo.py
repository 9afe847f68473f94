"""Catalog read repository. Interface methods return application record DTOs.

Each list_* call opens its own short-lived session so the eight collection
reads issued by an index rebuild can run concurrently.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any, TypeVar

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm import selectinload

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
from app.domain.enums import ResourceStatus
from app.infrastructure.persistence.database import get_session_factory
from app.infrastructure.persistence.models import (
    EndToEndGuide,
    MCPServer,
    PlatformProfile,
    Project,
    PromptTemplate,
    Resource,
    Skill,
    SubAgent,
)

T = TypeVar("T")


def _list(value: list[str] | None) -> list[str]:
    return list(value) if value else []


def _project_to_record(p: Project) -> ProjectRecord:
    return ProjectRecord(
        id=p.id,
        title=p.title,
        description=p.description,
        category=p.category,
        created_at=p.created_at,
        updated_at=p.updated_at,
        long_description=p.long_description,
        tech_stack=_list(p.tech_stack),
        platforms=_list(p.platforms),
        screenshots=_list(p.screenshots),
        upvote_count=p.upvote_count,
        view_count=p.view_count,
        author=UserRecord(id=p.author.id, username=p.author.username)
        if p.author is not None
        else None,
    )


def _resource_to_record(r: Resource) -> ResourceRecord:
    return ResourceRecord(
        id=r.id,
        title=r.title,
        type=r.type,
        status=r.status,
        created_at=r.created_at,
        updated_at=r.updated_at,
        description=r.description,
        source=r.source,
        author=r.author,
        tags=_list(r.tags),
        platforms=_list(r.platforms),
        view_count=r.view_count,
        featured=r.featured,
        thumbnail=r.thumbnail,
    )


def _skill_to_record(s: Skill) -> SkillRecord:
    return SkillRecord(
        id=s.id,
        slug=s.slug,
        name=s.name,
        tagline=s.tagline,
        category=s.category,
        created_at=s.created_at,
        updated_at=s.updated_at,
        description=s.description,
        examples=_list(s.examples),
        triggers=_list(s.triggers),
        platforms=_list(s.platforms),
        author_name=s.author_name,
        use_count=s.use_count,
        featured=s.featured,
        icon_url=s.icon_url,
    )


def _subagent_to_record(a: SubAgent) -> SubAgentRecord:
    return SubAgentRecord(
        id=a.id,
        slug=a.slug,
        name=a.name,
        role=a.role,
        category=a.category,
        created_at=a.created_at,
        updated_at=a.updated_at,
        language=a.language,
        framework=a.framework,
        when_to_use=a.when_to_use,
        examples=_list(a.examples),
        platforms=_list(a.platforms),
        author_name=a.author_name,
        use_count=a.use_count,
        featured=a.featured,
    )


def _mcp_to_record(m: MCPServer) -> McpServerRecord:
    return McpServerRecord(
        id=m.id,
        slug=m.slug,
        name=m.name,
        description=m.description,
        category=m.category,
        provider=m.provider,
        created_at=m.created_at,
        updated_at=m.updated_at,
        platforms=_list(m.platforms),
        use_count=m.use_count,
        featured=m.featured,
        icon_url=m.icon_url,
    )


def _platform_to_record(p: PlatformProfile) -> PlatformProfileRecord:
    return PlatformProfileRecord(
        id=p.id,
        platform_id=p.platform_id,
        name=p.name,
        created_at=p.created_at,
        updated_at=p.updated_at,
        tagline=p.tagline,
        description=p.description,
        cheat_sheet=_list(p.cheat_sheet),
        best_practices=_list(p.best_practices),
    )


def _prompt_to_record(t: PromptTemplate) -> PromptTemplateRecord:
    return PromptTemplateRecord(
        id=t.id,
        slug=t.slug,
        title=t.title,
        description=t.description,
        category=t.category,
        created_at=t.created_at,
        updated_at=t.updated_at,
        use_case=t.use_case,
        use_count=t.use_count,
        platform=PlatformRef(id=t.platform.id, platform_id=t.platform.platform_id)
        if t.platform is not None
        else None,
    )


def _guide_to_record(g: EndToEndGuide) -> GuideRecord:
    return GuideRecord(
        id=g.id,
        slug=g.slug,
        title=g.title,
        description=g.description,
        created_at=g.created_at,
        updated_at=g.updated_at,
        outcome=g.outcome,
        tech_stack=_list(g.tech_stack),
        platforms=_list(g.platforms),
        author_name=g.author_name,
        view_count=g.view_count,
        featured=g.featured,
    )


class CatalogReadRepository:
    """Reads every indexable collection in full. Implements ICatalogSource.

    Without an explicit session_factory the shared one is resolved on each
    read, so a missing DATABASE_URL surfaces as SqlNotConfiguredException at
    rebuild time rather than at startup.
    """

    def __init__(
        self, session_factory: async_sessionmaker[AsyncSession] | None = None
    ) -> None:
        self.session_factory = session_factory

    async def _fetch_all(
        self, stmt: Select[Any], mapper: Callable[[Any], T]
    ) -> list[T]:
        session_factory = self.session_factory or get_session_factory()
        async with session_factory() as session:
            result = await session.execute(stmt)
            rows: Sequence[Any] = result.scalars().all()
            return [mapper(row) for row in rows]

    async def list_projects(self) -> list[ProjectRecord]:
        stmt = select(Project).options(selectinload(Project.author))
        return await self._fetch_all(stmt, _project_to_record)

    async def list_approved_resources(self) -> list[ResourceRecord]:
        """Only moderated (APPROVED) resources; pending and rejected never reach the index."""
        stmt = select(Resource).where(Resource.status == ResourceStatus.APPROVED.value)
        return await self._fetch_all(stmt, _resource_to_record)

    async def list_skills(self) -> list[SkillRecord]:
        return await self._fetch_all(select(Skill), _skill_to_record)

    async def list_subagents(self) -> list[SubAgentRecord]:
        return await self._fetch_all(select(SubAgent), _subagent_to_record)

    async def list_mcp_servers(self) -> list[McpServerRecord]:
        return await self._fetch_all(select(MCPServer), _mcp_to_record)

    async def list_platform_profiles(self) -> list[PlatformProfileRecord]:
        return await self._fetch_all(select(PlatformProfile), _platform_to_record)

    async def list_prompt_templates(self) -> list[PromptTemplateRecord]:
        stmt = select(PromptTemplate).options(selectinload(PromptTemplate.platform))
        return await self._fetch_all(stmt, _prompt_to_record)

    async def list_guides(self) -> list[GuideRecord]:
        return await self._fetch_all(select(EndToEndGuide), _guide_to_record)
