"""Entity transformer: maps catalog records to the unified SearchDocument shape.

Pure functions, one per indexable collection, plus transform_entity which
dispatches on IndexableModel. No I/O and no clock: timestamps are copied
from the source record, so the same record always yields the same document.
"""

from __future__ import annotations

from typing import Any, assert_never

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
from app.application.dtos.search import SearchDocument
from app.domain.enums import EntityType, IndexableModel
from app.domain.exceptions import UnknownModelException
from app.shared.utils.datetime import to_unix_seconds

FEATURED_BONUS = 100
PLATFORM_POPULARITY = 1000
DEFAULT_PROMPT_PLATFORM = "cursor"
PUBLISHED = "published"


def make_document_id(entity_type: EntityType, entity_id: str) -> str:
    """Return the composite document id "{entity_type}_{entity_id}"."""
    return f"{entity_type.value}_{entity_id}"


def parse_document_id(document_id: str) -> tuple[EntityType, str]:
    """Split a composite id on the first "_" into (entity_type, entity_id).

    Entity ids may themselves contain underscores.

    Raises:
        ValueError: If the prefix is not a known entity type.
    """
    entity_type, _, entity_id = document_id.partition("_")
    return EntityType(entity_type), entity_id


def entity_url(entity_type: EntityType, entity_id: str, slug: str | None = None) -> str:
    """Resolve a detail URL when only type, id and optional slug are known.

    Slug-routed types fall back to their collection root when slug is missing.
    """
    match entity_type:
        case EntityType.PROJECT:
            return f"/projects/{entity_id}"
        case EntityType.RESOURCE:
            return "/resources"
        case EntityType.SKILL:
            return f"/collections/skills/{slug}" if slug else "/collections/skills"
        case EntityType.SUBAGENT:
            return f"/collections/subagents/{slug}" if slug else "/collections/subagents"
        case EntityType.MCP:
            return f"/collections/mcps/{slug}" if slug else "/collections/mcps"
        case EntityType.PLATFORM:
            return f"/platforms/{slug}" if slug else "/platforms"
        case EntityType.PROMPT:
            return "/prompts"
        case EntityType.GUIDE:
            return f"/guides/{slug}" if slug else "/guides"
        case _:
            assert_never(entity_type)


def _merge_content(*fields: str | None) -> str:
    """Join the non-empty text fields with single spaces, each kept verbatim."""
    return " ".join(f for f in fields if f)


def _join(values: list[str] | None) -> str | None:
    return " ".join(values) if values else None


def _featured_bonus(featured: bool) -> int:
    return FEATURED_BONUS if featured else 0


def transform_project(project: ProjectRecord) -> SearchDocument:
    return SearchDocument(
        id=make_document_id(EntityType.PROJECT, project.id),
        entity_type=EntityType.PROJECT,
        entity_id=project.id,
        title=project.title,
        description=project.description or "",
        content=_merge_content(
            project.title,
            project.description,
            project.long_description,
            _join(project.tech_stack),
            project.category,
        ),
        category=project.category,
        platforms=list(project.platforms or []),
        tags=list(project.tech_stack or []),
        author=project.author.username if project.author else None,
        status=PUBLISHED,
        created_at=to_unix_seconds(project.created_at),
        updated_at=to_unix_seconds(project.updated_at),
        popularity=project.upvote_count + project.view_count,
        url=f"/projects/{project.id}",
        thumbnail=project.screenshots[0] if project.screenshots else None,
    )


def transform_resource(resource: ResourceRecord) -> SearchDocument:
    """Resource URLs point at the filtered resource listing, not a detail page."""
    return SearchDocument(
        id=make_document_id(EntityType.RESOURCE, resource.id),
        entity_type=EntityType.RESOURCE,
        entity_id=resource.id,
        title=resource.title,
        description=resource.description or "",
        content=_merge_content(
            resource.title,
            resource.description,
            resource.type,
            resource.source,
            resource.author,
            _join(resource.tags),
        ),
        category=resource.type,
        platforms=list(resource.platforms or []),
        tags=list(resource.tags or []),
        author=resource.author,
        status=resource.status,
        created_at=to_unix_seconds(resource.created_at),
        updated_at=to_unix_seconds(resource.updated_at),
        popularity=resource.view_count + _featured_bonus(resource.featured),
        url=f"/resources?type={resource.type}",
        thumbnail=resource.thumbnail,
    )


def transform_skill(skill: SkillRecord) -> SearchDocument:
    return SearchDocument(
        id=make_document_id(EntityType.SKILL, skill.id),
        entity_type=EntityType.SKILL,
        entity_id=skill.id,
        title=skill.name,
        description=skill.tagline or "",
        content=_merge_content(
            skill.name,
            skill.tagline,
            skill.description,
            skill.category,
            _join(skill.examples),
            _join(skill.triggers),
        ),
        category=skill.category,
        platforms=list(skill.platforms or []),
        tags=list(skill.triggers or []),
        author=skill.author_name,
        status=PUBLISHED,
        created_at=to_unix_seconds(skill.created_at),
        updated_at=to_unix_seconds(skill.updated_at),
        popularity=skill.use_count + _featured_bonus(skill.featured),
        url=f"/collections/skills/{skill.slug}",
        thumbnail=skill.icon_url,
    )


def transform_subagent(subagent: SubAgentRecord) -> SearchDocument:
    return SearchDocument(
        id=make_document_id(EntityType.SUBAGENT, subagent.id),
        entity_type=EntityType.SUBAGENT,
        entity_id=subagent.id,
        title=subagent.name,
        description=subagent.role or "",
        content=_merge_content(
            subagent.name,
            subagent.role,
            subagent.category,
            subagent.language,
            subagent.framework,
            subagent.when_to_use,
            _join(subagent.examples),
        ),
        category=subagent.category,
        platforms=list(subagent.platforms or []),
        tags=[t for t in (subagent.language, subagent.framework) if t],
        author=subagent.author_name,
        status=PUBLISHED,
        created_at=to_unix_seconds(subagent.created_at),
        updated_at=to_unix_seconds(subagent.updated_at),
        popularity=subagent.use_count + _featured_bonus(subagent.featured),
        url=f"/collections/subagents/{subagent.slug}",
        thumbnail=None,
    )


def transform_mcp_server(mcp: McpServerRecord) -> SearchDocument:
    return SearchDocument(
        id=make_document_id(EntityType.MCP, mcp.id),
        entity_type=EntityType.MCP,
        entity_id=mcp.id,
        title=mcp.name,
        description=mcp.description or "",
        content=_merge_content(mcp.name, mcp.description, mcp.category, mcp.provider),
        category=mcp.category,
        platforms=list(mcp.platforms or []),
        tags=[mcp.provider] if mcp.provider else [],
        author=None,
        status=PUBLISHED,
        created_at=to_unix_seconds(mcp.created_at),
        updated_at=to_unix_seconds(mcp.updated_at),
        popularity=mcp.use_count + _featured_bonus(mcp.featured),
        url=f"/collections/mcps/{mcp.slug}",
        thumbnail=mcp.icon_url,
    )


def transform_platform_profile(platform: PlatformProfileRecord) -> SearchDocument:
    """Platform pages get a fixed popularity so they rank first under "popular"."""
    return SearchDocument(
        id=make_document_id(EntityType.PLATFORM, platform.id),
        entity_type=EntityType.PLATFORM,
        entity_id=platform.id,
        title=platform.name,
        description=platform.tagline or "",
        content=_merge_content(
            platform.name,
            platform.tagline,
            platform.description,
            _join(platform.cheat_sheet),
            _join(platform.best_practices),
        ),
        category=None,
        platforms=[platform.platform_id],
        tags=[],
        author=None,
        status=PUBLISHED,
        created_at=to_unix_seconds(platform.created_at),
        updated_at=to_unix_seconds(platform.updated_at),
        popularity=PLATFORM_POPULARITY,
        url=f"/platforms/{platform.platform_id}",
        thumbnail=None,
    )


def transform_prompt_template(prompt: PromptTemplateRecord) -> SearchDocument:
    platform_id = prompt.platform.platform_id if prompt.platform else None
    return SearchDocument(
        id=make_document_id(EntityType.PROMPT, prompt.id),
        entity_type=EntityType.PROMPT,
        entity_id=prompt.id,
        title=prompt.title,
        description=prompt.description or "",
        content=_merge_content(
            prompt.title, prompt.description, prompt.category, prompt.use_case
        ),
        category=prompt.category,
        platforms=[platform_id] if platform_id else [],
        tags=[prompt.category] if prompt.category else [],
        author=None,
        status=PUBLISHED,
        created_at=to_unix_seconds(prompt.created_at),
        updated_at=to_unix_seconds(prompt.updated_at),
        popularity=prompt.use_count,
        url=f"/platforms/{platform_id or DEFAULT_PROMPT_PLATFORM}/prompts/{prompt.slug}",
        thumbnail=None,
    )


def transform_guide(guide: GuideRecord) -> SearchDocument:
    return SearchDocument(
        id=make_document_id(EntityType.GUIDE, guide.id),
        entity_type=EntityType.GUIDE,
        entity_id=guide.id,
        title=guide.title,
        description=guide.description or "",
        content=_merge_content(
            guide.title, guide.description, guide.outcome, _join(guide.tech_stack)
        ),
        category=None,
        platforms=list(guide.platforms or []),
        tags=list(guide.tech_stack or []),
        author=guide.author_name,
        status=PUBLISHED,
        created_at=to_unix_seconds(guide.created_at),
        updated_at=to_unix_seconds(guide.updated_at),
        popularity=guide.view_count + _featured_bonus(guide.featured),
        url=f"/guides/{guide.slug}",
        thumbnail=None,
    )


def transform_entity(model: IndexableModel | str, entity: Any) -> SearchDocument:
    """Transform one record of the given source model into a SearchDocument.

    Args:
        model: IndexableModel member or its string value (e.g. "Project").
        entity: Record matching the model.

    Raises:
        UnknownModelException: model is not an indexable model name.
    """
    try:
        model = IndexableModel(model)
    except ValueError:
        raise UnknownModelException(str(model)) from None

    match model:
        case IndexableModel.PROJECT:
            return transform_project(entity)
        case IndexableModel.RESOURCE:
            return transform_resource(entity)
        case IndexableModel.SKILL:
            return transform_skill(entity)
        case IndexableModel.SUBAGENT:
            return transform_subagent(entity)
        case IndexableModel.MCP_SERVER:
            return transform_mcp_server(entity)
        case IndexableModel.PLATFORM_PROFILE:
            return transform_platform_profile(entity)
        case IndexableModel.PROMPT_TEMPLATE:
            return transform_prompt_template(entity)
        case IndexableModel.END_TO_END_GUIDE:
            return transform_guide(entity)
        case _:
            assert_never(model)
