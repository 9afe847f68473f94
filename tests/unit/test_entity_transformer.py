"""Entity transformer unit tests: per-type mapping, ids, URLs, popularity and dispatch."""

import pytest

from app.application.services.entity_transformer import (
    FEATURED_BONUS,
    PLATFORM_POPULARITY,
    entity_url,
    make_document_id,
    parse_document_id,
    transform_entity,
    transform_guide,
    transform_mcp_server,
    transform_platform_profile,
    transform_project,
    transform_prompt_template,
    transform_resource,
    transform_skill,
    transform_subagent,
)
from app.domain.enums import EntityType, IndexableModel
from app.domain.exceptions import UnknownModelException
from tests.factories import (
    BASE_TIME,
    author,
    guide,
    mcp,
    platform,
    platform_ref,
    project,
    prompt,
    resource,
    skill,
    subagent,
)

ALL_RECORDS = [
    (IndexableModel.PROJECT, project()),
    (IndexableModel.RESOURCE, resource()),
    (IndexableModel.SKILL, skill()),
    (IndexableModel.SUBAGENT, subagent()),
    (IndexableModel.MCP_SERVER, mcp()),
    (IndexableModel.PLATFORM_PROFILE, platform()),
    (IndexableModel.PROMPT_TEMPLATE, prompt()),
    (IndexableModel.END_TO_END_GUIDE, guide()),
]


class TestDocumentIds:
    def test_make_document_id(self) -> None:
        assert make_document_id(EntityType.SKILL, "abc") == "skill_abc"

    def test_parse_splits_on_first_underscore(self) -> None:
        assert parse_document_id("mcp_id_with_underscores") == (
            EntityType.MCP,
            "id_with_underscores",
        )

    def test_parse_unknown_prefix_raises(self) -> None:
        with pytest.raises(ValueError):
            parse_document_id("widget_1")

    @pytest.mark.parametrize(("model", "record"), ALL_RECORDS)
    def test_id_round_trips(self, model: IndexableModel, record) -> None:
        doc = transform_entity(model, record)
        entity_type, entity_id = parse_document_id(doc.id)
        assert entity_type is doc.entity_type is model.entity_type
        assert make_document_id(entity_type, entity_id) == doc.id


class TestCommonInvariants:
    @pytest.mark.parametrize(("model", "record"), ALL_RECORDS)
    def test_deterministic(self, model: IndexableModel, record) -> None:
        assert transform_entity(model, record) == transform_entity(model, record)

    @pytest.mark.parametrize(("model", "record"), ALL_RECORDS)
    def test_content_contains_title_and_description(
        self, model: IndexableModel, record
    ) -> None:
        doc = transform_entity(model, record)
        assert doc.title in doc.content
        if doc.description:
            assert doc.description in doc.content

    def test_content_keeps_surrounding_whitespace_of_fields(self) -> None:
        doc = transform_project(
            project("p9", " Leading Title", description="Trailing space ", category=None)
        )
        assert doc.title in doc.content
        assert doc.description in doc.content

    @pytest.mark.parametrize(("model", "record"), ALL_RECORDS)
    def test_lists_never_none_and_timestamps_in_seconds(
        self, model: IndexableModel, record
    ) -> None:
        doc = transform_entity(model, record)
        assert isinstance(doc.platforms, list)
        assert isinstance(doc.tags, list)
        assert doc.created_at == int(BASE_TIME.timestamp())
        assert doc.vectors is None


class TestProject:
    def test_fields(self) -> None:
        doc = transform_project(
            project(
                "p9",
                "Agent Board",
                description="Kanban for agents",
                long_description="Drag tasks between lanes",
                tech_stack=["react", "fastapi"],
                screenshots=["https://img/1.png", "https://img/2.png"],
                upvote_count=3,
                view_count=10,
                author=author("grace"),
            )
        )
        assert doc.id == "project_p9"
        assert doc.url == "/projects/p9"
        assert doc.tags == ["react", "fastapi"]
        assert doc.author == "grace"
        assert doc.status == "published"
        assert doc.popularity == 13
        assert doc.thumbnail == "https://img/1.png"
        assert "Drag tasks between lanes" in doc.content
        assert "react fastapi" in doc.content

    def test_missing_author_and_screenshots(self) -> None:
        doc = transform_project(project())
        assert doc.author is None
        assert doc.thumbnail is None


class TestResource:
    def test_url_category_and_featured_bonus(self) -> None:
        doc = transform_resource(
            resource(type="video", view_count=4, featured=True, tags=["llm"])
        )
        assert doc.url == "/resources?type=video"
        assert doc.category == "video"
        assert doc.popularity == 4 + FEATURED_BONUS
        assert doc.status == "APPROVED"
        assert doc.tags == ["llm"]


class TestCollections:
    def test_skill(self) -> None:
        doc = transform_skill(
            skill(
                "s2",
                "Commit Helper",
                slug="commit-helper",
                tagline="Writes commit messages",
                triggers=["commit", "git"],
                use_count=9,
                featured=True,
            )
        )
        assert doc.title == "Commit Helper"
        assert doc.description == "Writes commit messages"
        assert doc.tags == ["commit", "git"]
        assert doc.popularity == 9 + FEATURED_BONUS
        assert doc.url == "/collections/skills/commit-helper"

    def test_subagent_tags_skip_missing_language(self) -> None:
        doc = transform_subagent(subagent(framework="django"))
        assert doc.tags == ["django"]
        assert doc.url == "/collections/subagents/a1-slug"
        assert doc.thumbnail is None

    def test_mcp_uses_provider_as_tag(self) -> None:
        doc = transform_mcp_server(mcp(provider="linear", use_count=2))
        assert doc.entity_type is EntityType.MCP
        assert doc.tags == ["linear"]
        assert doc.author is None
        assert doc.popularity == 2
        assert doc.url == "/collections/mcps/m1-slug"


class TestPlatformAndPrompt:
    def test_platform_profile_fixed_popularity(self) -> None:
        doc = transform_platform_profile(
            platform(platform_id="windsurf", cheat_sheet=["cmd+k opens chat"])
        )
        assert doc.popularity == PLATFORM_POPULARITY
        assert doc.platforms == ["windsurf"]
        assert doc.category is None
        assert doc.url == "/platforms/windsurf"
        assert "cmd+k opens chat" in doc.content

    def test_prompt_with_platform(self) -> None:
        doc = transform_prompt_template(
            prompt(slug="split-module", platform=platform_ref("windsurf"))
        )
        assert doc.platforms == ["windsurf"]
        assert doc.tags == ["refactoring"]
        assert doc.url == "/platforms/windsurf/prompts/split-module"

    def test_prompt_without_platform_defaults_to_cursor(self) -> None:
        doc = transform_prompt_template(prompt(slug="split-module"))
        assert doc.platforms == []
        assert doc.url == "/platforms/cursor/prompts/split-module"


class TestGuide:
    def test_fields(self) -> None:
        doc = transform_guide(
            guide(slug="ship-saas", tech_stack=["nextjs"], view_count=5, featured=True)
        )
        assert doc.entity_type is EntityType.GUIDE
        assert doc.url == "/guides/ship-saas"
        assert doc.tags == ["nextjs"]
        assert doc.popularity == 5 + FEATURED_BONUS


class TestDispatch:
    def test_accepts_model_name_string(self) -> None:
        assert transform_entity("SubAgent", subagent()).entity_type is EntityType.SUBAGENT

    def test_unknown_model_raises(self) -> None:
        with pytest.raises(UnknownModelException) as exc_info:
            transform_entity("Widget", object())
        assert exc_info.value.error_code == "UNKNOWN_MODEL"
        assert exc_info.value.details == {"model": "Widget"}


class TestEntityUrl:
    @pytest.mark.parametrize(
        ("entity_type", "slug", "expected"),
        [
            (EntityType.PROJECT, None, "/projects/x1"),
            (EntityType.RESOURCE, "ignored", "/resources"),
            (EntityType.SKILL, "s", "/collections/skills/s"),
            (EntityType.SKILL, None, "/collections/skills"),
            (EntityType.SUBAGENT, None, "/collections/subagents"),
            (EntityType.MCP, "m", "/collections/mcps/m"),
            (EntityType.PLATFORM, "cursor", "/platforms/cursor"),
            (EntityType.PROMPT, "p", "/prompts"),
            (EntityType.GUIDE, None, "/guides"),
        ],
    )
    def test_urls(self, entity_type: EntityType, slug: str | None, expected: str) -> None:
        assert entity_url(entity_type, "x1", slug) == expected
