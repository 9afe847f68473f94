"""SearchService unit tests: filters, sorting, facets, pagination, caching, failures."""

import pytest

from app.application.dtos.search import SearchQuery
from app.application.services.search_index import SearchIndexCache
from app.application.use_cases.search import (
    DEFAULT_LIMIT,
    MAX_LIMIT,
    SearchService,
    build_query,
    coerce_positive_int,
)
from app.domain.enums import EntityType, SearchSort
from app.domain.exceptions import UpstreamFetchException
from tests.factories import FakeClock, InMemoryCatalogSource, at, mcp, project, skill


@pytest.fixture
def toolkit_catalog() -> InMemoryCatalogSource:
    return InMemoryCatalogSource(
        projects=[project("p1", "Unrelated Dashboard")],
        skills=[
            skill(
                "s1",
                "Testing Toolkit",
                category="testing",
                platforms=["cursor"],
                use_count=3,
                created_at=at(1),
            ),
            skill(
                "s2",
                "Review Toolkit",
                category="review",
                platforms=["claude"],
                use_count=10,
                created_at=at(4),
            ),
        ],
        mcp_servers=[
            mcp(
                "m1",
                "Toolkit Bridge",
                category="devtools",
                platforms=["cursor", "claude"],
                use_count=1,
                created_at=at(2),
            ),
        ],
    )


@pytest.fixture
def service(toolkit_catalog: InMemoryCatalogSource, clock: FakeClock) -> SearchService:
    return SearchService(SearchIndexCache(toolkit_catalog, ttl_seconds=300, clock=clock))


def _ids(outcome) -> list[str]:
    return [r.entity_id for r in outcome.results]


class TestQueryBuilding:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [(None, 4), ("abc", 4), ("0", 4), ("-3", 4), (True, 4), ("5", 5), (7, 7), (" 9 ", 9)],
    )
    def test_coerce_positive_int(self, raw, expected: int) -> None:
        assert coerce_positive_int(raw, 4) == expected

    def test_defaults(self) -> None:
        query = build_query(None)
        assert query == SearchQuery(q="", page=1, limit=DEFAULT_LIMIT)

    def test_limit_is_capped(self) -> None:
        assert build_query("x", limit="1000").limit == MAX_LIMIT

    def test_invalid_page_and_limit_fall_back(self) -> None:
        query = build_query("x", page="abc", limit="-1")
        assert (query.page, query.limit) == (1, DEFAULT_LIMIT)

    def test_unknown_sort_is_relevance(self) -> None:
        assert build_query("x", sort="oldest").sort is SearchSort.RELEVANCE
        assert build_query("x", sort="POPULAR").sort is SearchSort.POPULAR

    def test_blank_filters_are_ignored(self) -> None:
        query = build_query("x", type="", platform="", category="")
        assert query.type is None and query.platform is None and query.category is None


class TestEmptyQuery:
    @pytest.mark.parametrize("q", ["", "   ", "\t\n"])
    async def test_returns_empty_without_building(
        self, service: SearchService, toolkit_catalog, q: str
    ) -> None:
        outcome = await service.search(SearchQuery(q=q))
        assert outcome.results == []
        assert outcome.total == 0
        assert outcome.facets.entity_type == {}
        assert toolkit_catalog.rebuilds == 0

    async def test_suggest_empty(self, service: SearchService, toolkit_catalog) -> None:
        assert await service.suggest("  ") == []
        assert toolkit_catalog.rebuilds == 0


class TestSearch:
    async def test_relevance_ties_keep_index_order(self, service: SearchService) -> None:
        outcome = await service.search(SearchQuery(q="toolkit"))
        assert _ids(outcome) == ["s1", "s2", "m1"]
        assert outcome.total == 3

    async def test_facets_cover_filtered_set(self, service: SearchService) -> None:
        outcome = await service.search(SearchQuery(q="toolkit"))
        assert outcome.facets.entity_type == {"skill": 2, "mcp": 1}
        assert outcome.facets.platform == {"cursor": 2, "claude": 2}
        assert outcome.facets.category == {"testing": 1, "review": 1, "devtools": 1}
        assert sum(outcome.facets.entity_type.values()) == outcome.total

    async def test_type_filter(self, service: SearchService) -> None:
        outcome = await service.search(SearchQuery(q="toolkit", type="skill"))
        assert _ids(outcome) == ["s1", "s2"]
        assert outcome.facets.entity_type == {"skill": 2}

    async def test_platform_filter(self, service: SearchService) -> None:
        outcome = await service.search(SearchQuery(q="toolkit", platform="cursor"))
        assert _ids(outcome) == ["s1", "m1"]
        assert outcome.facets.entity_type == {"skill": 1, "mcp": 1}

    async def test_filters_are_conjunctive(self, service: SearchService) -> None:
        outcome = await service.search(
            SearchQuery(q="toolkit", type="skill", platform="cursor")
        )
        assert _ids(outcome) == ["s1"]

    async def test_category_filter(self, service: SearchService) -> None:
        outcome = await service.search(SearchQuery(q="toolkit", category="review"))
        assert _ids(outcome) == ["s2"]

    async def test_unknown_type_filter_yields_nothing(self, service: SearchService) -> None:
        outcome = await service.search(SearchQuery(q="toolkit", type="widget"))
        assert outcome.results == [] and outcome.total == 0

    async def test_sort_popular(self, service: SearchService) -> None:
        outcome = await service.search(SearchQuery(q="toolkit", sort=SearchSort.POPULAR))
        assert _ids(outcome) == ["s2", "s1", "m1"]

    async def test_sort_recent(self, service: SearchService) -> None:
        outcome = await service.search(SearchQuery(q="toolkit", sort=SearchSort.RECENT))
        assert _ids(outcome) == ["s2", "m1", "s1"]

    async def test_pagination(self, service: SearchService) -> None:
        first = await service.search(SearchQuery(q="toolkit", page=1, limit=2))
        second = await service.search(SearchQuery(q="toolkit", page=2, limit=2))
        beyond = await service.search(SearchQuery(q="toolkit", page=3, limit=2))
        assert _ids(first) == ["s1", "s2"]
        assert _ids(second) == ["m1"]
        assert beyond.results == []
        assert first.total == second.total == beyond.total == 3

    async def test_service_caps_limit(self, toolkit_catalog, clock) -> None:
        service = SearchService(
            SearchIndexCache(toolkit_catalog, clock=clock), max_limit=1
        )
        outcome = await service.search(SearchQuery(q="toolkit", limit=1000))
        assert len(outcome.results) == 1
        assert outcome.total == 3

    async def test_result_fields_score_and_highlights(self, service: SearchService) -> None:
        outcome = await service.search(SearchQuery(q="toolkit", type="skill"))
        item = outcome.results[0]
        assert item.id == "skill_s1"
        assert item.entity_type is EntityType.SKILL
        assert item.url == "/collections/skills/s1-slug"
        assert 0.9 < item.score <= 1.0
        assert item.highlights["title"] == "Testing <mark>Toolkit</mark>"
        assert item.highlights["description"] == "Writes unit tests"

    async def test_typo_still_finds_results(self, service: SearchService) -> None:
        outcome = await service.search(SearchQuery(q="toolkti"))
        assert set(_ids(outcome)) == {"s1", "s2", "m1"}

    async def test_excluded_term_drops_documents(self, service: SearchService) -> None:
        outcome = await service.search(SearchQuery(q="toolkit !review"))
        assert set(_ids(outcome)) == {"s1", "m1"}
        assert outcome.facets.entity_type == {"skill": 1, "mcp": 1}

    async def test_exclusion_only_query_has_full_score_and_no_highlights(
        self, service: SearchService
    ) -> None:
        outcome = await service.search(SearchQuery(q="!toolkit"))
        assert _ids(outcome) == ["p1"]
        assert outcome.results[0].score == 1.0
        assert outcome.results[0].highlights == {}

    async def test_latency_reported(self, service: SearchService) -> None:
        outcome = await service.search(SearchQuery(q="toolkit"))
        assert outcome.latency >= 0


class TestCatalogFixture:
    async def test_cursor_query(self, search_service: SearchService) -> None:
        outcome = await search_service.search(SearchQuery(q="cursor"))
        assert _ids(outcome) == ["p1"]
        assert outcome.facets.entity_type == {"project": 1}

    async def test_unapproved_resources_never_indexed(
        self, search_service: SearchService
    ) -> None:
        outcome = await search_service.search(SearchQuery(q="submission"))
        assert outcome.results == []
        assert search_service.get_stats().number_of_documents == 3


class TestCaching:
    async def test_cached_flag(self, service: SearchService) -> None:
        first = await service.search(SearchQuery(q="toolkit"))
        second = await service.search(SearchQuery(q="toolkit"))
        assert first.cached is False
        assert second.cached is True

    async def test_invalidate_picks_up_new_records(
        self, service: SearchService, toolkit_catalog
    ) -> None:
        await service.search(SearchQuery(q="toolkit"))
        assert service.get_stats().number_of_documents == 4

        toolkit_catalog.skills.append(skill("s3", "Docs Toolkit"))
        service.invalidate()
        outcome = await service.search(SearchQuery(q="toolkit"))

        assert toolkit_catalog.rebuilds == 2
        assert outcome.cached is False
        assert outcome.total == 4
        assert service.get_stats().number_of_documents == 5

    async def test_ttl_expiry_rebuilds(
        self, service: SearchService, toolkit_catalog, clock
    ) -> None:
        await service.search(SearchQuery(q="toolkit"))
        clock.advance(301)
        outcome = await service.search(SearchQuery(q="toolkit"))
        assert toolkit_catalog.rebuilds == 2
        assert outcome.cached is False


class TestFailures:
    async def test_stale_index_served_after_failed_rebuild(
        self, service: SearchService, toolkit_catalog, clock
    ) -> None:
        await service.search(SearchQuery(q="toolkit"))
        clock.advance(301)
        toolkit_catalog.fail_with = ConnectionError("db down")

        outcome = await service.search(SearchQuery(q="toolkit"))

        assert outcome.total == 3
        assert outcome.cached is True

    async def test_failure_without_index_raises(
        self, service: SearchService, toolkit_catalog
    ) -> None:
        toolkit_catalog.fail_with = ConnectionError("db down")
        with pytest.raises(UpstreamFetchException):
            await service.search(SearchQuery(q="toolkit"))

    async def test_health_check(self, service: SearchService, toolkit_catalog) -> None:
        assert await service.health_check() is True

    async def test_health_check_false_on_failure(
        self, service: SearchService, toolkit_catalog
    ) -> None:
        toolkit_catalog.fail_with = ConnectionError("db down")
        assert await service.health_check() is False


class TestSuggestAndStats:
    async def test_suggest(self, service: SearchService) -> None:
        suggestions = await service.suggest("toolkit", limit=2)
        assert [s.text for s in suggestions] == ["Testing Toolkit", "Review Toolkit"]
        assert suggestions[0].entity_type is EntityType.SKILL
        assert suggestions[0].url == "/collections/skills/s1-slug"
        assert suggestions[0].type == "entity"

    async def test_stats_before_and_after_build(self, service: SearchService) -> None:
        before = service.get_stats()
        assert before.number_of_documents == 0
        assert before.index_age_seconds is None
        assert before.ttl_seconds == 300
        assert before.is_indexing is False

        await service.search(SearchQuery(q="toolkit"))
        after = service.get_stats()
        assert after.number_of_documents == 4
        assert after.index_age_seconds == 0
