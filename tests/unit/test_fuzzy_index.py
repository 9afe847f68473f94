"""FuzzyIndex unit tests: tokenizing, operators, typo tolerance, AND/OR semantics, ranking."""

import pytest

from app.application.services.entity_transformer import (
    transform_project,
    transform_skill,
    transform_subagent,
)
from app.application.services.fuzzy_index import (
    DEFAULT_KEYS,
    FuzzyIndex,
    QueryTerm,
    TermOperator,
    parse_term,
)
from tests.factories import project, skill, subagent


@pytest.fixture
def documents():
    return [
        transform_project(
            project("p1", "Cursor Setup Guide", description="Configure rules and shortcuts")
        ),
        transform_project(
            project("p2", "Claude Code Debugging", description="Tracing failures step by step")
        ),
        transform_subagent(
            subagent("a1", "Python Expert Agent", role="Reviews Python services")
        ),
    ]


@pytest.fixture
def index(documents) -> FuzzyIndex:
    return FuzzyIndex(documents)


def test_default_key_weights() -> None:
    weights = {k.name: k.weight for k in DEFAULT_KEYS}
    assert weights == {
        "title": 0.4,
        "description": 0.25,
        "content": 0.2,
        "tags": 0.1,
        "author": 0.05,
    }


def test_tokenize_drops_short_terms(index: FuzzyIndex) -> None:
    assert index.tokenize("  A Cursor  x setup ") == [[QueryTerm("cursor"), QueryTerm("setup")]]


def test_tokenize_operators_and_or_groups(index: FuzzyIndex) -> None:
    assert index.tokenize("=Cursor 'code | !^py go$ ! x") == [
        [QueryTerm("cursor", TermOperator.EXACT), QueryTerm("code", TermOperator.INCLUDE)],
        [
            QueryTerm("py", TermOperator.PREFIX, negated=True),
            QueryTerm("go", TermOperator.SUFFIX),
        ],
    ]


def test_tokenize_keeps_quoted_operand_together(index: FuzzyIndex) -> None:
    assert index.tokenize('="python expert agent"') == [
        [QueryTerm("python expert agent", TermOperator.EXACT)]
    ]


@pytest.mark.parametrize(
    ("token", "expected"),
    [
        ("=abc", QueryTerm("abc", TermOperator.EXACT)),
        ("'abc", QueryTerm("abc", TermOperator.INCLUDE)),
        ("^abc", QueryTerm("abc", TermOperator.PREFIX)),
        ("abc$", QueryTerm("abc", TermOperator.SUFFIX)),
        ("!abc", QueryTerm("abc", TermOperator.INCLUDE, negated=True)),
        ("!^abc", QueryTerm("abc", TermOperator.PREFIX, negated=True)),
        ("!abc$", QueryTerm("abc", TermOperator.SUFFIX, negated=True)),
        ("abc", QueryTerm("abc")),
        ("!", None),
        ("^", None),
    ],
)
def test_parse_term(token: str, expected: QueryTerm | None) -> None:
    assert parse_term(token) == expected


def test_negated_term_excludes_documents_containing_it(index: FuzzyIndex) -> None:
    hits = index.search("!python")
    assert [h.document.entity_id for h in hits] == ["p1", "p2"]
    assert all(h.score == 0.0 and h.matches == () for h in hits)
    assert index.search("python !reviews") == []


def test_include_operator_is_not_fuzzy(index: FuzzyIndex) -> None:
    assert index.search("'cursr") == []
    assert [h.document.entity_id for h in index.search("'cursor")] == ["p1"]


def test_exact_operator_matches_whole_value(index: FuzzyIndex) -> None:
    assert [h.document.entity_id for h in index.search('="python expert agent"')] == ["a1"]
    assert index.search("=python") == []

    doc = transform_skill(skill("s1", "Commit Helper", triggers=["commit"]))
    tagged = FuzzyIndex([doc])
    assert [h.document.entity_id for h in tagged.search("=commit")] == ["s1"]
    assert tagged.search("=comm") == []


def test_prefix_and_suffix_operators(index: FuzzyIndex) -> None:
    assert [h.document.entity_id for h in index.search("^cursor")] == ["p1"]
    assert index.search("^setup") == []
    assert [h.document.entity_id for h in index.search("agent$")] == ["a1"]
    assert [h.document.entity_id for h in index.search("!^cursor")] == ["p2", "a1"]


def test_or_groups(index: FuzzyIndex) -> None:
    hits = index.search("cursor | python")
    assert sorted(h.document.entity_id for h in hits) == ["a1", "p1"]
    assert index.search("cursor python | zzzzqqqq") == []


def test_exact_match_returns_only_that_document(index: FuzzyIndex) -> None:
    hits = index.search("cursor")
    assert [h.document.entity_id for h in hits] == ["p1"]
    assert hits[0].score is not None and hits[0].score < 0.1
    assert any(m.key == "title" for m in hits[0].matches)


def test_case_insensitive(index: FuzzyIndex) -> None:
    assert [h.document.entity_id for h in index.search("CURSOR")] == ["p1"]


def test_typo_tolerated(index: FuzzyIndex) -> None:
    hits = index.search("debuging")
    assert [h.document.entity_id for h in hits] == ["p2"]


def test_match_anywhere_in_field(index: FuzzyIndex) -> None:
    hits = index.search("shortcuts")
    assert [h.document.entity_id for h in hits] == ["p1"]


def test_all_terms_must_match(index: FuzzyIndex) -> None:
    assert [h.document.entity_id for h in index.search("python reviews")] == ["a1"]
    assert index.search("python cursor") == []


def test_unrelated_query_returns_nothing(index: FuzzyIndex) -> None:
    assert index.search("zzzzqqqq") == []


def test_only_short_terms_returns_nothing(index: FuzzyIndex) -> None:
    assert index.search("a b c") == []


def test_short_field_is_not_a_partial_match_for_longer_term() -> None:
    doc = transform_skill(skill("s1", "Lint Fixer", tagline="Cleans code", triggers=["go"]))
    assert FuzzyIndex([doc]).search("golang") == []


def test_title_match_outranks_content_match() -> None:
    docs = [
        transform_skill(
            skill("s1", "Test Writer", tagline="Writes specs", description="Handles refactor work")
        ),
        transform_skill(skill("s2", "Refactor Assistant", tagline="Restructures modules")),
    ]
    hits = FuzzyIndex(docs).search("refactor")
    assert [h.document.entity_id for h in hits] == ["s2", "s1"]
    assert hits[0].score < hits[1].score


def test_ties_keep_index_order() -> None:
    docs = [
        transform_skill(skill("s1", "Refactor Helper", tagline="Same tagline")),
        transform_skill(skill("s2", "Refactor Helper", tagline="Same tagline")),
    ]
    hits = FuzzyIndex(docs).search("refactor")
    assert [h.position for h in hits] == [0, 1]


def test_limit(index: FuzzyIndex) -> None:
    assert len(index.search("e", limit=1)) == 0
    hits = index.search("python", limit=1)
    assert len(hits) == 1


def test_threshold_zero_requires_exact_substring(documents) -> None:
    strict = FuzzyIndex(documents, threshold=0.0)
    assert strict.search("debuging") == []
    assert [h.document.entity_id for h in strict.search("debugging")] == ["p2"]


def test_len_and_documents(index: FuzzyIndex, documents) -> None:
    assert len(index) == 3
    assert index.documents == tuple(documents)
