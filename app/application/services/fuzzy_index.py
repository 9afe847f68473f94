"""In-memory weighted fuzzy index over SearchDocuments.

Each query term is aligned against every searchable key of a document with
rapidfuzz's partial ratio, which tolerates typos and matches anywhere in the
field (no location bias). Scores are distance-like: 0.0 is a perfect match,
1.0 no match. A document matches when every query term matches at least
one key within the threshold. Its score is the product of the per-key
distances of the matching keys, each raised to its normalized weight, so a
document that matches in more (and heavier) keys ranks higher.

Queries also accept extended operators per term: =exact (whole value),
'include (substring), ^prefix, suffix$, and a leading ! that excludes
documents containing the term (!term, !^prefix, !suffix$). "|" separates
OR groups; a document scores as its best matching group.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum

from rapidfuzz import fuzz

from app.application.dtos.search import SearchDocument

# Smallest distance used in the weighted product so a perfect key match
# does not zero out the score of the whole document.
_EPSILON = 1e-3

# Whitespace-separated tokens; a double-quoted operand may contain spaces.
_TOKEN_RE = re.compile(r'\S*"[^"]*"\S*|\S+')


@dataclass(frozen=True)
class FuzzyKey:
    """A searchable document field and its relative weight."""

    name: str
    weight: float
    getter: Callable[[SearchDocument], str | list[str] | None]


DEFAULT_KEYS: tuple[FuzzyKey, ...] = (
    FuzzyKey("title", 0.4, lambda d: d.title),
    FuzzyKey("description", 0.25, lambda d: d.description),
    FuzzyKey("content", 0.2, lambda d: d.content),
    FuzzyKey("tags", 0.1, lambda d: d.tags),
    FuzzyKey("author", 0.05, lambda d: d.author),
)


@dataclass(frozen=True)
class MatchLocation:
    """Where a query term matched: key, element index for list keys, [start, end) span."""

    key: str
    term: str
    value_index: int
    start: int
    end: int
    distance: float


@dataclass(frozen=True)
class FuzzyMatch:
    """One ranked hit. score is distance-like (0.0 = perfect)."""

    document: SearchDocument
    score: float | None
    matches: tuple[MatchLocation, ...]
    position: int


class TermOperator(Enum):
    """How a query term is tested against a field value."""

    FUZZY = "fuzzy"
    EXACT = "exact"
    INCLUDE = "include"
    PREFIX = "prefix"
    SUFFIX = "suffix"


@dataclass(frozen=True)
class QueryTerm:
    """One parsed query term. negated terms exclude documents instead of matching them."""

    text: str
    operator: TermOperator = TermOperator.FUZZY
    negated: bool = False


def _unquote(text: str) -> str:
    if len(text) >= 2 and text.startswith('"') and text.endswith('"'):
        return text[1:-1]
    return text


def parse_term(token: str) -> QueryTerm | None:
    """Parse one query token into a QueryTerm.

    Operators: =exact, 'include, ^prefix, suffix$, and a leading ! that
    negates include (!term), prefix (!^term) and suffix (!term$) tests.
    Anything else is a fuzzy term. Returns None when no operand remains.
    """
    negated = token.startswith("!")
    body = token[1:] if negated else token
    if not negated and body.startswith("="):
        term = QueryTerm(_unquote(body[1:]), TermOperator.EXACT)
    elif not negated and body.startswith("'"):
        term = QueryTerm(_unquote(body[1:]), TermOperator.INCLUDE)
    elif body.startswith("^"):
        term = QueryTerm(_unquote(body[1:]), TermOperator.PREFIX, negated)
    elif body.endswith("$"):
        term = QueryTerm(_unquote(body[:-1]), TermOperator.SUFFIX, negated)
    elif negated:
        term = QueryTerm(_unquote(body), TermOperator.INCLUDE, negated=True)
    else:
        term = QueryTerm(body)
    return term if term.text else None


class FuzzyIndex:
    """Immutable fuzzy index built once per rebuild and shared by all requests."""

    def __init__(
        self,
        documents: Sequence[SearchDocument],
        keys: Sequence[FuzzyKey] = DEFAULT_KEYS,
        threshold: float = 0.4,
        min_match_chars: int = 2,
    ) -> None:
        self.threshold = threshold
        self.min_match_chars = min_match_chars
        self._keys = tuple(keys)
        total_weight = sum(k.weight for k in self._keys) or 1.0
        self._weights = {k.name: k.weight / total_weight for k in self._keys}
        self._documents = tuple(documents)
        # Lowercased field values per document, computed once at build time.
        self._fields: tuple[dict[str, tuple[str, ...]], ...] = tuple(
            self._normalize(doc) for doc in self._documents
        )

    def __len__(self) -> int:
        return len(self._documents)

    @property
    def documents(self) -> tuple[SearchDocument, ...]:
        return self._documents

    def _normalize(self, document: SearchDocument) -> dict[str, tuple[str, ...]]:
        fields: dict[str, tuple[str, ...]] = {}
        for key in self._keys:
            raw = key.getter(document)
            if raw is None:
                values: tuple[str, ...] = ()
            elif isinstance(raw, str):
                values = (raw.lower(),)
            else:
                values = tuple(v.lower() for v in raw if v)
            fields[key.name] = values
        return fields

    def tokenize(self, query: str) -> list[list[QueryTerm]]:
        """Split a query into OR groups ("|") of AND-ed terms.

        Fuzzy terms shorter than min_match_chars are dropped, as are groups
        left without terms.
        """
        groups: list[list[QueryTerm]] = []
        for part in query.lower().split("|"):
            terms = []
            for token in _TOKEN_RE.findall(part):
                term = parse_term(token)
                if term is None:
                    continue
                if term.operator is TermOperator.FUZZY and len(term.text) < self.min_match_chars:
                    continue
                terms.append(term)
            if terms:
                groups.append(terms)
        return groups

    def _best_location(
        self, term: str, key: str, values: tuple[str, ...]
    ) -> MatchLocation | None:
        best: MatchLocation | None = None
        for i, value in enumerate(values):
            if not value:
                continue
            if term in value:
                start = value.index(term)
                return MatchLocation(key, term, i, start, start + len(term), 0.0)
            if len(value) < len(term):
                # A value shorter than the term is compared whole, so "go" does
                # not count as a perfect match for "golang".
                distance = 1.0 - fuzz.ratio(term, value) / 100.0
                start, end = 0, len(value)
            else:
                alignment = fuzz.partial_ratio_alignment(term, value)
                distance = 1.0 - alignment.score / 100.0
                start, end = alignment.dest_start, alignment.dest_end
            if best is None or distance < best.distance:
                best = MatchLocation(key, term, i, start, end, distance)
        return best

    @staticmethod
    def _literal_location(
        term: QueryTerm, key: str, values: tuple[str, ...]
    ) -> MatchLocation | None:
        """First value satisfying an exact, include, prefix or suffix test."""
        text = term.text
        for i, value in enumerate(values):
            match term.operator:
                case TermOperator.EXACT:
                    hit = value == text
                    start = 0
                case TermOperator.PREFIX:
                    hit = value.startswith(text)
                    start = 0
                case TermOperator.SUFFIX:
                    hit = value.endswith(text)
                    start = len(value) - len(text)
                case _:
                    start = value.find(text)
                    hit = start >= 0
            if hit:
                return MatchLocation(key, text, i, start, start + len(text), 0.0)
        return None

    def _locate(
        self, term: QueryTerm, key: str, values: tuple[str, ...]
    ) -> MatchLocation | None:
        if term.operator is TermOperator.FUZZY:
            return self._best_location(term.text, key, values)
        return self._literal_location(term, key, values)

    def _score(
        self, terms: list[QueryTerm], fields: dict[str, tuple[str, ...]]
    ) -> tuple[float, tuple[MatchLocation, ...]] | None:
        locations: list[MatchLocation] = []
        key_distances: dict[str, list[float]] = {}
        for term in terms:
            if term.negated:
                # Excluded when any key satisfies the test; contributes no location.
                if any(self._locate(term, k.name, fields[k.name]) for k in self._keys):
                    return None
                continue
            term_matched = False
            for key in self._keys:
                loc = self._locate(term, key.name, fields[key.name])
                distance = loc.distance if loc is not None else 1.0
                key_distances.setdefault(key.name, []).append(distance)
                if loc is not None and distance <= self.threshold:
                    locations.append(loc)
                    term_matched = True
            if not term_matched:
                return None

        if not locations:
            # Only negated terms: every surviving document is a perfect match.
            return 0.0, ()
        score = 1.0
        for key_name in {loc.key for loc in locations}:
            distances = key_distances[key_name]
            mean = sum(distances) / len(distances)
            score *= max(mean, _EPSILON) ** self._weights[key_name]
        return score, tuple(locations)

    def _score_groups(
        self, groups: list[list[QueryTerm]], fields: dict[str, tuple[str, ...]]
    ) -> tuple[float, tuple[MatchLocation, ...]] | None:
        """Best-scoring OR group, or None when no group matches."""
        best: tuple[float, tuple[MatchLocation, ...]] | None = None
        for terms in groups:
            scored = self._score(terms, fields)
            if scored is not None and (best is None or scored[0] < best[0]):
                best = scored
        return best

    def search(self, query: str, limit: int | None = None) -> list[FuzzyMatch]:
        """Return matches ordered by ascending score, ties kept in index order.

        Args:
            query: Free-text query; terms are AND-ed, "|" separates OR groups,
                and terms may carry the operators understood by parse_term.
            limit: Optional maximum number of matches to return.
        """
        groups = self.tokenize(query)
        if not groups:
            return []
        hits: list[FuzzyMatch] = []
        for position, (document, fields) in enumerate(zip(self._documents, self._fields)):
            scored = self._score_groups(groups, fields)
            if scored is None:
                continue
            score, locations = scored
            hits.append(FuzzyMatch(document, score, locations, position))
        hits.sort(key=lambda h: (h.score if h.score is not None else 0.0, h.position))
        if limit is not None:
            return hits[: max(limit, 0)]
        return hits
