"""Application services: entity transform, fuzzy index, facets, highlighting, index cache."""

from app.application.services.entity_transformer import (
    entity_url,
    make_document_id,
    parse_document_id,
    transform_entity,
)
from app.application.services.facets import build_facets
from app.application.services.fuzzy_index import (
    DEFAULT_KEYS,
    FuzzyIndex,
    FuzzyKey,
    FuzzyMatch,
    MatchLocation,
)
from app.application.services.highlighting import build_highlights, highlight_text
from app.application.services.search_index import IndexSnapshot, SearchIndexCache

__all__ = [
    "DEFAULT_KEYS",
    "FuzzyIndex",
    "FuzzyKey",
    "FuzzyMatch",
    "IndexSnapshot",
    "MatchLocation",
    "SearchIndexCache",
    "build_facets",
    "build_highlights",
    "entity_url",
    "highlight_text",
    "make_document_id",
    "parse_document_id",
    "transform_entity",
]
