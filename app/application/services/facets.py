"""Facet aggregation over a filtered, not yet paginated, candidate list."""

from collections import Counter
from collections.abc import Iterable

from app.application.dtos.search import SearchDocument, SearchFacets


def build_facets(documents: Iterable[SearchDocument]) -> SearchFacets:
    """Count documents per entity type, platform, and category in one pass.

    A document adds to every platform it lists; documents without a
    category add to no category bucket.
    """
    entity_type: Counter[str] = Counter()
    platform: Counter[str] = Counter()
    category: Counter[str] = Counter()
    for doc in documents:
        entity_type[doc.entity_type.value] += 1
        for p in doc.platforms:
            platform[p] += 1
        if doc.category:
            category[doc.category] += 1
    return SearchFacets(
        entity_type=dict(entity_type),
        platform=dict(platform),
        category=dict(category),
    )
