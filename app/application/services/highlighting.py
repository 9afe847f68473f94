"""Inline <mark> highlighting of query terms in result titles and descriptions."""

import re

from app.application.dtos.search import SearchDocument

MARK_OPEN = "<mark>"
MARK_CLOSE = "</mark>"


def highlight_text(text: str, terms: list[str]) -> str:
    """Wrap every case-insensitive occurrence of each term, applied term by term."""
    result = text
    for term in terms:
        pattern = re.compile(f"({re.escape(term)})", re.IGNORECASE)
        result = pattern.sub(rf"{MARK_OPEN}\1{MARK_CLOSE}", result)
    return result


def build_highlights(
    document: SearchDocument, query: str, has_matches: bool
) -> dict[str, str]:
    """Return highlighted title/description, or {} when the hit recorded no match locations."""
    if not has_matches:
        return {}
    terms = [t for t in query.lower().split() if t]
    return {
        "title": highlight_text(document.title, terms),
        "description": highlight_text(document.description, terms),
    }
