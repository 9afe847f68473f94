"""hubsearch: fuzzy catalog search service."""
