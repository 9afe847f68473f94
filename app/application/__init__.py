"""Application layer: interfaces, services, use cases.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements ICatalogSource (the catalog database reader).
"""

from app.application.interfaces import ICatalogSource
from app.application.services.search_index import SearchIndexCache
from app.application.use_cases.search import SearchService

__all__ = [
    "ICatalogSource",
    "SearchIndexCache",
    "SearchService",
]
