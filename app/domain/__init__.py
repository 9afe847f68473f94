"""Domain layer: enums and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from app.domain.enums import EntityType, IndexableModel, ResourceStatus, SearchSort
from app.domain.exceptions import (
    HubSearchException,
    SearchIndexUnavailableException,
    SqlNotConfiguredException,
    UnknownModelException,
    UpstreamFetchException,
    ValidationException,
)

__all__ = [
    "EntityType",
    "IndexableModel",
    "ResourceStatus",
    "SearchSort",
    "HubSearchException",
    "SearchIndexUnavailableException",
    "SqlNotConfiguredException",
    "UnknownModelException",
    "UpstreamFetchException",
    "ValidationException",
]
