"""Persistence repositories. Re-exports for dependency injection."""

from app.infrastructure.persistence.repositories.catalog_repo import (
    CatalogReadRepository,
)

__all__ = [
    "CatalogReadRepository",
]
