"""Application interfaces (ports) implemented by infrastructure."""

from app.application.interfaces.repositories import ICatalogSource

__all__ = ["ICatalogSource"]
