"""Domain exceptions for the catalog search service.

Defines domain-level exceptions independent of infrastructure concerns.
The presentation layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class HubSearchException(Exception):
    """Base exception for all hubsearch errors.

    All custom exceptions inherit from this class so the presentation layer
    can map them to HTTP responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, collection).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON error body used by the API exception handler."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(HubSearchException):
    """Raised when input validation fails (e.g. invalid format or range)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class UnknownModelException(HubSearchException):
    """Raised when the transform dispatcher receives a model name outside the indexable set.

    This is a programmer error (schema or wiring mismatch) and is never
    caught by the search subsystem.
    """

    def __init__(self, model: str) -> None:
        super().__init__(
            f"Unknown model: {model}",
            "UNKNOWN_MODEL",
            {"model": model},
        )


class UpstreamFetchException(HubSearchException):
    """Raised when reading a source collection fails during an index rebuild.

    The rebuild is abandoned as a whole; any previously built index stays
    in place.
    """

    def __init__(self, collection: str, reason: str) -> None:
        super().__init__(
            f"Failed to fetch collection for search index: {collection}",
            "UPSTREAM_FETCH_ERROR",
            {"collection": collection, "reason": reason},
        )


class SearchIndexUnavailableException(HubSearchException):
    """Raised when no search index has ever been built and none can be built now."""

    def __init__(self, reason: str | None = None) -> None:
        super().__init__(
            "Search index is not available",
            "SEARCH_INDEX_UNAVAILABLE",
            {"reason": reason} if reason else {},
        )


class SqlNotConfiguredException(HubSearchException):
    """Raised when an operation requires the SQL catalog database but it is not configured."""

    def __init__(self) -> None:
        super().__init__(
            message="This operation requires a SQL database that is not configured.",
            error_code="SQL_NOT_CONFIGURED",
        )
