"""Request context management using contextvars.

Holds the request ID for the current request so log records emitted while
serving it (including index rebuilds it triggers) can be correlated.

Usage:
    token = set_request_id("abc123")
    request_id = get_request_id()
    reset_request_id(token)
"""

from contextvars import ContextVar, Token

_request_id: ContextVar[str | None] = ContextVar("request_id", default=None)


def set_request_id(request_id: str | None) -> Token[str | None]:
    """Set the request ID for the current async task; return a token for reset."""
    return _request_id.set(request_id)


def get_request_id() -> str | None:
    """Return the current request ID, or None outside a request."""
    return _request_id.get()


def reset_request_id(token: Token[str | None]) -> None:
    """Restore the request ID that was active before set_request_id."""
    _request_id.reset(token)
