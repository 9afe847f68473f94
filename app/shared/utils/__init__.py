"""Shared utilities: datetime helpers and id generation."""

from app.shared.utils.datetime import ensure_utc, to_unix_seconds
from app.shared.utils.generators import generate_cuid

__all__ = [
    "ensure_utc",
    "generate_cuid",
    "to_unix_seconds",
]
