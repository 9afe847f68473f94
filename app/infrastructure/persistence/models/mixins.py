"""SQLAlchemy mixins shared by the catalog models.

Provides: CuidMixin, TimestampMixin, UsageMixin, and the combined CatalogModel.
"""

from datetime import datetime

from sqlalchemy import JSON, Boolean, DateTime, Integer, String, text
from sqlalchemy.orm import Mapped, declared_attr, mapped_column
from sqlalchemy.sql import func

from app.shared.utils.generators import generate_cuid


class CuidMixin:
    """Mixin for models using CUID as primary key. Provides id with default generate_cuid."""

    @declared_attr
    def id(cls) -> Mapped[str]:
        return mapped_column(String, primary_key=True, default=generate_cuid)


class TimestampMixin:
    """Mixin for created_at and updated_at (server defaults, timezone-aware)."""

    @declared_attr
    def created_at(cls) -> Mapped[datetime]:
        return mapped_column(
            DateTime(timezone=True), server_default=func.now(), nullable=False
        )

    @declared_attr
    def updated_at(cls) -> Mapped[datetime]:
        return mapped_column(
            DateTime(timezone=True),
            server_default=func.now(),
            onupdate=func.now(),
            nullable=False,
        )


class UsageMixin:
    """Mixin for curated collections: platforms list, use_count, featured flag."""

    @declared_attr
    def platforms(cls) -> Mapped[list[str]]:
        return mapped_column(JSON, nullable=False, default=list)

    @declared_attr
    def use_count(cls) -> Mapped[int]:
        return mapped_column(Integer, nullable=False, server_default=text("0"))

    @declared_attr
    def featured(cls) -> Mapped[bool]:
        return mapped_column(Boolean, nullable=False, server_default=text("false"))


class CatalogModel(CuidMixin, TimestampMixin):
    """Combined mixin: CUID + created_at/updated_at. Common for catalog models."""

    __abstract__ = True
