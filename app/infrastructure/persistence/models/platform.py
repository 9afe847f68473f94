"""Platform ORM models: PlatformProfile and its PromptTemplates."""

from sqlalchemy import JSON, ForeignKey, Integer, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import CatalogModel


class PlatformProfile(CatalogModel, Base):
    """Platform page (e.g. Cursor, Windsurf). Table: platform_profile.

    platform_id is the public identifier used in URLs and platform filters.
    """

    __tablename__ = "platform_profile"

    platform_id: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    tagline: Mapped[str | None] = mapped_column(String, nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    cheat_sheet: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    best_practices: Mapped[list[str]] = mapped_column(
        JSON, nullable=False, default=list
    )


class PromptTemplate(CatalogModel, Base):
    """Prompt template. Table: prompt_template. platform is loaded eagerly by the repository."""

    __tablename__ = "prompt_template"

    slug: Mapped[str] = mapped_column(String, nullable=False)
    title: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(String, nullable=False, index=True)
    use_case: Mapped[str | None] = mapped_column(Text, nullable=True)
    prompt: Mapped[str | None] = mapped_column(Text, nullable=True)
    use_count: Mapped[int] = mapped_column(
        Integer, nullable=False, server_default=text("0")
    )
    platform_profile_id: Mapped[str | None] = mapped_column(
        String,
        ForeignKey("platform_profile.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    platform: Mapped[PlatformProfile | None] = relationship(
        PlatformProfile, lazy="raise"
    )
