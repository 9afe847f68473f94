"""Project ORM model (community-submitted projects)."""

from sqlalchemy import JSON, ForeignKey, Integer, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import CatalogModel
from app.infrastructure.persistence.models.user import User


class Project(CatalogModel, Base):
    """Project model. Table: project. author is loaded eagerly by the catalog repository."""

    __tablename__ = "project"

    title: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    long_description: Mapped[str | None] = mapped_column(Text, nullable=True)
    category: Mapped[str | None] = mapped_column(String, nullable=True, index=True)
    tech_stack: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    platforms: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    screenshots: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    upvote_count: Mapped[int] = mapped_column(
        Integer, nullable=False, server_default=text("0")
    )
    view_count: Mapped[int] = mapped_column(
        Integer, nullable=False, server_default=text("0")
    )
    author_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("user.id", ondelete="SET NULL"), nullable=True, index=True
    )

    author: Mapped[User | None] = relationship(User, lazy="raise")
