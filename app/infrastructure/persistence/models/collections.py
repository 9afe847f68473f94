"""Curated collection ORM models: Skill, SubAgent, MCPServer."""

from sqlalchemy import JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import CatalogModel, UsageMixin


class Skill(CatalogModel, UsageMixin, Base):
    """Agent skill. Table: skill. Routed by slug."""

    __tablename__ = "skill"

    slug: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    tagline: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    category: Mapped[str | None] = mapped_column(String, nullable=True, index=True)
    examples: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    triggers: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    author_name: Mapped[str | None] = mapped_column(String, nullable=True)
    icon_url: Mapped[str | None] = mapped_column(String, nullable=True)


class SubAgent(CatalogModel, UsageMixin, Base):
    """Sub-agent definition. Table: subagent. Routed by slug."""

    __tablename__ = "subagent"

    slug: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    role: Mapped[str] = mapped_column(String, nullable=False)
    category: Mapped[str | None] = mapped_column(String, nullable=True, index=True)
    language: Mapped[str | None] = mapped_column(String, nullable=True)
    framework: Mapped[str | None] = mapped_column(String, nullable=True)
    when_to_use: Mapped[str | None] = mapped_column(Text, nullable=True)
    examples: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    author_name: Mapped[str | None] = mapped_column(String, nullable=True)


class MCPServer(CatalogModel, UsageMixin, Base):
    """MCP server listing. Table: mcp_server. Routed by slug."""

    __tablename__ = "mcp_server"

    slug: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str | None] = mapped_column(String, nullable=True, index=True)
    provider: Mapped[str] = mapped_column(String, nullable=False)
    icon_url: Mapped[str | None] = mapped_column(String, nullable=True)
