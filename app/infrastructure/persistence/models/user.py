"""User ORM model (read-only here; only the username is indexed as project author)."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import CatalogModel


class User(CatalogModel, Base):
    """Site user. Table: user."""

    __tablename__ = "user"

    username: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    name: Mapped[str | None] = mapped_column(String, nullable=True)
