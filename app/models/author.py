from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from app.db.session import Base
from app.models.common import IntIdMixin, TimestampMixin

if TYPE_CHECKING:
    from app.models.quote import Quote

class Author(Base, IntIdMixin, TimestampMixin):
    __tablename__ = "authors"
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    slug: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    description: Mapped[str | None] = mapped_column(String(400), nullable=True)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    link: Mapped[str | None] = mapped_column(String(400), nullable=True)

    quotes: Mapped[list["Quote"]] = relationship(back_populates="author")
