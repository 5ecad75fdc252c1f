from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from app.db.session import Base
from app.models.common import IntIdMixin, SoftDeleteMixin, TimestampMixin
from app.models.quote_tag import quote_tag

if TYPE_CHECKING:
    from app.models.quote import Quote

class Tag(Base, IntIdMixin, TimestampMixin, SoftDeleteMixin):
    __tablename__ = "tags"
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)

    quotes: Mapped[list["Quote"]] = relationship(secondary=quote_tag, back_populates="tags")
