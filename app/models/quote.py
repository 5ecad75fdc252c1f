from __future__ import annotations

from sqlalchemy import ForeignKey, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from app.db.session import Base
from app.models.author import Author
from app.models.common import BigIntId, IntIdMixin, SoftDeleteMixin, TimestampMixin
from app.models.quote_tag import quote_tag
from app.models.tag import Tag

class Quote(Base, IntIdMixin, TimestampMixin, SoftDeleteMixin):
    __tablename__ = "quotes"
    content: Mapped[str] = mapped_column(Text, nullable=False)
    author_id: Mapped[int] = mapped_column(BigIntId, ForeignKey("authors.id"), nullable=False, index=True)

    author: Mapped[Author] = relationship(back_populates="quotes")
    tags: Mapped[list[Tag]] = relationship(secondary=quote_tag, back_populates="quotes")
