from sqlalchemy import Column, ForeignKey, Table

from app.db.session import Base
from app.models.common import BigIntId

# No ON DELETE cascade: tag links are detached explicitly when a quote is deleted.
quote_tag = Table(
    "quote_tag",
    Base.metadata,
    Column("quote_id", BigIntId, ForeignKey("quotes.id"), primary_key=True),
    Column("tag_id", BigIntId, ForeignKey("tags.id"), primary_key=True),
)
