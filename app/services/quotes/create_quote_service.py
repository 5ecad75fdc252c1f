from __future__ import annotations

import logging
from typing import Sequence

from sqlalchemy.orm import Session

from app.models.quote import Quote
from app.schemas.quotes import NewQuoteSchema
from app.services.quotes.quote_service import QuoteService

logger = logging.getLogger(__name__)


class CreateQuoteService(QuoteService):
    def handle(self, db: Session, data: NewQuoteSchema) -> Quote:
        try:
            quote = self.repository().create(db, data)
            db.commit()
        except Exception:
            db.rollback()
            raise
        db.refresh(quote)
        return quote

    def handle_many(self, db: Session, items: Sequence[NewQuoteSchema]) -> list[Quote]:
        try:
            quotes = self.repository().create_multiple(db, items)
            db.commit()
        except Exception:
            logger.warning("quotes_bulk_create_rolled_back count=%s", len(items), exc_info=True)
            db.rollback()
            raise
        return quotes
