from __future__ import annotations

from sqlalchemy.orm import Session

from app.models.quote import Quote
from app.schemas.quotes import UpdateQuoteRequest
from app.services.quotes.quote_service import QuoteService


class UpdateQuoteService(QuoteService):
    def handle(self, db: Session, quote_id: int, data: UpdateQuoteRequest) -> Quote | None:
        try:
            quote = self.repository().update(db, quote_id, data)
            db.commit()
        except Exception:
            db.rollback()
            raise
        return quote
