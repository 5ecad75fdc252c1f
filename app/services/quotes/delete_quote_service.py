from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from app.models.quote import Quote
from app.services.quotes.quote_service import QuoteService

logger = logging.getLogger(__name__)


class DeleteQuoteService(QuoteService):
    """Deletes a quote and detaches its tags as one unit of work.

    Both writes run on the session passed in; either both are committed or
    the session is rolled back and the original exception propagates.
    """

    def handle(self, db: Session, quote_id: int) -> Quote | None:
        try:
            quote = self.repository().delete(db, quote_id)
            if quote is None:
                db.rollback()
                return None
            detached = self.repository().detach_tags(db, quote)
            db.commit()
        except Exception:
            logger.warning("quote_delete_rolled_back id=%s", quote_id, exc_info=True)
            db.rollback()
            raise
        logger.info("quote_delete_committed id=%s detached_tags=%s", quote_id, detached)
        return quote
