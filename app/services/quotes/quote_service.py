from __future__ import annotations

from app.repositories.quote_repository import QuoteRepository


class QuoteService:
    def __init__(self, repository: QuoteRepository | None = None):
        self._repository = repository or QuoteRepository()

    def repository(self) -> QuoteRepository:
        return self._repository
