"""
Quote repository.

Translates quote filter/sort/pagination inputs into SQLAlchemy queries and
performs quote mutations. Every method takes the caller's ``Session`` as its
first argument; the repository flushes but never commits, so the caller owns
the transaction.
"""
from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Sequence

from sqlalchemy import and_, asc, delete as sa_delete, desc, false, func, insert, literal, or_
from sqlalchemy.dialects.postgresql import REGCONFIG
from sqlalchemy.orm import Query, Session, selectinload

from app.core.config import settings
from app.models.author import Author
from app.models.common import utcnow
from app.models.quote import Quote
from app.models.quote_tag import quote_tag
from app.models.tag import Tag
from app.schemas.quotes import (
    GetRandomQuoteRequest,
    GetRandomQuotesRequest,
    IndexAllQuotesRequest,
    NewQuoteSchema,
    OrderEnum,
    QuoteFilters,
    QuoteSortField,
    UpdateQuoteRequest,
)

logger = logging.getLogger(__name__)

_SEARCH_SPLIT_RE = re.compile(r"[\s,;]+")
_SEARCH_STRIP_RE = re.compile(r"[^\w-]+")
# Characters after which a word starts in the LIKE fallback.
_WORD_SEPARATORS = (" ", "\n", "\r", "\t", '"', "'", "(", "[", "{", ",", ";", ":", ".", "!", "?", "-", "/")

_SORT_COLUMNS = {
    QuoteSortField.ID: Quote.id,
    QuoteSortField.CONTENT: Quote.content,
    QuoteSortField.AUTHOR_ID: Quote.author_id,
    QuoteSortField.CREATED_AT: Quote.created_at,
    QuoteSortField.UPDATED_AT: Quote.updated_at,
}


class QuoteNotFoundError(Exception):
    def __init__(self, quote_id: int):
        super().__init__(f"Quote {quote_id} not found")
        self.quote_id = quote_id


@dataclass
class Page:
    items: list[Quote]
    total: int
    page: int
    limit: int

    @property
    def last_page(self) -> int:
        return max(1, math.ceil(self.total / self.limit))


def search_tokens(search: str) -> list[str]:
    """Split free text on whitespace, commas and semicolons.

    Characters other than word characters and inner hyphens are dropped so
    every token is safe to use as a full-text prefix term.
    """
    tokens: list[str] = []
    for raw in _SEARCH_SPLIT_RE.split(search or ""):
        token = _SEARCH_STRIP_RE.sub("", raw).strip("-")
        if token:
            tokens.append(token)
    return tokens


def prefix_tsquery(tokens: Sequence[str]) -> str:
    return " | ".join(f"{token}:*" for token in tokens)


def _split_tags(raw: str, separator: str) -> list[str]:
    return [name.strip() for name in raw.split(separator) if name.strip()]


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _in_memory_sort_key(field: QuoteSortField):
    def _key(quote: Quote):
        value = getattr(quote, field.value)
        if value is None:
            return (1, 0)
        if isinstance(value, datetime):
            return (0, value.timestamp())
        if isinstance(value, str):
            return (0, (value.casefold(), value))
        return (0, value)

    return _key


class QuoteRepository:
    def index(
        self,
        db: Session,
        filters: IndexAllQuotesRequest,
        *,
        with_relations: bool = True,
    ) -> Page:
        q = self._apply_filters(db.query(Quote), filters)
        total = q.count()

        q = self._order(q, filters.sort_by, filters.order)
        if with_relations:
            q = self._with_relations(q)
        items = q.offset((filters.page - 1) * filters.limit).limit(filters.limit).all()
        return Page(items=items, total=total, page=filters.page, limit=filters.limit)

    def get_random_quote(
        self,
        db: Session,
        filters: GetRandomQuoteRequest,
        *,
        with_relations: bool = True,
    ) -> Quote | None:
        q = self._apply_filters(db.query(Quote), filters)
        q = self.query_content(db, q, filters.query)
        if with_relations:
            q = self._with_relations(q)
        return q.order_by(func.random()).first()

    def get_random_quotes(
        self,
        db: Session,
        filters: GetRandomQuotesRequest,
        *,
        with_relations: bool = True,
    ) -> list[Quote]:
        """Sample ``filters.limit`` random rows, then order the sample.

        Randomness only decides which rows are returned; the returned list is
        sorted in process by ``filters.sort_by``/``filters.order``.
        """
        q = self._apply_filters(db.query(Quote), filters)
        q = self.query_content(db, q, filters.query)
        if with_relations:
            q = self._with_relations(q)
        quotes = q.order_by(func.random()).limit(filters.limit).all()
        return sorted(
            quotes,
            key=_in_memory_sort_key(filters.sort_by),
            reverse=filters.order == OrderEnum.DESC,
        )

    def get_by_id(
        self,
        db: Session,
        quote_id: int,
        *,
        with_relations: bool = True,
        find_or_fail: bool = True,
    ) -> Quote | None:
        q = self._live(db.query(Quote)).filter(Quote.id == quote_id)
        if with_relations:
            q = self._with_relations(q)
        quote = q.first()
        if quote is None and find_or_fail:
            raise QuoteNotFoundError(quote_id)
        return quote

    def get_by_ids(self, db: Session, ids: Iterable[int], *, with_relations: bool = True) -> list[Quote]:
        q = self._live(db.query(Quote)).filter(Quote.id.in_(list(ids)))
        if with_relations:
            q = self._with_relations(q)
        return q.order_by(Quote.id.asc()).all()

    def get_by_contents(
        self, db: Session, contents: Iterable[str], *, with_relations: bool = True
    ) -> list[Quote]:
        q = self._live(db.query(Quote)).filter(Quote.content.in_(list(contents)))
        if with_relations:
            q = self._with_relations(q)
        return q.order_by(Quote.id.asc()).all()

    def create(self, db: Session, data: NewQuoteSchema) -> Quote:
        quote = Quote(content=data.content, author_id=data.author_id)
        if data.tags:
            quote.tags = self.resolve_tags(db, data.tags)
        db.add(quote)
        db.flush()
        logger.info("quote_created id=%s author_id=%s", quote.id, quote.author_id)
        return quote

    def create_multiple(self, db: Session, items: Sequence[NewQuoteSchema]) -> list[Quote]:
        """Insert all quotes in one batch statement and read them back by content.

        Rows that already existed with the same content are returned as well.
        """
        if not items:
            return []
        db.execute(
            insert(Quote),
            [{"content": item.content, "author_id": item.author_id} for item in items],
        )
        quotes = self.get_by_contents(db, [item.content for item in items])

        tags_by_content: dict[str, list[str]] = {}
        for item in items:
            if item.tags:
                tags_by_content.setdefault(item.content, []).extend(item.tags)
        if tags_by_content:
            resolved = {
                tag.name: tag
                for tag in self.resolve_tags(db, [name for names in tags_by_content.values() for name in names])
            }
            for quote in quotes:
                existing = {tag.name for tag in quote.tags}
                for name in tags_by_content.get(quote.content, []):
                    tag = resolved.get(name.strip())
                    if tag is not None and tag.name not in existing:
                        quote.tags.append(tag)
                        existing.add(tag.name)
            db.flush()

        logger.info("quotes_created count=%s", len(items))
        return quotes

    def update(self, db: Session, quote_id: int, data: UpdateQuoteRequest) -> Quote | None:
        # Missing rows are reported as None; callers decide whether that is an error.
        quote = self.get_by_id(db, quote_id, find_or_fail=False)
        if quote is None:
            return None
        if data.content is not None and data.content != quote.content:
            quote.content = data.content
            db.flush()
            logger.info("quote_updated id=%s", quote.id)
        return quote

    def delete(self, db: Session, quote_id: int) -> Quote | None:
        quote = self.get_by_id(db, quote_id, find_or_fail=False)
        if quote is None:
            return None
        quote.deleted_at = utcnow()
        db.flush()
        logger.info("quote_deleted id=%s", quote.id)
        return quote

    def detach_tags(self, db: Session, quote: Quote) -> int:
        result = db.execute(sa_delete(quote_tag).where(quote_tag.c.quote_id == quote.id))
        db.expire(quote, ["tags"])
        return int(result.rowcount or 0)

    def resolve_tags(self, db: Session, names: Iterable[str]) -> list[Tag]:
        wanted: list[str] = []
        for name in names:
            name = str(name or "").strip()
            if name and name not in wanted:
                wanted.append(name)
        if not wanted:
            return []
        existing = {
            tag.name: tag
            for tag in db.query(Tag).filter(Tag.name.in_(wanted), Tag.deleted_at.is_(None)).all()
        }
        tags: list[Tag] = []
        for name in wanted:
            tag = existing.get(name)
            if tag is None:
                tag = Tag(name=name)
                db.add(tag)
            tags.append(tag)
        return tags

    def filter_length(self, q: Query, length: int | None, direction: str) -> Query:
        if length is None:
            return q
        content_length = func.length(Quote.content)
        if direction == ">=":
            return q.filter(content_length >= length)
        if direction == "<=":
            return q.filter(content_length <= length)
        raise ValueError(f"unsupported length comparison: {direction}")

    def filter_author(self, q: Query, author: str | None) -> Query:
        if author is None:
            return q
        return q.filter(Quote.author.has(or_(Author.name == author, Author.slug == author)))

    def filter_tags(self, q: Query, tags: str | None) -> Query:
        if tags is None:
            return q
        separator = "|" if "|" in tags else ","
        names = _split_tags(tags, separator)
        if not names:
            # Only empty segments: no tag has an empty name.
            return q.filter(false())
        if separator == "|":
            return q.filter(Quote.tags.any(and_(Tag.name.in_(names), Tag.deleted_at.is_(None))))
        for name in names:
            q = q.filter(Quote.tags.any(and_(Tag.name == name, Tag.deleted_at.is_(None))))
        return q

    def query_content(self, db: Session, q: Query, search: str | None) -> Query:
        if search is None:
            return q
        tokens = search_tokens(search)
        if not tokens:
            return q
        bind = db.get_bind()
        if bind is not None and bind.dialect.name == "postgresql":
            config = literal(settings.QUOTES_SEARCH_CONFIG, type_=REGCONFIG)
            document = func.to_tsvector(config, Quote.content)
            return q.filter(document.op("@@")(func.to_tsquery(config, prefix_tsquery(tokens))))
        # Word-prefix match for engines without PostgreSQL full-text search.
        clauses = []
        for token in tokens:
            escaped = _escape_like(token)
            clauses.append(Quote.content.ilike(f"{escaped}%", escape="\\"))
            clauses.extend(
                Quote.content.ilike(f"%{sep}{escaped}%", escape="\\") for sep in _WORD_SEPARATORS
            )
        return q.filter(or_(*clauses))

    def _apply_filters(self, q: Query, filters: QuoteFilters) -> Query:
        q = self._live(q)
        q = self.filter_length(q, filters.min_length, ">=")
        q = self.filter_length(q, filters.max_length, "<=")
        q = self.filter_author(q, filters.author)
        return self.filter_tags(q, filters.tags)

    @staticmethod
    def _live(q: Query) -> Query:
        return q.filter(Quote.deleted_at.is_(None))

    @staticmethod
    def _with_relations(q: Query) -> Query:
        return q.options(selectinload(Quote.author), selectinload(Quote.tags))

    @staticmethod
    def _order(q: Query, sort_by: QuoteSortField, order: OrderEnum) -> Query:
        direction = asc if order == OrderEnum.ASC else desc
        column = _SORT_COLUMNS[sort_by]
        if sort_by == QuoteSortField.ID:
            return q.order_by(direction(column))
        return q.order_by(direction(column), direction(Quote.id))
