from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.core.config import settings


class OrderEnum(str, Enum):
    ASC = "asc"
    DESC = "desc"


class QuoteSortField(str, Enum):
    ID = "id"
    CONTENT = "content"
    AUTHOR_ID = "author_id"
    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"


class QuoteFilters(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    min_length: Optional[int] = Field(default=None, ge=0, alias="minLength")
    max_length: Optional[int] = Field(default=None, ge=0, alias="maxLength")
    author: Optional[str] = None
    # "a,b" matches quotes tagged with all of a and b; "a|b" with any of them.
    tags: Optional[str] = None


class IndexAllQuotesRequest(QuoteFilters):
    sort_by: QuoteSortField = Field(default=QuoteSortField.ID, alias="sortBy")
    order: OrderEnum = OrderEnum.ASC
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=settings.QUOTES_DEFAULT_PAGE_LIMIT, ge=1, le=settings.QUOTES_MAX_PAGE_LIMIT)


class GetRandomQuoteRequest(QuoteFilters):
    query: Optional[str] = None


class GetRandomQuotesRequest(GetRandomQuoteRequest):
    sort_by: QuoteSortField = Field(default=QuoteSortField.ID, alias="sortBy")
    order: OrderEnum = OrderEnum.ASC
    limit: int = Field(default=settings.QUOTES_DEFAULT_PAGE_LIMIT, ge=1, le=settings.QUOTES_MAX_PAGE_LIMIT)


class NewQuoteSchema(BaseModel):
    content: str = Field(min_length=1)
    author_id: int
    tags: List[str] = []


class UpdateQuoteRequest(BaseModel):
    content: Optional[str] = Field(default=None, min_length=1)


class AuthorOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    slug: str


class TagOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str


class QuoteOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    content: str
    author_id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    author: Optional[AuthorOut] = None
    tags: List[TagOut] = []


class PageMeta(BaseModel):
    total: int
    per_page: int
    current_page: int
    last_page: int
    first_page: int = 1


class PaginatedQuotes(BaseModel):
    meta: PageMeta
    data: List[QuoteOut]
