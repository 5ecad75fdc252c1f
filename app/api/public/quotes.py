from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.db.session import get_db
from app.repositories.quote_repository import QuoteNotFoundError, QuoteRepository
from app.schemas.quotes import (
    GetRandomQuoteRequest,
    GetRandomQuotesRequest,
    IndexAllQuotesRequest,
    NewQuoteSchema,
    OrderEnum,
    PageMeta,
    PaginatedQuotes,
    QuoteOut,
    QuoteSortField,
    UpdateQuoteRequest,
)
from app.services.quotes.create_quote_service import CreateQuoteService
from app.services.quotes.delete_quote_service import DeleteQuoteService
from app.services.quotes.update_quote_service import UpdateQuoteService

router = APIRouter()
repository = QuoteRepository()

NOT_FOUND_DETAIL = "Quote not found"


def _filters(model, **values):
    try:
        return model(**values)
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=exc.errors(include_url=False, include_context=False))


@router.get("", response_model=PaginatedQuotes)
def index_quotes(
    min_length: Optional[int] = Query(None, ge=0, alias="minLength"),
    max_length: Optional[int] = Query(None, ge=0, alias="maxLength"),
    author: Optional[str] = Query(None),
    tags: Optional[str] = Query(None),
    sort_by: QuoteSortField = Query(QuoteSortField.ID, alias="sortBy"),
    order: OrderEnum = Query(OrderEnum.ASC),
    page: int = Query(1, ge=1),
    limit: int = Query(settings.QUOTES_DEFAULT_PAGE_LIMIT, ge=1, le=settings.QUOTES_MAX_PAGE_LIMIT),
    db: Session = Depends(get_db),
):
    filters = _filters(
        IndexAllQuotesRequest,
        min_length=min_length,
        max_length=max_length,
        author=author,
        tags=tags,
        sort_by=sort_by,
        order=order,
        page=page,
        limit=limit,
    )
    result = repository.index(db, filters)
    return PaginatedQuotes(
        meta=PageMeta(
            total=result.total,
            per_page=result.limit,
            current_page=result.page,
            last_page=result.last_page,
        ),
        data=[QuoteOut.model_validate(q) for q in result.items],
    )


@router.get("/random", response_model=QuoteOut)
def random_quote(
    min_length: Optional[int] = Query(None, ge=0, alias="minLength"),
    max_length: Optional[int] = Query(None, ge=0, alias="maxLength"),
    author: Optional[str] = Query(None),
    tags: Optional[str] = Query(None),
    query: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    filters = _filters(
        GetRandomQuoteRequest,
        min_length=min_length,
        max_length=max_length,
        author=author,
        tags=tags,
        query=query,
    )
    quote = repository.get_random_quote(db, filters)
    if quote is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND_DETAIL)
    return QuoteOut.model_validate(quote)


@router.get("/randoms", response_model=List[QuoteOut])
def random_quotes(
    min_length: Optional[int] = Query(None, ge=0, alias="minLength"),
    max_length: Optional[int] = Query(None, ge=0, alias="maxLength"),
    author: Optional[str] = Query(None),
    tags: Optional[str] = Query(None),
    query: Optional[str] = Query(None),
    sort_by: QuoteSortField = Query(QuoteSortField.ID, alias="sortBy"),
    order: OrderEnum = Query(OrderEnum.ASC),
    limit: int = Query(settings.QUOTES_DEFAULT_PAGE_LIMIT, ge=1, le=settings.QUOTES_MAX_PAGE_LIMIT),
    db: Session = Depends(get_db),
):
    filters = _filters(
        GetRandomQuotesRequest,
        min_length=min_length,
        max_length=max_length,
        author=author,
        tags=tags,
        query=query,
        sort_by=sort_by,
        order=order,
        limit=limit,
    )
    return [QuoteOut.model_validate(q) for q in repository.get_random_quotes(db, filters)]


@router.get("/{id}", response_model=QuoteOut)
def get_quote(id: int, db: Session = Depends(get_db)):
    try:
        quote = repository.get_by_id(db, id)
    except QuoteNotFoundError:
        raise HTTPException(status_code=404, detail=NOT_FOUND_DETAIL)
    return QuoteOut.model_validate(quote)


@router.post("", status_code=201, response_model=QuoteOut)
def create_quote(payload: NewQuoteSchema, db: Session = Depends(get_db)):
    try:
        quote = CreateQuoteService(repository).handle(db, payload)
    except IntegrityError:
        raise HTTPException(status_code=400, detail="Quote could not be created")
    return QuoteOut.model_validate(quote)


@router.post("/bulk", status_code=201, response_model=List[QuoteOut])
def create_quotes(payload: List[NewQuoteSchema], db: Session = Depends(get_db)):
    try:
        quotes = CreateQuoteService(repository).handle_many(db, payload)
    except IntegrityError:
        raise HTTPException(status_code=400, detail="Quotes could not be created")
    return [QuoteOut.model_validate(q) for q in quotes]


@router.patch("/{id}", response_model=QuoteOut)
def update_quote(id: int, payload: UpdateQuoteRequest, db: Session = Depends(get_db)):
    quote = UpdateQuoteService(repository).handle(db, id, payload)
    if quote is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND_DETAIL)
    return QuoteOut.model_validate(quote)


@router.delete("/{id}", response_model=QuoteOut)
def delete_quote(id: int, db: Session = Depends(get_db)):
    quote = DeleteQuoteService(repository).handle(db, id)
    if quote is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND_DETAIL)
    return QuoteOut.model_validate(quote)
