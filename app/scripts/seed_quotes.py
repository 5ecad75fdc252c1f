from __future__ import annotations

import json
import logging
import re
import sys
from pathlib import Path

from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.logging import configure_logging
from app.db.session import SessionLocal
from app.models.author import Author
from app.models.quote import Quote
from app.repositories.quote_repository import QuoteRepository
from app.schemas.quotes import NewQuoteSchema

logger = logging.getLogger(__name__)

_SLUG_RE = re.compile(r"[^a-z0-9]+")


def slugify(name: str) -> str:
    return _SLUG_RE.sub("-", name.strip().lower()).strip("-")


def _author_for(db: Session, cache: dict[str, Author], name: str) -> Author:
    slug = slugify(name)
    author = cache.get(slug)
    if author is None:
        author = db.query(Author).filter(Author.slug == slug).first()
    if author is None:
        author = Author(name=name, slug=slug)
        db.add(author)
        db.flush()
    cache[slug] = author
    return author


def seed_quotes(db: Session, items: list[dict], repository: QuoteRepository | None = None) -> tuple[int, int]:
    repository = repository or QuoteRepository()
    authors: dict[str, Author] = {}
    pending: list[NewQuoteSchema] = []
    seen: set[str] = set()

    contents = [str(item["content"]).strip() for item in items]
    existing = {row.content for row in db.query(Quote.content).filter(Quote.content.in_(contents)).all()}

    for item, content in zip(items, contents):
        if not content or content in existing or content in seen:
            continue
        author = _author_for(db, authors, str(item["author"]).strip())
        tags = [str(t).strip() for t in item.get("tags") or [] if str(t).strip()]
        pending.append(NewQuoteSchema(content=content, author_id=author.id, tags=tags))
        seen.add(content)

    repository.create_multiple(db, pending)
    db.commit()
    return len(pending), len(items) - len(pending)


def main() -> None:
    configure_logging(settings.LOG_LEVEL)
    if len(sys.argv) != 2:
        raise SystemExit("usage: python -m app.scripts.seed_quotes <quotes.json>")
    items = json.loads(Path(sys.argv[1]).read_text(encoding="utf-8"))
    db = SessionLocal()
    try:
        created, skipped = seed_quotes(db, items)
        total = db.query(Quote).filter(Quote.deleted_at.is_(None)).count()
    finally:
        db.close()
    logger.info("quotes seed done: created=%s, skipped=%s, total=%s", created, skipped, total)


if __name__ == "__main__":
    main()
