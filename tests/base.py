import os
import unittest

from fastapi.testclient import TestClient
from sqlalchemy import create_engine, delete
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Ensure settings can be initialized in test environments
os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")

from app.db.session import get_db
from app.main import app
from app.models.author import Author
from app.models.quote import Quote
from app.models.quote_tag import quote_tag
from app.models.tag import Tag


class QuotesDbBase(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.engine = create_engine(
            "sqlite+pysqlite:///:memory:",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        cls.SessionLocal = sessionmaker(bind=cls.engine, autocommit=False, autoflush=False)
        Author.__table__.create(bind=cls.engine)
        Tag.__table__.create(bind=cls.engine)
        Quote.__table__.create(bind=cls.engine)
        quote_tag.create(bind=cls.engine)

    @classmethod
    def tearDownClass(cls):
        quote_tag.drop(bind=cls.engine)
        Quote.__table__.drop(bind=cls.engine)
        Tag.__table__.drop(bind=cls.engine)
        Author.__table__.drop(bind=cls.engine)
        cls.engine.dispose()

    def setUp(self):
        with self.SessionLocal() as db:
            db.execute(delete(quote_tag))
            db.execute(delete(Quote))
            db.execute(delete(Tag))
            db.execute(delete(Author))
            db.commit()
        self.db = self.SessionLocal()

    def tearDown(self):
        self.db.close()

    def _author(self, name: str, slug: str | None = None) -> Author:
        author = Author(name=name, slug=slug or name.lower().replace(" ", "-"))
        self.db.add(author)
        self.db.commit()
        return author

    def _quote(self, author: Author, content: str, tags: list[str] | None = None) -> Quote:
        quote = Quote(content=content, author_id=author.id)
        for name in tags or []:
            tag = self.db.query(Tag).filter(Tag.name == name).first()
            if tag is None:
                tag = Tag(name=name)
                self.db.add(tag)
            quote.tags.append(tag)
        self.db.add(quote)
        self.db.commit()
        return quote


class QuotesApiBase(QuotesDbBase):
    def setUp(self):
        super().setUp()

        def override_get_db():
            db = self.SessionLocal()
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = override_get_db
        self.client = TestClient(app)

    def tearDown(self):
        self.client.close()
        app.dependency_overrides.clear()
        super().tearDown()
