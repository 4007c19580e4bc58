"""Pytest configuration and fixtures."""

from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional

import pytest
from pydantic import BaseModel
from sqlalchemy import (
    Column,
    DateTime,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    create_engine,
    func,
    insert,
)
from sqlalchemy.orm import sessionmaker

from resourcedb import NoResourceWithId, ResourceModel
from resourcedb.database import QueryDefinition, ResourceService, ResourceType

metadata = MetaData()

articles = Table(
    "articles",
    metadata,
    Column("id", String(64), primary_key=True),
    Column("version", Integer, nullable=False),
    Column("activity_last", DateTime, nullable=False),
    Column("title", String, nullable=False),
    Column("author_name", String, nullable=False),
    Column("author_email", String, nullable=True),
    Column("tags", Text, nullable=True),  # JSON array
    Column("settings", Text, nullable=True),  # JSON object
)

comments = Table(
    "comments",
    metadata,
    Column("id", String(64), primary_key=True),
    Column("article_id", String(64), nullable=False, index=True),
    Column("body", Text, nullable=False),
)


class Author(BaseModel):
    name: str
    email: Optional[str] = None


class ArticleStats(BaseModel):
    comments: int = 0


class Article(ResourceModel):
    title: str
    author: Author
    stats: ArticleStats
    tags: Optional[List[str]] = None
    settings: Optional[Dict[str, Any]] = None


class ArticleNotFound(NoResourceWithId):
    pass


class ArticleQueryDefinition(QueryDefinition):
    """Articles joined to their comments, one row per article."""

    def __init__(self):
        super().__init__(articles, "a")
        self.comments = comments.alias("c")

    def apply(self, statement):
        a = self.table
        c = self.comments
        return (
            statement.add_columns(
                a.c.id,
                a.c.version,
                a.c.activity_last.label("activity.last"),
                a.c.title,
                a.c.author_name.label("author.name"),
                a.c.author_email.label("author.email"),
                a.c.tags,
                a.c.settings,
                func.count(c.c.id).label("stats.comments"),
            )
            .select_from(a.outerjoin(c, c.c.article_id == a.c.id))
            .group_by(a.c.id)
        )


ARTICLE_TYPE = ResourceType(
    query_definition=ArticleQueryDefinition(),
    model=Article,
    json_fields=("tags", "settings"),
    not_found=ArticleNotFound,
)

BASE_TIME = datetime(2024, 3, 1, 12, 0, 0)


def article_row(
    id: str,
    minutes: int = 0,
    version: int = 1,
    tags: Optional[str] = '["news"]',
    settings: Optional[str] = None,
    **overrides: Any,
) -> Dict[str, Any]:
    """Build an articles table row; `minutes` offsets activity_last from BASE_TIME."""
    row = {
        "id": id,
        "version": version,
        "activity_last": BASE_TIME + timedelta(minutes=minutes),
        "title": f"Article {id}",
        "author_name": "Ada",
        "author_email": "ada@example.com",
        "tags": tags,
        "settings": settings,
    }
    row.update(overrides)
    return row


def seed_articles(session, rows: List[Dict[str, Any]]) -> None:
    session.execute(insert(articles), rows)
    session.commit()


def seed_comments(session, article_id: str, count: int) -> None:
    session.execute(
        insert(comments),
        [
            {"id": f"{article_id}-c{i}", "article_id": article_id, "body": f"comment {i}"}
            for i in range(count)
        ],
    )
    session.commit()


@pytest.fixture
def engine():
    """In-memory SQLite engine with the example tables."""
    engine = create_engine("sqlite:///:memory:", echo=False)
    metadata.create_all(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def session(engine):
    """Create a temporary in-memory database session for testing."""
    SessionLocal = sessionmaker(bind=engine)
    session = SessionLocal()

    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def article_service(session):
    return ResourceService(session, ARTICLE_TYPE)
