"""
Relational storage for book records.

Defines the ``books`` table and helpers to build the SQLAlchemy engine the
rest of the application shares.
"""

from typing import Any, Dict

import structlog
from sqlalchemy import Column, Integer, Text, create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool

logger = structlog.get_logger(__name__)

Base = declarative_base()


class BookRecord(Base):
    __tablename__ = "books"

    isbn = Column(Text, primary_key=True)
    amazon_url = Column(Text)
    author = Column(Text, nullable=False)
    language = Column(Text)
    pages = Column(Integer)
    publisher = Column(Text)
    title = Column(Text, nullable=False)
    year = Column(Integer)


books_table = BookRecord.__table__

BOOK_FIELDS = tuple(column.name for column in books_table.columns)
MUTABLE_FIELDS = tuple(name for name in BOOK_FIELDS if name != "isbn")
INTEGER_FIELDS = frozenset(
    column.name for column in books_table.columns if isinstance(column.type, Integer)
)


def create_db_engine(database_url: str, echo: bool = False) -> Engine:
    """
    Create the engine used for every request.

    SQLite connections are shared across the request thread pool, and an
    in-memory SQLite database is pinned to a single connection so every
    caller sees the same data.
    """
    kwargs: Dict[str, Any] = {"echo": echo, "future": True}
    if database_url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
    else:
        kwargs["pool_pre_ping"] = True

    engine = create_engine(database_url, **kwargs)
    logger.info("Database engine created", dialect=engine.dialect.name)
    return engine


def create_tables(engine: Engine) -> None:
    """Create the books table if it does not exist yet."""
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables ensured", tables=sorted(Base.metadata.tables))
