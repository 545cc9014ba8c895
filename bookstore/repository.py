"""
Data access object for book records.

Every operation is a single parameterized statement run in its own
transaction; nothing is cached between calls.
"""

from typing import Any, Dict, List, Mapping, Optional

import structlog
from sqlalchemy import delete, func, insert, select, text, update
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError

from bookstore.database import BOOK_FIELDS, INTEGER_FIELDS, MUTABLE_FIELDS, books_table
from bookstore.errors import BookAlreadyExistsError, BookNotFoundError, BookValidationError
from bookstore.schemas import type_error_message

logger = structlog.get_logger(__name__)

Book = Dict[str, Any]


def _row_to_book(row) -> Book:
    mapping = row._mapping
    return {field: mapping[field] for field in BOOK_FIELDS}


class BookRepository:
    """Book operations against the ``books`` table."""

    def __init__(self, engine: Engine):
        self.engine = engine
        self.table = books_table

    def _build_filters(self, filters: Optional[Mapping[str, Any]]) -> List:
        """
        Turn ``{field: value}`` pairs into equality clauses.

        Unknown fields are ignored. Integer columns accept numeric strings,
        as sent in query parameters.
        """
        clauses = []
        errors = []
        for field, value in (filters or {}).items():
            if field not in BOOK_FIELDS:
                continue
            if field in INTEGER_FIELDS and not isinstance(value, int):
                try:
                    value = int(value)
                except (TypeError, ValueError):
                    errors.append(type_error_message(field, "integer"))
                    continue
            clauses.append(self.table.c[field] == value)
        if errors:
            raise BookValidationError(errors)
        return clauses

    def find_all(self, filters: Optional[Mapping[str, Any]] = None) -> List[Book]:
        """
        Get every book, optionally narrowed by field/value matches.

        Args:
            filters: Mapping of column name to the value it must equal

        Returns:
            List of book records ordered by title
        """
        stmt = select(self.table).where(*self._build_filters(filters)).order_by(self.table.c.title)
        with self.engine.connect() as conn:
            rows = conn.execute(stmt).all()
        books = [_row_to_book(row) for row in rows]
        logger.debug("Books listed", count=len(books), filters=dict(filters or {}))
        return books

    def find_one(self, isbn: str) -> Book:
        """
        Get a single book by isbn.

        Raises:
            BookNotFoundError: if no row has this isbn
        """
        stmt = select(self.table).where(self.table.c.isbn == isbn)
        with self.engine.connect() as conn:
            row = conn.execute(stmt).first()
        if row is None:
            raise BookNotFoundError(isbn)
        return _row_to_book(row)

    def create(self, data: Mapping[str, Any]) -> Book:
        """
        Insert a new book and return the stored row.

        Raises:
            BookAlreadyExistsError: if the isbn is already taken
        """
        values = {field: data.get(field) for field in BOOK_FIELDS}
        stmt = insert(self.table).values(**values).returning(*self.table.c)
        try:
            with self.engine.begin() as conn:
                row = conn.execute(stmt).one()
        except IntegrityError as e:
            logger.warning("Duplicate book rejected", isbn=values["isbn"], error=str(e.orig))
            raise BookAlreadyExistsError(values["isbn"]) from e

        logger.info("Book created", isbn=row.isbn)
        return _row_to_book(row)

    def update(self, isbn: str, data: Mapping[str, Any]) -> Book:
        """
        Replace every mutable field of a book; isbn never changes.

        Fields missing from ``data`` are stored as null.

        Raises:
            BookNotFoundError: if no row has this isbn
        """
        values = {field: data.get(field) for field in MUTABLE_FIELDS}
        stmt = (
            update(self.table)
            .where(self.table.c.isbn == isbn)
            .values(**values)
            .returning(*self.table.c)
        )
        with self.engine.begin() as conn:
            row = conn.execute(stmt).first()
        if row is None:
            raise BookNotFoundError(isbn)

        logger.info("Book updated", isbn=isbn)
        return _row_to_book(row)

    def remove(self, isbn: str) -> None:
        """
        Delete a book.

        Raises:
            BookNotFoundError: if no row has this isbn
        """
        stmt = delete(self.table).where(self.table.c.isbn == isbn).returning(self.table.c.isbn)
        with self.engine.begin() as conn:
            row = conn.execute(stmt).first()
        if row is None:
            raise BookNotFoundError(isbn)

        logger.info("Book deleted", isbn=isbn)

    def health_check(self) -> Dict[str, Any]:
        """
        Perform database health check.

        Returns:
            Dictionary with health status
        """
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
                books_count = conn.execute(select(func.count()).select_from(self.table)).scalar_one()
            return {"status": "healthy", "books_count": books_count}
        except Exception as e:
            logger.error("Database health check failed", error=str(e))
            return {"status": "unhealthy", "error": str(e)}
