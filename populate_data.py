#!/usr/bin/env python3
"""
Insert sample books into the database.

Usage: python populate_data.py [--reset]

--reset deletes every stored book before inserting the samples.
"""

import sys
from typing import Dict, List, Optional

from sqlalchemy import delete
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from bookstore.database import books_table, create_db_engine, create_tables
from bookstore.errors import BookAlreadyExistsError
from bookstore.repository import BookRepository
from utilities.config import config
from utilities.logger import setup_logging, get_logger

logger = get_logger(__name__)

SAMPLE_BOOKS: List[Dict] = [
    {
        "isbn": "1111111111",
        "amazon_url": "https://www.example.com/book/1",
        "author": "Author One",
        "language": "English",
        "pages": 100,
        "publisher": "Publisher One",
        "title": "Book One",
        "year": 2001,
    },
    {
        "isbn": "2222222222",
        "amazon_url": "https://www.example.com/book/2",
        "author": "Author Two",
        "language": "French",
        "pages": 200,
        "publisher": "Publisher Two",
        "title": "Book Two",
        "year": 2002,
    },
]


def populate(engine: Engine, reset: bool = False) -> Dict[str, int]:
    """
    Insert the sample books, skipping any isbn already stored.

    Returns:
        Counts of inserted and skipped books
    """
    create_tables(engine)

    if reset:
        with engine.begin() as conn:
            deleted = conn.execute(delete(books_table)).rowcount
        logger.info("Existing books removed", count=deleted)

    repository = BookRepository(engine)
    result = {"inserted": 0, "skipped": 0}
    for book in SAMPLE_BOOKS:
        try:
            repository.create(book)
            result["inserted"] += 1
        except BookAlreadyExistsError:
            logger.info("Sample book already present", isbn=book["isbn"])
            result["skipped"] += 1
    return result


def main(argv: Optional[List[str]] = None) -> int:
    """Main function."""
    args = sys.argv[1:] if argv is None else argv
    if args not in ([], ["--reset"]):
        print("Usage: python populate_data.py [--reset]")
        return 1

    setup_logging(
        log_level=config.log_level,
        log_format=config.log_format,
        log_file=config.get_log_file_path(),
        debug=config.debug
    )

    engine = create_db_engine(config.database_url, echo=config.database_echo)
    try:
        result = populate(engine, reset=bool(args))
        logger.info("Sample data inserted", **result)
        return 0
    except SQLAlchemyError as e:
        logger.error("Failed to insert sample data", error=str(e))
        return 1
    finally:
        engine.dispose()


if __name__ == "__main__":
    sys.exit(main())
