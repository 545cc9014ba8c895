"""
Pytest configuration and shared fixtures.
"""

import pytest
from fastapi.testclient import TestClient

from bookstore.database import create_db_engine, create_tables
from bookstore.main import app
from bookstore.repository import BookRepository


@pytest.fixture
def engine():
    """In-memory SQLite engine with the books table created."""
    engine = create_db_engine("sqlite://")
    create_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def repository(engine):
    """Repository bound to the in-memory database."""
    return BookRepository(engine)


@pytest.fixture
def sample_book_data():
    """Create sample book data for testing."""
    return {
        "isbn": "1111",
        "amazon_url": "https://www.example.com/book1",
        "author": "Author One",
        "language": "English",
        "pages": 100,
        "publisher": "Publisher One",
        "title": "Book One",
        "year": 2010,
    }


@pytest.fixture
def stored_book(repository, sample_book_data):
    """Insert the sample book and return it."""
    return repository.create(sample_book_data)


@pytest.fixture
def client(repository):
    """Test client wired to the in-memory repository."""
    app.state.book_repository = repository
    yield TestClient(app)
    app.state.book_repository = None
