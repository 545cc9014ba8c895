"""
Tests for the book data access object.
"""

import pytest
from sqlalchemy import create_engine

from bookstore.errors import BookAlreadyExistsError, BookNotFoundError, BookValidationError
from bookstore.repository import BookRepository


def test_create_returns_stored_row(repository, sample_book_data):
    book = repository.create(sample_book_data)
    assert book == sample_book_data


def test_find_one_returns_created_fields(repository, stored_book, sample_book_data):
    assert repository.find_one("1111") == sample_book_data


def test_find_one_missing(repository):
    with pytest.raises(BookNotFoundError) as exc_info:
        repository.find_one("9999")
    assert exc_info.value.status_code == 404
    assert exc_info.value.isbn == "9999"


def test_create_duplicate_isbn(repository, stored_book, sample_book_data):
    with pytest.raises(BookAlreadyExistsError):
        repository.create({**sample_book_data, "title": "Another"})
    assert repository.find_one("1111")["title"] == "Book One"


def test_find_all_orders_by_title(repository, sample_book_data):
    repository.create({**sample_book_data, "isbn": "b", "title": "Zebra"})
    repository.create({**sample_book_data, "isbn": "a", "title": "Aardvark"})

    assert [b["title"] for b in repository.find_all()] == ["Aardvark", "Zebra"]


def test_find_all_filters(repository, sample_book_data):
    repository.create({**sample_book_data, "isbn": "1", "author": "Ann", "year": 1999})
    repository.create({**sample_book_data, "isbn": "2", "author": "Ann", "year": 2005})
    repository.create({**sample_book_data, "isbn": "3", "author": "Bob", "year": 2005})

    assert {b["isbn"] for b in repository.find_all({"author": "Ann"})} == {"1", "2"}
    assert {b["isbn"] for b in repository.find_all({"author": "Ann", "year": "2005"})} == {"2"}
    assert {b["isbn"] for b in repository.find_all({"unknown": "x"})} == {"1", "2", "3"}


def test_find_all_rejects_non_numeric_integer_filter(repository):
    with pytest.raises(BookValidationError) as exc_info:
        repository.find_all({"year": "last", "pages": "few"})
    assert exc_info.value.errors == [
        "instance.year is not of a type(s) integer",
        "instance.pages is not of a type(s) integer",
    ]


def test_update_replaces_mutable_fields(repository, stored_book):
    book = repository.update("1111", {"isbn": "changed", "author": "New Author", "title": "New Title"})
    assert book == {
        "isbn": "1111",
        "amazon_url": None,
        "author": "New Author",
        "language": None,
        "pages": None,
        "publisher": None,
        "title": "New Title",
        "year": None,
    }
    assert repository.find_one("1111") == book


def test_update_missing(repository):
    with pytest.raises(BookNotFoundError):
        repository.update("9999", {"author": "A", "title": "T"})


def test_remove(repository, stored_book):
    repository.remove("1111")
    with pytest.raises(BookNotFoundError):
        repository.find_one("1111")


def test_remove_missing(repository):
    with pytest.raises(BookNotFoundError):
        repository.remove("9999")


def test_health_check(repository, stored_book):
    assert repository.health_check() == {"status": "healthy", "books_count": 1}


def test_health_check_unhealthy():
    broken = BookRepository(create_engine("sqlite:////nonexistent-dir/books.db"))
    assert broken.health_check()["status"] == "unhealthy"
