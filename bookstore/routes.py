"""
Book endpoints.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Request, status

from bookstore.models import BookEnvelope, BookListResponse, BookResponse, MessageResponse
from bookstore.repository import BookRepository
from bookstore.schemas import BOOK_CREATE_SCHEMA, BOOK_UPDATE_SCHEMA, BookCreate, BookUpdate, validate_payload


router = APIRouter(prefix="/books", tags=["Books"])


def _json_body(schema: dict) -> dict:
    return {
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": schema}},
        }
    }


def get_repository(request: Request) -> BookRepository:
    """Repository built by the application lifespan."""
    repository = getattr(request.app.state, "book_repository", None)
    if repository is None:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Database service not available"
        )
    return repository


@router.get("", response_model=BookListResponse)
def list_books(request: Request, repository: BookRepository = Depends(get_repository)):
    """
    Get all books.

    Any query parameter naming a book field narrows the list to exact
    matches, e.g. ``/books?language=English&year=2001``.
    """
    books = repository.find_all(dict(request.query_params))
    return {"books": books}


@router.get("/{isbn}", response_model=BookEnvelope)
def get_book(isbn: str, repository: BookRepository = Depends(get_repository)):
    """Get a single book by isbn."""
    return {"book": repository.find_one(isbn)}


@router.post(
    "",
    response_model=BookResponse,
    status_code=status.HTTP_201_CREATED,
    openapi_extra=_json_body(BOOK_CREATE_SCHEMA),
)
def create_book(payload: Any = Body(None), repository: BookRepository = Depends(get_repository)):
    """Create a book. Responds with the stored book."""
    data = validate_payload(BookCreate, payload)
    return repository.create(data)


@router.put("/{isbn}", response_model=BookEnvelope, openapi_extra=_json_body(BOOK_UPDATE_SCHEMA))
def update_book(isbn: str, payload: Any = Body(None), repository: BookRepository = Depends(get_repository)):
    """Replace every field of a book except its isbn."""
    data = validate_payload(BookUpdate, payload)
    return {"book": repository.update(isbn, data)}


@router.delete("/{isbn}", response_model=MessageResponse)
def delete_book(isbn: str, repository: BookRepository = Depends(get_repository)):
    """Delete a book."""
    repository.remove(isbn)
    return {"message": "Book deleted"}
