"""
Error types raised by the data access and validation layers.

Each error carries the HTTP status it maps to, so the application's
exception handler can serialize it without knowing the concrete type.
"""

from typing import List, Optional


class BookstoreError(Exception):
    """Base class for errors that map to an HTTP status."""

    status_code: int = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class BookValidationError(BookstoreError):
    """Request payload or query did not match its schema."""

    status_code = 400

    def __init__(self, errors: List[str]):
        super().__init__("Validation failed")
        self.errors = list(errors)


class BookNotFoundError(BookstoreError):
    """No row exists for the given isbn."""

    status_code = 404

    def __init__(self, isbn: str):
        super().__init__(f"There is no book with an isbn '{isbn}'")
        self.isbn = isbn


class BookAlreadyExistsError(BookstoreError):
    """A row with the given isbn is already stored."""

    status_code = 409

    def __init__(self, isbn: str):
        super().__init__(f"A book with an isbn '{isbn}' already exists")
        self.isbn = isbn
