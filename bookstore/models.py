"""
API response models for the FastAPI application.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class BookResponse(BaseModel):
    """Book response model for API."""
    isbn: str = Field(..., description="International Standard Book Number")
    amazon_url: Optional[str] = Field(None, description="Link to the book on Amazon")
    author: str = Field(..., description="Book author")
    language: Optional[str] = Field(None, description="Language the book is written in")
    pages: Optional[int] = Field(None, description="Number of pages")
    publisher: Optional[str] = Field(None, description="Publisher name")
    title: str = Field(..., description="Book title")
    year: Optional[int] = Field(None, description="Publication year")


class BookListResponse(BaseModel):
    """Response model for book list."""
    books: List[BookResponse] = Field(..., description="List of books")


class BookEnvelope(BaseModel):
    """Response model wrapping a single book."""
    book: BookResponse = Field(..., description="The requested book")


class MessageResponse(BaseModel):
    """Plain confirmation message."""
    message: str = Field(..., description="Outcome of the operation")


class ErrorDetail(BaseModel):
    """Error body nested under the ``error`` key."""
    status: int = Field(..., description="HTTP status code")
    message: Optional[str] = Field(None, description="Error message")
    error: Optional[List[str]] = Field(None, description="Validation error messages")


class ErrorResponse(BaseModel):
    """Error response model."""
    error: ErrorDetail = Field(..., description="Error details")
    message: Optional[str] = Field(None, description="Error message")


class HealthResponse(BaseModel):
    """Health check response model."""
    status: str = Field(..., description="Service status")
    timestamp: datetime = Field(..., description="Current timestamp")
    version: str = Field(..., description="API version")
    database_status: str = Field(..., description="Database connection status")
    books_count: Optional[int] = Field(None, description="Number of stored books")
