"""
FastAPI REST API for the Bookstore.

This package provides:
- CRUD endpoints for book records
- Request validation against strict schemas
- Relational storage through SQLAlchemy
"""

__version__ = "1.0.0"
