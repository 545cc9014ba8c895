"""
FastAPI main application for the Bookstore API.
"""

from contextlib import asynccontextmanager
from datetime import datetime

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from bookstore.config import config as api_config
from bookstore.database import create_db_engine, create_tables
from bookstore.errors import BookstoreError, BookValidationError
from bookstore.models import ErrorDetail, ErrorResponse, HealthResponse
from bookstore.repository import BookRepository
from bookstore.routes import router as books_router
from bookstore.schemas import format_errors
from utilities.config import config
from utilities.logger import setup_logging

# Setup logging
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    setup_logging(
        log_level=config.log_level,
        log_format=config.log_format,
        log_file=config.get_log_file_path(),
        debug=config.debug
    )
    logger.info("Starting Bookstore API")

    try:
        engine = create_db_engine(config.database_url, echo=config.database_echo)
        create_tables(engine)
    except Exception as e:
        logger.error("Failed to connect to database", error=str(e))
        raise

    app.state.book_repository = BookRepository(engine)
    logger.info("Database connection established")

    yield

    logger.info("Shutting down Bookstore API")
    app.state.book_repository = None
    engine.dispose()


# Create FastAPI application
app = FastAPI(
    title=api_config.api_title,
    description=api_config.api_description,
    version=api_config.api_version,
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=api_config.cors_origins,
    allow_credentials=api_config.cors_allow_credentials,
    allow_methods=api_config.cors_allow_methods,
    allow_headers=api_config.cors_allow_headers,
)

app.include_router(books_router)


def error_response(status_code: int, message: str = None, errors=None, headers=None) -> JSONResponse:
    """Serialize an error as ``{"error": {...}, "message": ...}``."""
    body = ErrorResponse(
        error=ErrorDetail(status=status_code, message=message, error=errors),
        message=message
    )
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(exclude_none=True),
        headers=headers
    )


# Exception handlers
@app.exception_handler(BookValidationError)
async def validation_exception_handler(request: Request, exc: BookValidationError):
    """Handle schema validation failures."""
    logger.info("Request rejected", path=request.url.path, errors=exc.errors)
    return error_response(exc.status_code, errors=exc.errors)


@app.exception_handler(BookstoreError)
async def bookstore_exception_handler(request: Request, exc: BookstoreError):
    """Handle not-found and constraint errors from the data layer."""
    return error_response(exc.status_code, message=exc.message)


@app.exception_handler(RequestValidationError)
async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle request bodies FastAPI could not parse."""
    errors = format_errors(exc.errors())
    logger.info("Request rejected", path=request.url.path, errors=errors)
    return error_response(status.HTTP_400_BAD_REQUEST, errors=errors)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Handle HTTP exceptions."""
    return error_response(exc.status_code, message=str(exc.detail), headers=exc.headers)


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle general exceptions."""
    logger.error("Unhandled exception", error=str(exc), path=request.url.path)
    message = str(exc) if api_config.debug else "Internal server error"
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, message=message)


# Health check endpoint
@app.get("/health", response_model=HealthResponse, tags=["Health"])
def health_check(request: Request):
    """Health check endpoint."""
    db_status = "unavailable"
    books_count = None
    repository = getattr(request.app.state, "book_repository", None)
    if repository is not None:
        health_info = repository.health_check()
        db_status = health_info.get("status", "unknown")
        books_count = health_info.get("books_count")

    return HealthResponse(
        status="healthy" if db_status == "healthy" else "degraded",
        timestamp=datetime.utcnow(),
        version=api_config.api_version,
        database_status=db_status,
        books_count=books_count
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "bookstore.main:app",
        host=api_config.host,
        port=api_config.port,
        reload=api_config.debug,
        log_level=api_config.log_level.lower()
    )
