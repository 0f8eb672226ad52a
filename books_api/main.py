"""
FastAPI main application for the Books CRUD API.
"""

import re
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import structlog
from fastapi import APIRouter, Depends, FastAPI, Request, Response, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from books_api import __version__
from books_api.config import APIConfig, config as default_config
from books_api.exceptions import (
    BookServiceError, ClientInputError, MethodNotAllowedError, SerializationFault
)
from books_api.models import Book, HealthResponse, INT64_MAX, INT64_MIN
from books_api.store import BookStore
from utilities.logger import BookEventLogger

logger = structlog.get_logger(__name__)

# Optionally signed run of ASCII digits, nothing else
BOOK_ID_PATTERN = re.compile(r"[+-]?[0-9]+")


def parse_book_id(raw_id: str) -> int:
    """
    Parse the {book_id} path segment.

    Raises:
        ClientInputError: if the segment is not an integer in int64 range
    """
    if not BOOK_ID_PATTERN.fullmatch(raw_id):
        raise ClientInputError("Invalid book ID")
    book_id = int(raw_id)
    if book_id < INT64_MIN or book_id > INT64_MAX:
        raise ClientInputError("Invalid book ID")
    return book_id


def encode_response(content: Any, status_code: int = status.HTTP_200_OK) -> JSONResponse:
    """
    Render a JSON response outside the store lock.

    Raises:
        SerializationFault: if the content cannot be encoded
    """
    try:
        return JSONResponse(content=jsonable_encoder(content), status_code=status_code)
    except (TypeError, ValueError) as e:
        logger.error("Failed to encode response", error=str(e))
        raise SerializationFault() from e


def get_store(request: Request) -> BookStore:
    """Dependency returning the store owned by the application."""
    return request.app.state.store


def get_event_logger(request: Request) -> BookEventLogger:
    """Dependency returning a logger bound to the current request."""
    return BookEventLogger().bind_context(
        method=request.method,
        path=request.url.path
    )


async def read_book_body(request: Request) -> Book:
    """
    Decode the request body into a Book regardless of its Content-Type.

    Raises:
        ClientInputError: if the body is not a JSON object of the Book shape
    """
    body = await request.body()
    try:
        return Book.model_validate_json(body)
    except (ValidationError, UnicodeDecodeError) as e:
        raise ClientInputError("Invalid input") from e


router = APIRouter(prefix="/books", tags=["Books"])


@router.get("")
def list_books(store: BookStore = Depends(get_store)):
    """Get every book as a JSON object keyed by id."""
    books = store.list_all()
    return encode_response({str(book.id): book for book in books})


@router.get("/{book_id:path}", response_model=Book)
def get_book(book_id: str, store: BookStore = Depends(get_store)):
    """
    Get a single book by ID.

    - **book_id**: Integer book identifier
    """
    book = store.get(parse_book_id(book_id))
    return encode_response(book)


@router.post("/{book_id:path}", response_model=Book, status_code=status.HTTP_201_CREATED)
def create_book(
    book_id: str,
    book: Book = Depends(read_book_body),
    store: BookStore = Depends(get_store),
    events: BookEventLogger = Depends(get_event_logger)
):
    """
    Create a book.

    Only the id in the body is used; the path segment is not consulted.
    """
    if book.id == 0:
        raise ClientInputError("Book id is required")

    created = store.insert(book)
    events.log_book_created(created.id)
    return encode_response(created, status.HTTP_201_CREATED)


@router.put("/{book_id:path}", response_model=Book)
def update_book(
    book_id: str,
    book: Book = Depends(read_book_body),
    store: BookStore = Depends(get_store),
    events: BookEventLogger = Depends(get_event_logger)
):
    """
    Replace a book wholesale.

    - **book_id**: Integer book identifier, must equal the id in the body
    """
    target_id = parse_book_id(book_id)
    if book.id != target_id:
        raise ClientInputError("Book id in the URL must match the id in the body")

    updated = store.replace(target_id, book)
    events.log_book_updated(target_id)
    return encode_response(updated)


@router.delete("/{book_id:path}", status_code=status.HTTP_204_NO_CONTENT)
def delete_book(
    book_id: str,
    store: BookStore = Depends(get_store),
    events: BookEventLogger = Depends(get_event_logger)
):
    """Delete a book by ID."""
    target_id = parse_book_id(book_id)
    store.remove(target_id)
    events.log_book_deleted(target_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


def _error_response(request: Request, exc: BookServiceError, headers: Optional[Dict[str, str]] = None):
    BookEventLogger().bind_context(
        method=request.method,
        path=request.url.path
    ).log_rejected(exc.status_code, exc.message, getattr(exc, "book_id", None))
    return PlainTextResponse(exc.message, status_code=exc.status_code, headers=headers)


def register_exception_handlers(app: FastAPI) -> None:
    """Render every error as a plain-text response."""

    @app.exception_handler(BookServiceError)
    async def book_service_exception_handler(request: Request, exc: BookServiceError):
        """Handle errors raised by handlers and the store."""
        return _error_response(request, exc)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Handle routing errors raised by Starlette."""
        if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
            return _error_response(request, MethodNotAllowedError(), headers=exc.headers)
        return PlainTextResponse(str(exc.detail), status_code=exc.status_code, headers=exc.headers)

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle general exceptions."""
        logger.error("Unhandled exception", error=str(exc), path=request.url.path)
        return PlainTextResponse(
            "Internal server error",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
        )


def create_app(store: Optional[BookStore] = None, settings: Optional[APIConfig] = None) -> FastAPI:
    """
    Build the application around an explicitly owned store.

    Args:
        store: Store to serve; a fresh empty store when omitted
        settings: Configuration; the environment-derived config when omitted

    Returns:
        Configured FastAPI application
    """
    settings = settings or default_config

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager."""
        logger.info("Server is running", url=settings.get_base_url())
        yield
        logger.info("Shutting down Books API", book_count=app.state.store.count())

    app = FastAPI(
        title=settings.api_title,
        description=settings.api_description,
        version=settings.api_version,
        redirect_slashes=False,
        debug=settings.debug,
        lifespan=lifespan
    )
    app.state.store = store if store is not None else BookStore()
    app.state.config = settings

    register_exception_handlers(app)
    app.include_router(router)

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    def health_check(store: BookStore = Depends(get_store)):
        """Health check endpoint."""
        return HealthResponse(
            status="healthy",
            timestamp=datetime.now(timezone.utc),
            version=__version__,
            book_count=store.count()
        )

    return app


app = create_app()
