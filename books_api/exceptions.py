"""
Exception hierarchy for the Books API.

Each error carries the HTTP status it maps to and a short message that is
returned to the client as a plain-text body.
"""

from fastapi import status


class BookServiceError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ClientInputError(BookServiceError):
    """Bad id syntax, malformed body, missing id or id mismatch."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid input"


class NotFoundError(BookServiceError):
    """The addressed book id is not in the store."""

    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Book not found"

    def __init__(self, book_id: int = None, message: str = None):
        self.book_id = book_id
        super().__init__(message)


class ConflictError(BookServiceError):
    """A book with the same id already exists."""

    status_code = status.HTTP_409_CONFLICT
    default_message = "Book already exists"

    def __init__(self, book_id: int = None, message: str = None):
        self.book_id = book_id
        super().__init__(message)


class MethodNotAllowedError(BookServiceError):
    """The HTTP method is not supported on the addressed route."""

    status_code = status.HTTP_405_METHOD_NOT_ALLOWED
    default_message = "Unsupported method"


class SerializationFault(BookServiceError):
    """Encoding the response failed after the store operation completed."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Failed to encode book data"
