"""
Thread-safe in-memory book store.

All reads and writes go through a single exclusive lock held for the duration
of one operation. Books are copied on the way in and on the way out, so the
mapping is never reachable outside the lock.
"""

import threading
from typing import Dict, List

import structlog

from books_api.exceptions import ConflictError, NotFoundError
from books_api.models import Book

logger = structlog.get_logger(__name__)


class BookStore:
    """In-memory id -> Book mapping guarded by one lock."""

    def __init__(self):
        self._books: Dict[int, Book] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return self.count()

    def count(self) -> int:
        with self._lock:
            return len(self._books)

    def list_all(self) -> List[Book]:
        """Return a copy of every stored book in insertion order."""
        with self._lock:
            return [book.model_copy() for book in self._books.values()]

    def get(self, book_id: int) -> Book:
        """
        Get a single book.

        Raises:
            NotFoundError: if no book has this id
        """
        with self._lock:
            book = self._books.get(book_id)
            if book is None:
                raise NotFoundError(book_id)
            return book.model_copy()

    def insert(self, book: Book) -> Book:
        """
        Insert a book whose id is not yet present.

        Callers reject a zero id before calling.

        Raises:
            ConflictError: if a book with the same id exists
        """
        stored = book.model_copy()
        with self._lock:
            if stored.id in self._books:
                raise ConflictError(stored.id)
            self._books[stored.id] = stored
        logger.debug("Book inserted", book_id=stored.id)
        return stored.model_copy()

    def replace(self, book_id: int, book: Book) -> Book:
        """
        Replace an existing book wholesale.

        Raises:
            NotFoundError: if no book has this id
        """
        stored = book.model_copy()
        with self._lock:
            if book_id not in self._books:
                raise NotFoundError(book_id)
            self._books[book_id] = stored
        logger.debug("Book replaced", book_id=book_id)
        return stored.model_copy()

    def remove(self, book_id: int) -> None:
        """
        Delete an existing book.

        Raises:
            NotFoundError: if no book has this id
        """
        with self._lock:
            if book_id not in self._books:
                raise NotFoundError(book_id)
            del self._books[book_id]
        logger.debug("Book removed", book_id=book_id)
