"""
Pytest configuration and shared fixtures.
"""

import pytest
from fastapi.testclient import TestClient

from books_api.main import create_app
from books_api.models import Book
from books_api.store import BookStore


@pytest.fixture
def store():
    """Create an empty book store."""
    return BookStore()


@pytest.fixture
def app(store):
    """Create an application serving the test store."""
    return create_app(store=store)


@pytest.fixture
def client(app):
    """Create test client."""
    return TestClient(app)


@pytest.fixture
def sample_book_payload():
    """Sample book body as sent by a client."""
    return {
        "id": 7,
        "title": "The Go Programming Language",
        "description": "A practical guide to Go",
        "author": "Alan Donovan",
        "publication_year": 2015
    }


@pytest.fixture
def sample_book(sample_book_payload):
    """Sample book model."""
    return Book(**sample_book_payload)
