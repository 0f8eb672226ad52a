"""
In-memory Books CRUD API built on FastAPI.

This package provides:
- A thread-safe in-memory book store
- REST handlers for listing, reading, creating, updating and deleting books
- Plain-text error responses mapped from a small exception hierarchy
"""

__version__ = "1.0.0"
