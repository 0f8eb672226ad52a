"""
API models and schemas for the Books API.
"""

from datetime import datetime

from pydantic import BaseModel, Field

# Integers on the wire are bounded to a signed 64-bit range
INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


class Book(BaseModel):
    """
    Book record as stored and as exchanged on the wire.

    Fields are type-strict but every field is optional: a missing field takes
    its zero value and unknown fields are ignored.
    """
    id: int = Field(0, ge=INT64_MIN, le=INT64_MAX, description="Client-assigned unique book identifier")
    title: str = Field("", description="Book title")
    description: str = Field("", description="Book description")
    author: str = Field("", description="Book author")
    publication_year: int = Field(0, ge=INT64_MIN, le=INT64_MAX, description="Year of publication")

    model_config = {
        "strict": True,
        "extra": "ignore",
        "json_schema_extra": {
            "example": {
                "id": 1,
                "title": "The Go Programming Language",
                "description": "A practical guide to Go",
                "author": "Alan Donovan",
                "publication_year": 2015
            }
        }
    }


class HealthResponse(BaseModel):
    """Health check response model."""
    status: str = Field(..., description="Service status")
    timestamp: datetime = Field(..., description="Current timestamp")
    version: str = Field(..., description="API version")
    book_count: int = Field(..., ge=0, description="Number of books in the store")
