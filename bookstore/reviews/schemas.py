"""
Pydantic schema definitions for book reviews.

As for books these only document the wire format: values pass through
unchanged, ``bookId`` keeps its camelCase spelling via an alias and
unknown keys are preserved.
"""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Review(BaseModel):
    """One review as stored in ``reviews.json``."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: Optional[Any] = None
    book_id: Optional[Any] = Field(default=None, alias="bookId")
    author: Optional[Any] = None
    rating: Optional[Any] = None
    comment: Optional[Any] = None
    # ISO-8601 UTC, e.g. 2024-03-01T12:00:00.000Z
    timestamp: Optional[Any] = None
    verified: Optional[Any] = None


class CreateReviewRequest(Review):
    """Body of ``POST /api/reviews``; required fields are checked by the store."""


class ReviewListResponse(BaseModel):
    success: bool
    message: Optional[str] = None
    count: int
    data: List[Review]


class ReviewResponse(BaseModel):
    success: bool
    message: Optional[str] = None
    data: Review
