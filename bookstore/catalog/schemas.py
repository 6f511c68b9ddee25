"""
Pydantic schema definitions for the book catalogue.

These models describe the wire format for the OpenAPI document; they do
not police record contents.  Stored books and request bodies pass through
with their values untouched (a ``"featured": "yes"`` stays a string), so
every field is typed ``Any`` and unknown keys are kept (``extra="allow"``).
The camelCase keys used in ``books.json`` (``reviewCount``, ``inStock``,
``datePublished``) map to snake_case attributes through field aliases.
"""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Book(BaseModel):
    """A single catalogue entry as stored in ``books.json``."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: Optional[Any] = None
    title: Optional[Any] = None
    author: Optional[Any] = None
    price: Optional[Any] = None
    rating: Optional[Any] = Field(default=None, description="defaults to 0 on create")
    review_count: Optional[Any] = Field(default=None, alias="reviewCount")
    in_stock: Optional[Any] = Field(default=None, alias="inStock")
    featured: Optional[Any] = None
    # ISO date (YYYY-MM-DD)
    date_published: Optional[Any] = Field(default=None, alias="datePublished")


class RankedBook(Book):
    """A book annotated with its ``rating * reviewCount`` score."""

    score: Optional[Any] = None


class CreateBookRequest(Book):
    """Body of ``POST /api/books``.

    Only the presence of ``title``, ``author`` and ``price`` is checked
    (by the store); values are stored as sent.
    """


class DateRange(BaseModel):
    start: str
    end: str


class BookListResponse(BaseModel):
    success: bool
    count: int
    data: List[Book]


class RankedBookListResponse(BaseModel):
    success: bool
    count: int
    data: List[RankedBook]


class DateRangeResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool
    count: int
    date_range: DateRange = Field(alias="dateRange")
    data: List[Book]


class BookResponse(BaseModel):
    success: bool
    message: Optional[str] = None
    data: Book
