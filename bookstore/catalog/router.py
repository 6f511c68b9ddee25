"""
Route definitions for the book catalogue.

Endpoints under /api/books:
- GET  ""             : every book
- GET  /date-range    : books published between ?start and ?end (inclusive)
- GET  /featured      : books flagged as featured
- GET  /top-rated     : ten best books by rating * reviewCount
- GET  /{book_id}     : one book
- POST ""             : add a book (X-API-Key required)

The literal paths are declared before ``/{book_id}`` so they are not
captured as ids.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query

from ..errors import ApiError, ErrorResponse, MissingFieldsError, failure_label
from ..security import require_api_key
from . import store
from .schemas import (
    BookListResponse,
    BookResponse,
    CreateBookRequest,
    DateRange,
    DateRangeResponse,
    RankedBookListResponse,
)


router = APIRouter(
    prefix="/api/books",
    tags=["books"],
    responses={500: {"model": ErrorResponse}},
)


@router.get("", response_model=BookListResponse, response_model_exclude_unset=True)
def list_books() -> BookListResponse:
    with failure_label("Failed to retrieve books"):
        books = store.list_books()
    return BookListResponse(success=True, count=len(books), data=books)


@router.get(
    "/date-range",
    response_model=DateRangeResponse,
    response_model_exclude_unset=True,
    responses={400: {"model": ErrorResponse}},
)
def books_by_date_range(
    start: Optional[str] = Query(default=None, description="First day, YYYY-MM-DD"),
    end: Optional[str] = Query(default=None, description="Last day, YYYY-MM-DD"),
) -> DateRangeResponse:
    if not start or not end:
        raise ApiError(
            400,
            "Missing required parameters",
            "Please provide both start and end dates in format: YYYY-MM-DD",
        )

    start_date = store.parse_iso_date(start)
    end_date = store.parse_iso_date(end)
    if start_date is None or end_date is None:
        raise ApiError(400, "Invalid date format", "Please use YYYY-MM-DD format for dates")
    if start_date > end_date:
        raise ApiError(
            400,
            "Invalid date range",
            "Start date must be before or equal to end date",
        )

    with failure_label("Failed to retrieve books by date range"):
        books = store.books_in_date_range(start_date, end_date)
    return DateRangeResponse(
        success=True,
        count=len(books),
        date_range=DateRange(start=start, end=end),
        data=books,
    )


@router.get("/featured", response_model=BookListResponse, response_model_exclude_unset=True)
def featured_books() -> BookListResponse:
    with failure_label("Failed to retrieve featured books"):
        books = store.featured_books()
    return BookListResponse(success=True, count=len(books), data=books)


@router.get(
    "/top-rated",
    response_model=RankedBookListResponse,
    response_model_exclude_unset=True,
)
def top_rated_books() -> RankedBookListResponse:
    with failure_label("Failed to retrieve top rated books"):
        books = store.top_rated_books()
    return RankedBookListResponse(success=True, count=len(books), data=books)


@router.get(
    "/{book_id}",
    response_model=BookResponse,
    response_model_exclude_unset=True,
    responses={404: {"model": ErrorResponse}},
)
def get_book(book_id: str) -> BookResponse:
    with failure_label("Failed to retrieve book"):
        book = store.get_book(book_id)
    if book is None:
        raise ApiError(404, "Book not found", f"No book found with ID: {book_id}")
    return BookResponse(success=True, data=book)


@router.post(
    "",
    status_code=201,
    response_model=BookResponse,
    response_model_exclude_unset=True,
    dependencies=[Depends(require_api_key)],
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
    },
)
def add_book(req: Optional[CreateBookRequest] = None) -> BookResponse:
    with failure_label("Failed to add new book"):
        try:
            book = store.add_book(req or CreateBookRequest())
        except MissingFieldsError as e:
            raise ApiError(400, "Missing required fields", str(e))
    return BookResponse(success=True, message="Book added successfully!", data=book)
