"""
Route definitions for reviews.

Endpoints under /api/reviews:
- GET  /book/{book_id} : reviews of one book (empty list when there are none)
- POST ""              : add a review (X-API-Key required)
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends

from ..errors import ApiError, ErrorResponse, MissingFieldsError, failure_label
from ..security import require_api_key
from . import store
from .schemas import CreateReviewRequest, ReviewListResponse, ReviewResponse


router = APIRouter(
    prefix="/api/reviews",
    tags=["reviews"],
    responses={500: {"model": ErrorResponse}},
)


@router.get(
    "/book/{book_id}",
    response_model=ReviewListResponse,
    response_model_exclude_unset=True,
)
def reviews_for_book(book_id: str) -> ReviewListResponse:
    with failure_label("Failed to retrieve reviews for the book"):
        reviews = store.reviews_for_book(book_id)
    if not reviews:
        # A book without reviews is not an error
        return ReviewListResponse(
            success=True,
            message=f"No reviews found for book with ID: {book_id}",
            count=0,
            data=[],
        )
    return ReviewListResponse(success=True, count=len(reviews), data=reviews)


@router.post(
    "",
    status_code=201,
    response_model=ReviewResponse,
    response_model_exclude_unset=True,
    dependencies=[Depends(require_api_key)],
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
    },
)
def add_review(req: Optional[CreateReviewRequest] = None) -> ReviewResponse:
    with failure_label("Failed to add review"):
        try:
            review = store.add_review(req or CreateReviewRequest())
        except MissingFieldsError as e:
            raise ApiError(400, "Missing required fields", str(e))
    return ReviewResponse(success=True, message="Review added successfully!", data=review)
