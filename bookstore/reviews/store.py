"""Review operations over ``reviews.json``; records stay plain dicts."""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List

from ..config import REVIEWS_FILE
from ..errors import MissingFieldsError
from ..storage import locked, read_collection, write_collection
from .schemas import CreateReviewRequest


logger = logging.getLogger(__name__)


def list_reviews() -> List[Dict[str, Any]]:
    return [entry for entry in read_collection(REVIEWS_FILE, "reviews") if isinstance(entry, dict)]


def reviews_for_book(book_id: str) -> List[Dict[str, Any]]:
    return [r for r in list_reviews() if r.get("bookId") == book_id]


def new_review_id() -> str:
    return f"review-{uuid.uuid4()}"


def utc_timestamp() -> str:
    """Current UTC time as ``YYYY-MM-DDTHH:MM:SS.mmmZ``."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def add_review(req: CreateReviewRequest) -> Dict[str, Any]:
    """Persist a new review.  The referenced book is not checked for existence.

    Raises
    ------
    MissingFieldsError
        ``bookId``, ``author``, ``rating`` or ``comment`` is missing or empty.
    """
    payload: Dict[str, Any] = req.model_dump(by_alias=True, exclude_unset=True)
    if not all(payload.get(key) for key in ("bookId", "author", "rating", "comment")):
        raise MissingFieldsError("Please provide bookId, author, rating, and comment.")
    payload.pop("id", None)
    review = {
        "id": new_review_id(),
        **payload,
        "timestamp": utc_timestamp(),
        "verified": payload["verified"] if "verified" in payload else False,
    }

    with locked(REVIEWS_FILE):
        records = read_collection(REVIEWS_FILE, "reviews")
        records.append(review)
        write_collection(REVIEWS_FILE, "reviews", records)

    logger.info("Added review %s for book %r", review["id"], review["bookId"])
    return review
