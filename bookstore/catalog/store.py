"""
Book catalogue operations over ``books.json``.

Records are handled as the plain dicts found in the file: filters look at
raw values and nothing is coerced, so one odd record never prevents the
rest of the collection from being served.  Nothing is cached between
calls: each function re-reads the file, keeping the file on disk the
single source of truth.  ``add_book`` performs its read-modify-write cycle
while holding the file lock from :mod:`bookstore.storage`.
"""

from __future__ import annotations

import logging
import math
import re
from datetime import date, datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from ..config import BOOKS_FILE
from ..errors import MissingFieldsError
from ..storage import locked, read_collection, write_collection
from .schemas import CreateBookRequest


logger = logging.getLogger(__name__)

TOP_RATED_LIMIT = 10

_NUMERIC_ID = re.compile(r"[0-9]+")

Record = Dict[str, Any]


def parse_iso_date(value: Any) -> Optional[date]:
    """Parse an ISO date or datetime string into a calendar date.

    ``YYYY-MM-DD`` is the expected form; full ISO datetimes (including a
    trailing ``Z``) are accepted and reduced to their UTC date.  Returns
    ``None`` for anything that does not parse.
    """
    if not isinstance(value, str):
        return None
    text = value.strip()
    if not text:
        return None
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc)
    return parsed.date()


def as_number(value: Any) -> float:
    """Numeric value of a stored field for scoring; ``0`` when it has none.

    Numbers and numeric strings count, booleans and non-finite values do not.
    """
    if isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        return value if math.isfinite(value) else 0
    if isinstance(value, str):
        try:
            number = float(value)
        except ValueError:
            return 0
        return number if math.isfinite(number) else 0
    return 0


def list_books() -> List[Record]:
    return [entry for entry in read_collection(BOOKS_FILE, "books") if isinstance(entry, dict)]


def filter_by_date_range(books: Iterable[Record], start: date, end: date) -> List[Record]:
    """Keep the books whose ``datePublished`` lies in ``[start, end]``.

    Books without a parsable publication date are left out.
    """
    selected: List[Record] = []
    for book in books:
        published = parse_iso_date(book.get("datePublished"))
        if published is not None and start <= published <= end:
            selected.append(book)
    return selected


def rank_books(books: Iterable[Record], limit: int = TOP_RATED_LIMIT) -> List[Record]:
    """Rank books by ``rating * reviewCount``, highest first.

    Each returned book is a copy carrying its ``score``.  ``sorted`` is
    stable, so books with equal scores keep their input order.
    """
    ranked = [
        dict(book, score=as_number(book.get("rating")) * as_number(book.get("reviewCount")))
        for book in books
    ]
    ranked = sorted(ranked, key=lambda b: b["score"], reverse=True)
    return ranked[:limit]


def books_in_date_range(start: date, end: date) -> List[Record]:
    return filter_by_date_range(list_books(), start, end)


def featured_books() -> List[Record]:
    return [b for b in list_books() if b.get("featured") is True]


def top_rated_books(limit: int = TOP_RATED_LIMIT) -> List[Record]:
    return rank_books(list_books(), limit)


def get_book(book_id: str) -> Optional[Record]:
    return next((b for b in list_books() if b.get("id") == book_id), None)


def next_book_id(existing_ids: Iterable[Any]) -> str:
    """Return one past the largest numeric id, ``"1"`` if there is none.

    Both digit strings and non-negative JSON integers count as numeric.
    """
    numeric = []
    for i in existing_ids:
        if isinstance(i, bool):
            continue
        if isinstance(i, int) and i >= 0:
            numeric.append(i)
        elif isinstance(i, str) and _NUMERIC_ID.fullmatch(i):
            numeric.append(int(i))
    return str(max(numeric, default=0) + 1)


def _today() -> str:
    return datetime.now(timezone.utc).date().isoformat()


def add_book(req: CreateBookRequest) -> Record:
    """Complete and persist a new book; body values are stored as sent.

    Raises
    ------
    MissingFieldsError
        ``title``, ``author`` or ``price`` is missing or empty.
    """
    payload: Record = req.model_dump(by_alias=True, exclude_unset=True)
    if not payload.get("title") or not payload.get("author") or not payload.get("price"):
        raise MissingFieldsError("Please provide title, author, and price for the new book.")
    payload.pop("id", None)

    with locked(BOOKS_FILE):
        records = read_collection(BOOKS_FILE, "books")
        book = {
            "id": next_book_id(r.get("id") for r in records if isinstance(r, dict)),
            **payload,
            "rating": payload.get("rating") or 0,
            "reviewCount": payload.get("reviewCount") or 0,
            "inStock": payload["inStock"] if "inStock" in payload else True,
            "featured": payload["featured"] if "featured" in payload else False,
            "datePublished": payload.get("datePublished") or _today(),
        }
        records.append(book)
        write_collection(BOOKS_FILE, "books", records)

    logger.info("Added book %s (%r by %r)", book["id"], book["title"], book["author"])
    return book
