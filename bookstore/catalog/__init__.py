"""
Catalog package for the bookstore API.

Holds the book schemas, the operations over ``books.json`` and the
routes mounted under ``/api/books``: listing, filtering by publication
date, featured and top-rated selections, lookup by id and creation of
new books by API-key holders.
"""

from .router import router as catalog_router  # noqa: F401
