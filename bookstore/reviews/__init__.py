"""Reviews package: schemas, ``reviews.json`` operations and ``/api/reviews`` routes."""

from .router import router as reviews_router  # noqa: F401
