# bookstore/main.py
import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from . import __version__
from .catalog import catalog_router
from .config import settings
from .errors import register_exception_handlers
from .log import access_log_middleware, configure_logging
from .reviews import reviews_router


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    logger.info("Serving data from %s", settings.data_dir)
    yield


app = FastAPI(
    title="Amana Bookstore API",
    description=(
        "Book catalogue and reviews served from flat JSON files. "
        "Write endpoints require an X-API-Key header."
    ),
    version=__version__,
    lifespan=lifespan,
)

app.middleware("http")(access_log_middleware)
register_exception_handlers(app)
app.include_router(catalog_router)
app.include_router(reviews_router)


@app.get("/")
def welcome():
    return {
        "message": "Welcome to Amana Bookstore API",
        "status": "Server is running successfully",
        "endpoints": {
            "books": "/api/books",
            "featuredBooks": "/api/books/featured",
            "topRatedBooks": "/api/books/top-rated",
            "booksByDateRange": "/api/books/date-range?start=YYYY-MM-DD&end=YYYY-MM-DD",
            "singleBook": "/api/books/:id",
            "reviewsForBook": "/api/reviews/book/:bookId",
            "addBook": "POST /api/books",
            "addReview": "POST /api/reviews",
        },
    }


def run() -> None:
    """Console entry point: serve the API with uvicorn."""
    configure_logging()
    logger.info("Amana Bookstore API starting on port %s", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
