"""
Logging helpers: process-wide configuration and the HTTP access log.

Each request is written to the ``bookstore.access`` logger as one line
in Apache "combined" format.  That logger has its own file handler
(``settings.access_log``) and does not propagate to the console.
"""

from __future__ import annotations

import logging
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from fastapi import Request

from .config import settings


logger = logging.getLogger(__name__)
access_logger = logging.getLogger("bookstore.access")

_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

CONSOLE_HANDLER = "bookstore.console"
ACCESS_HANDLER = "bookstore.access.file"


def _drop_handler(logger: logging.Logger, name: str) -> None:
    for handler in list(logger.handlers):
        if handler.get_name() == name:
            logger.removeHandler(handler)
            handler.close()


def configure_logging(level: Optional[str] = None) -> None:
    """Attach console and access-log handlers to the ``bookstore`` loggers.

    Calling it more than once replaces the handlers installed by the
    previous call instead of stacking new ones.
    """
    root = logging.getLogger("bookstore")
    root.setLevel(level or settings.log_level)
    _drop_handler(root, CONSOLE_HANDLER)
    console = logging.StreamHandler()
    console.set_name(CONSOLE_HANDLER)
    console.setFormatter(logging.Formatter(_FORMAT))
    root.addHandler(console)

    access_logger.propagate = False
    access_logger.setLevel(logging.INFO)
    _drop_handler(access_logger, ACCESS_HANDLER)
    if settings.access_log:
        log_path = Path(settings.access_log)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, mode="a", encoding="utf-8")
        file_handler.set_name(ACCESS_HANDLER)
        file_handler.setFormatter(logging.Formatter("%(message)s"))
        access_logger.addHandler(file_handler)


def format_access_line(request: Request, status_code: int, length: str) -> str:
    """Render one request in combined log format."""
    client = request.client.host if request.client else "-"
    stamp = datetime.now(timezone.utc).strftime("%d/%b/%Y:%H:%M:%S +0000")
    target = request.url.path
    if request.url.query:
        target = f"{target}?{request.url.query}"
    version = request.scope.get("http_version", "1.1")
    referer = request.headers.get("referer", "-")
    agent = request.headers.get("user-agent", "-")
    return (
        f'{client} - - [{stamp}] "{request.method} {target} HTTP/{version}" '
        f'{status_code} {length} "{referer}" "{agent}"'
    )


async def access_log_middleware(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    elapsed = time.perf_counter() - start
    access_logger.info(
        format_access_line(
            request,
            response.status_code,
            response.headers.get("content-length", "-"),
        )
    )
    logger.debug(
        "%s %s -> %s in %.4f seconds",
        request.method,
        request.url.path,
        response.status_code,
        elapsed,
    )
    return response
