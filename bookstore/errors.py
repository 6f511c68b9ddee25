"""
Error envelope for the API.

Every failure leaves the service as
``{"success": false, "error": <label>, "message": <detail>}``.  Route
handlers raise :class:`ApiError`; the handlers registered by
:func:`register_exception_handlers` also reshape FastAPI's own
validation and routing errors into the same envelope.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException


logger = logging.getLogger(__name__)


class ApiError(Exception):
    """An error that maps directly onto an HTTP status and envelope."""

    def __init__(self, status_code: int, error: str, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.error = error
        self.message = message


class MissingFieldsError(ValueError):
    """A create request lacks one of its required fields."""


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
    message: str


def error_body(error: str, message: str) -> Dict[str, Any]:
    return {"success": False, "error": error, "message": message}


@contextmanager
def failure_label(label: str) -> Iterator[None]:
    """Turn unexpected exceptions raised in the block into a 500 ``ApiError``.

    The underlying exception text is passed through as the message.
    """
    try:
        yield
    except ApiError:
        raise
    except Exception as exc:
        raise ApiError(500, label, str(exc)) from exc


def _describe_validation_error(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        location = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        text = err.get("msg", "invalid value")
        parts.append(f"{location}: {text}" if location else text)
    return "; ".join(parts) or "Request body could not be parsed."


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=exc.status_code, content=error_body(exc.error, exc.message)
    )


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content=error_body("Invalid request body", _describe_validation_error(exc)),
    )


async def http_error_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    label = "Not found" if exc.status_code == 404 else "Request failed"
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(label, str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
