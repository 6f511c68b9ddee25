from typing import Optional

from fastapi import Header

from .config import settings
from .errors import ApiError


def require_api_key(x_api_key: Optional[str] = Header(default=None)) -> str:
    """Dependency guarding the write endpoints with the shared ``X-API-Key``."""
    if x_api_key and x_api_key in settings.api_keys:
        return x_api_key
    raise ApiError(
        status_code=401,
        error="Unauthorized",
        message="A valid X-API-Key header is required.",
    )
