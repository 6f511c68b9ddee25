"""
Runtime settings for the bookstore API.

Values come from environment variables (or a ``.env`` file in the working
directory) and are validated once at import time by pydantic-settings.
Tests and embedding applications can override attributes on the
module-level ``settings`` object directly; the storage and security
helpers look the values up on each request.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Any, List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

# Bundled seed data shipped with the package
DEFAULT_DATA_DIR = Path(__file__).resolve().parent / "data"

BOOKS_FILE = "books.json"
REVIEWS_FILE = "reviews.json"


class Settings(BaseSettings):
    """Configuration for the API process."""

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )

    data_dir: Path = Field(
        default=DEFAULT_DATA_DIR,
        alias="BOOKSTORE_DATA_DIR",
        description="Directory holding books.json and reviews.json",
    )
    # In a real deployment provide these through the environment
    api_keys: Annotated[List[str], NoDecode] = Field(
        default=["amana-secret-key-12345"],
        alias="BOOKSTORE_API_KEYS",
        description="Comma-separated keys accepted in X-API-Key",
    )
    access_log: str = Field(
        default="logging/log.txt",
        alias="BOOKSTORE_ACCESS_LOG",
        description="Access-log file; empty disables it",
    )
    log_level: str = Field(default="INFO", alias="BOOKSTORE_LOG_LEVEL")
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=3000, alias="PORT")

    @field_validator("api_keys", mode="before")
    @classmethod
    def _split_keys(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [key.strip() for key in value.split(",") if key.strip()]
        return value

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.upper()


settings = Settings()
