"""Application settings loaded from .env via Pydantic."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


logger = logging.getLogger(__name__)

DEFAULT_ENDPOINT = "https://api.artic.edu/api/v1/artworks"
DEFAULT_PAGE_SIZE = 12


class BrowserSettings(BaseSettings):
    endpoint: str = Field(default=DEFAULT_ENDPOINT)
    page_size: int = Field(default=DEFAULT_PAGE_SIZE, gt=0)
    request_timeout_s: float = Field(default=30.0, gt=0)
    view_config: Optional[Path] = Field(default=None)

    model_config = SettingsConfigDict(
        env_prefix="RECORD_BROWSER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("endpoint")
    @classmethod
    def _validate_endpoint(cls, value: str) -> str:
        value = value.strip()
        if not value.startswith(("http://", "https://")):
            raise ValueError(f"Endpoint must be an http(s) URL: {value!r}")
        return value

    @field_validator("view_config", mode="before")
    @classmethod
    def _expand_view_config(cls, value: object) -> Optional[Path]:
        if value in (None, ""):
            return None
        return Path(str(value)).expanduser().resolve()


_settings: Optional[BrowserSettings] = None


def _project_root() -> Path:
    return Path(__file__).resolve().parents[2]


def get_settings() -> BrowserSettings:
    global _settings
    if _settings is None:
        env_path = _project_root() / ".env"
        if not env_path.exists():
            logger.debug(
                "No .env file found at %s; using defaults and RECORD_BROWSER_* variables",
                env_path,
            )
        _settings = BrowserSettings()
    return _settings


def page_size() -> int:
    return get_settings().page_size


def reset_settings_cache() -> None:
    global _settings
    _settings = None
