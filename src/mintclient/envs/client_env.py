from __future__ import annotations

import logging
import os
from typing import Optional
from urllib.parse import urlparse

from pydantic import BaseModel, field_validator


class Settings(BaseModel):
    """Typed mint client settings built from environment variables."""

    mint_url: str
    # None disables the HTTP timeout entirely
    timeout: Optional[float] = None
    log_level: str = "WARNING"

    @field_validator("mint_url")
    @classmethod
    def validate_mint_url(cls, v: str) -> str:
        if not v:
            raise ValueError("Mint URL cannot be empty")
        parsed = urlparse(v)
        if parsed.scheme not in {"http", "https"}:
            raise ValueError("Mint URL must start with http:// or https://")
        if not parsed.netloc:
            raise ValueError("Mint URL must include a host")
        return v

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v: Optional[float]) -> Optional[float]:
        if v is not None and v <= 0:
            raise ValueError("Timeout must be positive")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level


def get_settings(mint_url: Optional[str] = None) -> Settings:
    """Return typed settings instance sourced from env vars.

    An explicit ``mint_url`` overrides ``MINT_URL``.
    """
    mint_url = mint_url or os.environ.get("MINT_URL")
    if not mint_url:
        raise ValueError("MINT_URL is required")
    timeout = os.environ.get("MINT_TIMEOUT", "")
    return Settings(
        mint_url=mint_url,
        timeout=float(timeout) if timeout else None,
        log_level=os.environ.get("MINT_LOG_LEVEL", "WARNING"),
    )
