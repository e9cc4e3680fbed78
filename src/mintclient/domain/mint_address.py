"""Validated base address of a mint."""

from __future__ import annotations

from typing import Union
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, field_validator


class MintAddress(BaseModel):
    """Base URL every operation path is resolved against."""

    model_config = ConfigDict(frozen=True)

    url: str

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        if not v:
            raise ValueError("Mint URL cannot be empty")
        parsed = urlparse(v)
        if parsed.scheme not in {"http", "https"}:
            raise ValueError("Mint URL must start with http:// or https://")
        if not parsed.netloc:
            raise ValueError("Mint URL must include a host")
        return v

    def __str__(self) -> str:
        return self.url


MintUrl = Union[MintAddress, str]
