"""Resolution of operation paths against a mint base address."""

from __future__ import annotations

import httpx
from pydantic import ValidationError

from ...domain.errors import MintTransportError
from ...domain.mint_address import MintAddress, MintUrl


def to_mint_address(mint_url: MintUrl) -> MintAddress:
    """Coerce a caller-supplied address, raising ``MintTransportError`` if invalid."""
    if isinstance(mint_url, MintAddress):
        return mint_url
    try:
        return MintAddress(url=mint_url)
    except ValidationError as exc:
        raise MintTransportError(f"Invalid mint URL {mint_url!r}") from exc


def join_url(mint_url: MintUrl, path: str) -> httpx.URL:
    """Append ``path`` as a new segment of the mint's base path.

    ``https://mint.example/cashu`` and ``https://mint.example/cashu/`` both
    resolve ``keys`` to ``https://mint.example/cashu/keys``.
    """
    address = to_mint_address(mint_url)
    try:
        base = httpx.URL(address.url)
    except httpx.InvalidURL as exc:
        raise MintTransportError(f"Invalid mint URL {address.url!r}: {exc}") from exc
    prefix = base.path.rstrip("/")
    return base.copy_with(path=f"{prefix}/{path.strip('/')}")
