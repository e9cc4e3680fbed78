"""Async HTTP client for the Cashu mint protocol."""

from .domain.errors import (
    MintClientError,
    MintDecodeError,
    MintProtocolError,
    MintTransportError,
    UnsupportedCapabilityError,
)
from .domain.mint_address import MintAddress
from .infrastructure.mint.mint_client import CoreHttpMintClient, HttpMintClient

__all__ = [
    "CoreHttpMintClient",
    "HttpMintClient",
    "MintAddress",
    "MintClientError",
    "MintDecodeError",
    "MintProtocolError",
    "MintTransportError",
    "UnsupportedCapabilityError",
]
