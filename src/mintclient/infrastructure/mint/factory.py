"""Construction of configured mint clients."""

from __future__ import annotations

from typing import Optional, Sequence, Type

import httpx

from ...domain.shared import MintClientFactory, require_capability
from ...envs.client_env import Settings
from .mint_client import CoreHttpMintClient, HttpMintClient


def build_mint_client(
    settings: Settings,
    *,
    capabilities: Sequence[type] = (),
    client_cls: Type[CoreHttpMintClient] = HttpMintClient,
    http_client: Optional[httpx.AsyncClient] = None,
) -> CoreHttpMintClient:
    """Build a configured mint client, checking the extensions the caller needs.

    The check runs against ``client_cls`` before anything is opened, so a
    missing extension fails without leaking a connection pool.

    Raises:
        UnsupportedCapabilityError: If ``client_cls`` lacks a requested capability
    """
    require_capability(client_cls, *capabilities)
    return client_cls(settings.timeout, http_client=http_client)


def mint_client_factory(
    settings: Settings,
    *,
    capabilities: Sequence[type] = (),
    client_cls: Type[CoreHttpMintClient] = HttpMintClient,
) -> MintClientFactory:
    """Return a factory of fresh clients, each owning its connection pool.

    Capabilities are checked once, here, rather than every time a client is made.

    Raises:
        UnsupportedCapabilityError: If ``client_cls`` lacks a requested capability
    """
    require_capability(client_cls, *capabilities)

    def create() -> CoreHttpMintClient:
        return client_cls(settings.timeout)

    return create
