"""Shared domain utilities.

This package is domain-accessible and should not depend on application code.
"""

from .mint_client_protocol import (
    CheckSpendableCapability,
    MintClientFactory,
    MintClientProtocol,
    MintInfoCapability,
    require_capability,
)

__all__ = [
    "CheckSpendableCapability",
    "MintClientFactory",
    "MintClientProtocol",
    "MintInfoCapability",
    "require_capability",
]
