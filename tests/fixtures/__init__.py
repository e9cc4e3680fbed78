"""Test fixtures for fake mints and in-memory clients."""

from .fake_mint import FakeMint, raw_body
from .in_memory_mint_client import InMemoryMintClient

__all__ = [
    "FakeMint",
    "InMemoryMintClient",
    "raw_body",
]
