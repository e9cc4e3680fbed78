"""Shared pytest fixtures for mint client tests."""

from __future__ import annotations

from typing import AsyncGenerator

import pytest
import pytest_asyncio

from mintclient.application.mint.dtos import (
    BlindedMessage,
    BlindedMessages,
    Proof,
)
from mintclient.infrastructure.mint.mint_client import HttpMintClient
from tests.fixtures import FakeMint
from tests.fixtures.mint_data import KEYSET_ID, pubkey

MINT_URL = "https://mint.example"


@pytest.fixture
def mint_url() -> str:
    return MINT_URL


@pytest.fixture
def fake_mint() -> FakeMint:
    """A fresh mint with no routes."""
    return FakeMint()


@pytest_asyncio.fixture
async def mint_client(fake_mint: FakeMint) -> AsyncGenerator[HttpMintClient, None]:
    """HttpMintClient whose requests are served by ``fake_mint``."""
    http_client = fake_mint.http_client()
    client = HttpMintClient(http_client=http_client)
    yield client
    await client.aclose()
    await http_client.aclose()


@pytest.fixture
def blinded_messages() -> BlindedMessages:
    amounts = [8, 2]
    return BlindedMessages(
        blinded_messages=[
            BlindedMessage(amount=a, blinded_secret=f"03{a:064x}") for a in amounts
        ],
        secrets=["secret-8", "secret-2"],
        rs=["r-8", "r-2"],
        amounts=amounts,
    )


@pytest.fixture
def proofs() -> list[Proof]:
    return [
        Proof(id=KEYSET_ID, amount=8, secret="s1", signature=pubkey(1)),
        Proof(id=KEYSET_ID, amount=2, secret="s2", signature=pubkey(2)),
    ]
