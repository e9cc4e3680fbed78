from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Type, TypeVar
from types import TracebackType

import httpx
from pydantic import BaseModel

from ...application.mint.dtos import (
    BlindedMessage,
    BlindedMessages,
    CheckFeesRequest,
    CheckSpendableRequest,
    FeeQuote,
    KeySet,
    KeysetDirectory,
    MeltOutcome,
    MeltRequest,
    MintMetadata,
    MintQuote,
    MintRequest,
    PostMintResponse,
    Proof,
    SpendabilityReport,
    SplitOutcome,
    SplitRequest,
    WireModel,
)
from ...application.shared.response import MintHttpResponse
from ...application.shared.response_decoder import decode_mint_response
from ...domain.errors import MintDecodeError
from ...domain.mint_address import MintUrl
from ..http.http_client import AsyncHttpTransport
from ..http.urls import join_url

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def _mismatch(response: MintHttpResponse, reason: str) -> MintDecodeError:
    return MintDecodeError(
        response.text,
        status_code=response.status_code,
        reason=reason,
        content=response.content,
    )


def _ensure_count(
    response: MintHttpResponse, what: str, got: int, expected: int
) -> None:
    """Reject responses whose per-item results do not line up with the request."""
    if got != expected:
        raise _mismatch(response, f"expected {expected} {what}, got {got}")


def _ensure_change_fits(
    response: MintHttpResponse,
    outcome: MeltOutcome,
    outputs: Optional[List[BlindedMessage]],
) -> None:
    """Change signatures answer the blank outputs; there can be no more of them."""
    if outcome.change is None:
        return
    if outputs is None:
        if outcome.change:
            raise _mismatch(response, "change returned without outputs")
        return
    if len(outcome.change) > len(outputs):
        raise _mismatch(
            response,
            f"expected at most {len(outputs)} change signatures, "
            f"got {len(outcome.change)}",
        )


class CoreHttpMintClient:
    """Asynchronous HTTP client for the core mint operations.

    Stateless apart from the pooled httpx client: every call takes the mint
    address, so concurrent calls against any number of mints are safe.
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        *,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._http = AsyncHttpTransport(timeout, http_client=http_client)

    async def _send(
        self,
        method: str,
        mint_url: MintUrl,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        body: Optional[WireModel] = None,
    ) -> MintHttpResponse:
        url = join_url(mint_url, path)
        json = body.to_wire() if body is not None else None
        return await self._http.request(method, url, params=params, json=json)

    async def _call(
        self,
        method: str,
        mint_url: MintUrl,
        path: str,
        model: Type[ModelT],
        *,
        params: Optional[Dict[str, Any]] = None,
        body: Optional[WireModel] = None,
    ) -> ModelT:
        resp = await self._send(method, mint_url, path, params=params, body=body)
        return decode_mint_response(resp, model)

    async def get_mint_keys(self, mint_url: MintUrl) -> KeySet:
        """Get Mint Keys [NUT-01]"""
        return await self._call("GET", mint_url, "keys", KeySet)

    async def get_mint_keysets(self, mint_url: MintUrl) -> KeysetDirectory:
        """Get Keysets [NUT-02]"""
        return await self._call("GET", mint_url, "keysets", KeysetDirectory)

    async def request_mint(self, mint_url: MintUrl, amount: int) -> MintQuote:
        """Request Mint [NUT-03]"""
        if amount < 0:
            raise ValueError("Amount must be non-negative")
        return await self._call(
            "GET", mint_url, "mint", MintQuote, params={"amount": amount}
        )

    async def post_mint(
        self,
        mint_url: MintUrl,
        blinded_messages: BlindedMessages,
        hash: str,
    ) -> PostMintResponse:
        """Mint Tokens [NUT-04]"""
        request = MintRequest(outputs=blinded_messages.blinded_messages)
        resp = await self._send(
            "POST", mint_url, "mint", params={"hash": hash}, body=request
        )
        minted = decode_mint_response(resp, PostMintResponse)
        _ensure_count(resp, "promises", len(minted.promises), len(request.outputs))
        return minted

    async def check_fees(self, mint_url: MintUrl, payment_request: str) -> FeeQuote:
        """Check Max expected fee [NUT-05]"""
        request = CheckFeesRequest(pr=payment_request)
        return await self._call("POST", mint_url, "checkfees", FeeQuote, body=request)

    async def post_melt(
        self,
        mint_url: MintUrl,
        proofs: List[Proof],
        payment_request: str,
        outputs: Optional[List[BlindedMessage]] = None,
    ) -> MeltOutcome:
        """Melt [NUT-05]

        Overpaid lightning fees come back as change if outputs are given [NUT-08].
        """
        request = MeltRequest(proofs=proofs, pr=payment_request, outputs=outputs)
        resp = await self._send("POST", mint_url, "melt", body=request)
        outcome = decode_mint_response(resp, MeltOutcome)
        _ensure_change_fits(resp, outcome, outputs)
        return outcome

    async def post_split(
        self, mint_url: MintUrl, split_request: SplitRequest
    ) -> SplitOutcome:
        """Split Token [NUT-06]"""
        resp = await self._send("POST", mint_url, "split", body=split_request)
        outcome = decode_mint_response(resp, SplitOutcome)
        _ensure_count(
            resp,
            "signatures",
            len(outcome.fst) + len(outcome.snd),
            len(split_request.outputs),
        )
        return outcome

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "CoreHttpMintClient":
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_value: Optional[BaseException],
        traceback: Optional[TracebackType],
    ) -> None:
        await self.aclose()


class CheckSpendableHttpMintClient(CoreHttpMintClient):
    """Core client plus the spendability check extension."""

    async def check_spendable(
        self, mint_url: MintUrl, proofs: List[Proof]
    ) -> SpendabilityReport:
        """Spendable check [NUT-07]"""
        request = CheckSpendableRequest(proofs=proofs)
        resp = await self._send("POST", mint_url, "check", body=request)
        report = decode_mint_response(resp, SpendabilityReport)
        _ensure_count(resp, "spendable flags", len(report.spendable), len(proofs))
        return report


class MintInfoHttpMintClient(CoreHttpMintClient):
    """Core client plus the mint information extension."""

    async def get_mint_info(self, mint_url: MintUrl) -> MintMetadata:
        """Get Mint Info [NUT-09]"""
        return await self._call("GET", mint_url, "info", MintMetadata)


class HttpMintClient(CheckSpendableHttpMintClient, MintInfoHttpMintClient):
    """HTTP client supporting every mint operation, extensions included."""
