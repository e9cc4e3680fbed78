"""Data Transfer Objects for the mint protocol.

Response models forbid unknown fields: the decode protocol validates every body
against the success model first, and a lenient model would happily accept a
mint error body (``{"code": ..., "detail": ...}``) as an empty success.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    NonNegativeInt,
    RootModel,
    model_validator,
)

Amount = NonNegativeInt


class WireModel(BaseModel):
    """Immutable model with an exact JSON shape."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    def to_wire(self) -> Dict[str, Any]:
        """JSON-ready dict using wire field names, omitting unset optionals."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# Building blocks


class BlindedMessage(WireModel):
    """Blinded secret submitted for signing (``B_``)."""

    amount: Amount
    blinded_secret: str = Field(alias="B_")


class BlindedSignature(WireModel):
    """Mint's blind signature (``C_``) over one BlindedMessage."""

    id: Optional[str] = None
    amount: Amount
    blinded_signature: str = Field(alias="C_")


class Proof(WireModel):
    """Unblinded signed secret, the unit of spendable value."""

    id: Optional[str] = None
    amount: Amount
    secret: str
    signature: str = Field(alias="C")


class BlindedMessages(BaseModel):
    """Caller-held batch of blinded outputs.

    Only ``blinded_messages`` goes on the wire; the secrets, blinding factors
    and amounts stay with the wallet to unblind the returned signatures.
    """

    model_config = ConfigDict(frozen=True)

    blinded_messages: List[BlindedMessage]
    secrets: List[str] = Field(default_factory=list)
    rs: List[str] = Field(default_factory=list)
    amounts: List[Amount] = Field(default_factory=list)

    def __len__(self) -> int:
        return len(self.blinded_messages)


# Request bodies


class MintRequest(WireModel):
    outputs: List[BlindedMessage]


class CheckFeesRequest(WireModel):
    pr: str


class MeltRequest(WireModel):
    proofs: List[Proof]
    pr: str
    outputs: Optional[List[BlindedMessage]] = None


class SplitRequest(WireModel):
    """Exchange ``proofs`` for new signatures, ``amount`` of which are sent."""

    amount: Amount
    proofs: List[Proof]
    outputs: List[BlindedMessage]


class CheckSpendableRequest(WireModel):
    proofs: List[Proof]


# Responses


class KeySet(RootModel[Dict[Amount, str]]):
    """Denomination to public key mapping returned by ``/keys``."""

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="before")
    @classmethod
    def reject_duplicate_denominations(cls, data: Any) -> Any:
        if isinstance(data, dict):
            seen: set[int] = set()
            for key in data:
                try:
                    amount = int(key)
                except (TypeError, ValueError):
                    # Left for field validation to reject
                    continue
                if amount in seen:
                    raise ValueError(f"Duplicate denomination {amount} in keyset")
                seen.add(amount)
        return data

    def __getitem__(self, amount: int) -> str:
        return self.root[amount]

    def __len__(self) -> int:
        return len(self.root)

    def amounts(self) -> List[int]:
        return sorted(self.root)


class KeysetDirectory(WireModel):
    keysets: List[str]


class MintQuote(WireModel):
    """Payment request to settle, and the hash used to claim the minted value."""

    pr: str
    hash: str

    @property
    def payment_request(self) -> str:
        return self.pr


class PostMintResponse(WireModel):
    promises: List[BlindedSignature]


class FeeQuote(WireModel):
    fee: Amount


class MeltOutcome(WireModel):
    paid: bool
    preimage: Optional[str] = None
    change: Optional[List[BlindedSignature]] = None


class SplitOutcome(WireModel):
    """Signatures for the kept (``fst``) and sent (``snd``) outputs."""

    fst: List[BlindedSignature]
    snd: List[BlindedSignature]

    @property
    def kept(self) -> List[BlindedSignature]:
        return self.fst

    @property
    def sent(self) -> List[BlindedSignature]:
        return self.snd


class SpendabilityReport(WireModel):
    spendable: List[bool]
    pending: Optional[List[bool]] = None


class MintMetadata(WireModel):
    """Free-form description of a mint returned by ``/info``."""

    name: Optional[str] = None
    pubkey: Optional[str] = None
    version: Optional[str] = None
    description: Optional[str] = None
    description_long: Optional[str] = None
    contact: Optional[List[List[str]]] = None
    nuts: Optional[List[str]] = None
    motd: Optional[str] = None
    parameter: Optional[Dict[str, Any]] = None


class MintErrorResponse(BaseModel):
    """Structured error body: a numeric code plus a human-readable message.

    Older mints put the message in ``error``, newer ones in ``detail``.
    """

    model_config = ConfigDict(frozen=True)

    code: int
    detail: Optional[str] = None
    error: Optional[str] = None

    @property
    def message(self) -> str:
        return self.error or self.detail or ""
