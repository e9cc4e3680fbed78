"""Protocol interfaces for mint client implementations.

``MintClientProtocol`` is the core operation set every transport binding must
provide. Optional protocol extensions live in their own protocols; a binding
that does not support an extension simply does not define its method, and
``require_capability`` checks this when a client is configured.
"""

from __future__ import annotations

from typing import (
    Callable,
    List,
    Optional,
    Protocol,
    Type,
    TypeVar,
    TYPE_CHECKING,
    runtime_checkable,
)
from types import TracebackType

from ..errors import UnsupportedCapabilityError

if TYPE_CHECKING:
    # Avoid circular imports by only importing types during type checking
    from ..mint_address import MintUrl
    from ...application.mint.dtos import (
        BlindedMessage,
        BlindedMessages,
        FeeQuote,
        KeySet,
        KeysetDirectory,
        MeltOutcome,
        MintMetadata,
        MintQuote,
        PostMintResponse,
        Proof,
        SpendabilityReport,
        SplitOutcome,
        SplitRequest,
    )


@runtime_checkable
class MintClientProtocol(Protocol):
    """Core mint operations (NUT-01 to NUT-06).

    Every method takes the mint's base address, so one client can talk to any
    number of mints. Every method either returns the typed payload or raises
    one of ``MintTransportError``, ``MintProtocolError`` or ``MintDecodeError``.
    """

    # Keys

    async def get_mint_keys(self, mint_url: "MintUrl") -> "KeySet":
        """Get the mint's active keyset [NUT-01].

        Args:
            mint_url: Base address of the mint

        Returns:
            Mapping of denomination to public key
        """
        ...

    async def get_mint_keysets(self, mint_url: "MintUrl") -> "KeysetDirectory":
        """Get the ids of every keyset the mint knows [NUT-02]."""
        ...

    # Minting

    async def request_mint(self, mint_url: "MintUrl", amount: int) -> "MintQuote":
        """Request a payment request for minting ``amount`` [NUT-03].

        Args:
            mint_url: Base address of the mint
            amount: Amount to mint, in the smallest unit

        Returns:
            Payment request plus the hash used to claim the minted value
        """
        ...

    async def post_mint(
        self,
        mint_url: "MintUrl",
        blinded_messages: "BlindedMessages",
        hash: str,
    ) -> "PostMintResponse":
        """Claim signatures for a paid mint quote [NUT-04].

        Args:
            mint_url: Base address of the mint
            blinded_messages: Outputs to be signed
            hash: Hash returned by ``request_mint``

        Returns:
            One blind signature per output, in order
        """
        ...

    # Melting

    async def check_fees(
        self, mint_url: "MintUrl", payment_request: str
    ) -> "FeeQuote":
        """Get the maximum expected network fee for a payment request [NUT-05]."""
        ...

    async def post_melt(
        self,
        mint_url: "MintUrl",
        proofs: "List[Proof]",
        payment_request: str,
        outputs: "Optional[List[BlindedMessage]]" = None,
    ) -> "MeltOutcome":
        """Pay ``payment_request`` with ``proofs`` [NUT-05].

        Args:
            mint_url: Base address of the mint
            proofs: Proofs covering the amount plus the fee reserve
            payment_request: Payment request to pay
            outputs: Blank outputs for returning overpaid fees [NUT-08]

        Returns:
            Paid flag, preimage and change signatures if outputs were given
        """
        ...

    # Splitting

    async def post_split(
        self, mint_url: "MintUrl", split_request: "SplitRequest"
    ) -> "SplitOutcome":
        """Exchange proofs for new signatures [NUT-06]."""
        ...

    # Context Manager Support

    async def aclose(self) -> None:
        """Close the client and release transport resources."""
        ...

    async def __aenter__(self: "ClientT") -> "ClientT":
        ...

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        ...


@runtime_checkable
class CheckSpendableCapability(Protocol):
    """Optional spendability check extension [NUT-07]."""

    async def check_spendable(
        self, mint_url: "MintUrl", proofs: "List[Proof]"
    ) -> "SpendabilityReport":
        """Ask whether each proof can still be redeemed.

        Returns:
            One flag per proof, in the order submitted
        """
        ...


@runtime_checkable
class MintInfoCapability(Protocol):
    """Optional mint information extension [NUT-09]."""

    async def get_mint_info(self, mint_url: "MintUrl") -> "MintMetadata":
        """Get the mint's self-description."""
        ...


ClientT = TypeVar("ClientT")

# Factory type for creating mint clients
MintClientFactory = Callable[[], MintClientProtocol]


def require_capability(client: ClientT, *capabilities: type) -> ClientT:
    """Check that ``client`` implements every capability protocol given.

    ``client`` may be an instance or a client class. Meant for
    configuration time, so a wallet needing an extension fails when it is built
    rather than on first use.

    Raises:
        UnsupportedCapabilityError: If a capability is missing
    """
    cls = client if isinstance(client, type) else type(client)
    missing = [cap.__name__ for cap in capabilities if not issubclass(cls, cap)]
    if missing:
        raise UnsupportedCapabilityError(
            f"{cls.__name__} does not support: {', '.join(missing)}"
        )
    return client
