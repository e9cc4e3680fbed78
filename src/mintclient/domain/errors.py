"""Domain-specific exceptions.

Every mint client operation either returns a typed value or raises exactly one
of ``MintTransportError``, ``MintProtocolError`` or ``MintDecodeError``. All
three share ``MintClientError`` so callers can catch the whole family at once.
"""

from __future__ import annotations

from typing import Optional

INVOICE_NOT_PAID_PREFIX = "Lightning invoice not paid yet."


class MintClientError(Exception):
    """Base class for every error surfaced by a mint client."""


class MintTransportError(MintClientError):
    """Raised when a request could not be completed.

    Covers network failures, malformed mint URLs and any exception raised by
    the HTTP library. The decode stage never runs for these.
    """


class MintProtocolError(MintClientError):
    """Raised when the mint answered with a well-formed error body."""

    def __init__(self, code: int, detail: str) -> None:
        self.code = code
        self.detail = detail
        super().__init__(f"Mint error {code}: {detail}")

    @property
    def is_invoice_not_paid(self) -> bool:
        """True when the mint reports the mint quote's invoice as still unpaid."""
        return self.detail.startswith(INVOICE_NOT_PAID_PREFIX)


class MintDecodeError(MintClientError):
    """Raised when a response matched neither the success nor the error schema.

    ``raw`` is the response body text as received and ``content`` the body
    bytes; they differ only when the body was not valid UTF-8.
    """

    def __init__(
        self,
        raw: str,
        status_code: Optional[int] = None,
        reason: Optional[str] = None,
        content: Optional[bytes] = None,
    ) -> None:
        self.raw = raw
        self.content = content if content is not None else raw.encode("utf-8")
        self.status_code = status_code
        self.reason = reason
        message = f"Unrecognized mint response: {raw}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class UnsupportedCapabilityError(Exception):
    """Raised at configuration time when a client lacks a required extension."""
