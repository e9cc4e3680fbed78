"""Status-agnostic HTTP response handed from a transport to the decoder."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class MintHttpResponse:
    """Tiny response wrapper with a stable surface area.

    Transports build one of these whatever the status code; deciding what the
    body means is left to ``decode_mint_response``.
    """

    status_code: int
    content: bytes

    @property
    def text(self) -> str:
        """Body for display; invalid UTF-8 is replaced, see ``content`` for bytes."""
        return self.content.decode("utf-8", errors="replace")

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    def json(self) -> Any:
        """Parse the body strictly.

        Raises ``ValueError`` when it is not valid UTF-8 JSON.
        """
        if not self.content:
            return None
        return json.loads(self.content.decode("utf-8"))
