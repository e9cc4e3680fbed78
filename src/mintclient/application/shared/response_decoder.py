"""Two-phase interpretation of mint responses.

Mints do not use HTTP status codes consistently, so a body is first read as the
operation's success model and, failing that, as the mint's error model. Only a
body matching neither is reported as a decode failure.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from ...domain.errors import MintDecodeError, MintProtocolError
from ..mint.dtos import MintErrorResponse
from .response import MintHttpResponse

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def _try_validate(model: Type[ModelT], value: Any) -> Optional[ModelT]:
    try:
        return model.model_validate(value)
    except ValidationError:
        return None


def interpret_json_value(
    value: Any,
    raw: str,
    model: Type[ModelT],
    *,
    status_code: int = 200,
) -> ModelT:
    """Turn a generic JSON value into ``model`` or raise a normalized error.

    Args:
        value: JSON value already parsed from the response body
        raw: The body text exactly as received, kept for ``MintDecodeError``
        model: Expected success model for the operation
        status_code: HTTP status; a non-2xx status is never a success

    Raises:
        MintProtocolError: The body is a mint error (code plus message)
        MintDecodeError: The body is neither a success nor an error
    """
    success = 200 <= status_code < 300
    if success:
        decoded = _try_validate(model, value)
        if decoded is not None:
            return decoded

    mint_error = _try_validate(MintErrorResponse, value)
    if mint_error is not None:
        logger.info(
            "Mint returned error %s: %s", mint_error.code, mint_error.message
        )
        raise MintProtocolError(mint_error.code, mint_error.message)

    if success:
        reason = f"expected {model.__name__}"
    else:
        reason = f"HTTP {status_code}"
    logger.warning("Unrecognized mint response (%s): %.200s", reason, raw)
    raise MintDecodeError(raw, status_code=status_code, reason=reason)


def decode_mint_response(response: MintHttpResponse, model: Type[ModelT]) -> ModelT:
    """Decode a transport response into ``model``; see ``interpret_json_value``."""
    try:
        value = response.json()
    except ValueError as exc:
        logger.warning(
            "Mint response is not JSON (HTTP %s): %.200s",
            response.status_code,
            response.text,
        )
        raise MintDecodeError(
            response.text,
            status_code=response.status_code,
            reason="body is not JSON",
            content=response.content,
        ) from exc
    return interpret_json_value(
        value, response.text, model, status_code=response.status_code
    )
