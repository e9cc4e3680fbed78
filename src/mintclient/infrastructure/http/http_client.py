from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Type, Union
from types import TracebackType

import httpx

from ...application.shared.response import MintHttpResponse
from ...domain.errors import MintTransportError

logger = logging.getLogger(__name__)


class AsyncHttpTransport:
    """Thin asynchronous HTTP transport around httpx.AsyncClient.

    - Never raises for non-successful responses: the body is always handed back.
    - Wraps every httpx failure into ``MintTransportError``.
    - Closes only the httpx client it created itself.
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        *,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        if http_client is not None:
            self._client = http_client
            self._owns_client = False
        else:
            self._client = httpx.AsyncClient(timeout=timeout)
            self._owns_client = True

    async def request(
        self,
        method: str,
        url: Union[httpx.URL, str],
        *,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> MintHttpResponse:
        logger.debug("%s %s params=%s", method, url, params)
        try:
            resp = await self._client.request(method, url, params=params, json=json)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.warning("%s %s failed: %s", method, url, exc)
            raise MintTransportError(
                f"{method} {url} failed: {str(exc) or type(exc).__name__}"
            ) from exc
        return MintHttpResponse(status_code=resp.status_code, content=resp.content)

    async def get(
        self,
        url: Union[httpx.URL, str],
        *,
        params: Optional[Dict[str, Any]] = None,
    ) -> MintHttpResponse:
        return await self.request("GET", url, params=params)

    async def post(
        self,
        url: Union[httpx.URL, str],
        *,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> MintHttpResponse:
        return await self.request("POST", url, params=params, json=json)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "AsyncHttpTransport":
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_value: Optional[BaseException],
        traceback: Optional[TracebackType],
    ) -> None:
        await self.aclose()
