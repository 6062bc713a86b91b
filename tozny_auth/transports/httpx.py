"""httpx-backed transport."""

from __future__ import annotations

import logging
from typing import Mapping, Optional

import httpx

from ..errors import TransportError
from .base import BaseTransport, TransportResponse

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


class HttpxTransport(BaseTransport):
    """Posts forms with :class:`httpx.AsyncClient`.

    Without :meth:`connect` a short-lived client is created per request.
    After :meth:`connect` a single client is reused until :meth:`disconnect`.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    def _new_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self._transport)

    async def connect(self) -> None:
        if self._client is None:
            self._client = self._new_client()

    async def disconnect(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def post_form(
        self,
        url: str,
        fields: Mapping[str, str],
        timeout: Optional[float] = None,
    ) -> TransportResponse:
        """POST ``fields`` to ``url`` and return the raw reply."""
        request_timeout = self.timeout if timeout is None else timeout
        try:
            if self._client is not None:
                response = await self._client.post(
                    url, data=dict(fields), timeout=request_timeout
                )
            else:
                async with self._new_client() as client:
                    response = await client.post(
                        url, data=dict(fields), timeout=request_timeout
                    )
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.error(f"POST to {url} failed: {e}")
            raise TransportError(f"POST to {url} failed: {e}") from e

        return TransportResponse(status_code=response.status_code, body=response.content)
