"""Base transport interface for posting forms to the Tozny API."""

from __future__ import annotations

import abc
from typing import Mapping, Optional

from pydantic import BaseModel


class TransportResponse(BaseModel):
    """Raw HTTP reply handed back to the RPC layer."""

    status_code: int
    body: bytes = b""


class BaseTransport(metaclass=abc.ABCMeta):
    """Abstract HTTP transport for form-encoded POST requests."""

    async def connect(self) -> None:
        """Open underlying connections (no-op by default)."""
        pass

    async def disconnect(self) -> None:
        """Release underlying connections (no-op by default)."""
        pass

    async def __aenter__(self) -> "BaseTransport":
        await self.connect()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.disconnect()

    @abc.abstractmethod
    async def post_form(
        self,
        url: str,
        fields: Mapping[str, str],
        timeout: Optional[float] = None,
    ) -> TransportResponse:
        """POST ``fields`` as ``application/x-www-form-urlencoded`` to ``url``.

        Implementations raise :class:`~tozny_auth.errors.TransportError` when
        no reply could be obtained.
        """
        raise NotImplementedError
