"""Unsigned API calls made on behalf of an end user."""

from __future__ import annotations

from typing import Any, Dict, Optional

from .config import DEFAULT_API_URL
from .rpc import decode_reply
from .transports import DEFAULT_TIMEOUT, BaseTransport, HttpxTransport


class User:
    """Client for the ``user.*`` API methods, which need no realm secret."""

    def __init__(
        self,
        realm_key_id: str,
        api_url: str = DEFAULT_API_URL,
        transport: Optional[BaseTransport] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self.realm_key_id = realm_key_id
        self.api_url = api_url
        self.transport = transport or HttpxTransport(timeout=timeout)
        self.timeout = timeout

    async def raw_call(
        self, method: str, params: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """POST ``method`` and ``params`` as plain form fields."""
        fields = {"method": method}
        if params:
            fields.update({key: str(value) for key, value in params.items()})
        response = await self.transport.post_form(
            self.api_url, fields, timeout=self.timeout
        )
        return decode_reply(response, self.api_url)

    async def login_challenge(self) -> Dict[str, Any]:
        """Request a login challenge (``signed_data`` and ``signature``)."""
        return await self.raw_call(
            "user.login_challenge", {"realm_key_id": self.realm_key_id}
        )

    async def realm_get(self) -> Dict[str, Any]:
        """Fetch public metadata for the realm."""
        return await self.raw_call("user.realm_get", {"realm_key_id": self.realm_key_id})
