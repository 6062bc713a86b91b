"""Signed RPC calls against the Tozny API."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Mapping, Optional

from .contracts import Credential
from .envelope import build_envelope
from .errors import ApplicationError, ProtocolError, TransportError
from .signer import Secret
from .transports import DEFAULT_TIMEOUT, BaseTransport, HttpxTransport, TransportResponse

logger = logging.getLogger(__name__)


def decode_reply(response: TransportResponse, url: str) -> Dict[str, Any]:
    """Turn a raw reply into the decoded JSON object.

    Raises:
        ApplicationError: The object carries an ``errors`` field.
        TransportError: HTTP error status without an application error body.
        ProtocolError: The body is not a JSON object.
    """
    try:
        data = json.loads(response.body)
    except (UnicodeDecodeError, json.JSONDecodeError, RecursionError) as e:
        if response.status_code >= 400:
            raise TransportError(
                f"{url} replied with HTTP {response.status_code}",
                status_code=response.status_code,
            ) from e
        raise ProtocolError(f"Reply from {url} is not JSON: {e}", payload=response.body) from e

    if isinstance(data, dict) and "errors" in data:
        logger.warning(f"{url} reported errors: {data['errors']!r}")
        raise ApplicationError(data["errors"], payload=data)
    if response.status_code >= 400:
        raise TransportError(
            f"{url} replied with HTTP {response.status_code}",
            status_code=response.status_code,
        )
    if not isinstance(data, dict):
        raise ProtocolError(
            f"Reply from {url} must be a JSON object, got {type(data).__name__}",
            payload=data,
        )
    return data


class RpcClient:
    """Sends signed requests for one realm to one API endpoint.

    The client holds no per-call state and can be shared between concurrent
    callers.
    """

    def __init__(
        self,
        api_url: str,
        credential: Credential,
        transport: Optional[BaseTransport] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self.api_url = api_url
        self.credential = credential
        self.transport = transport or HttpxTransport(timeout=timeout)
        self.timeout = timeout

    async def call(
        self,
        method: str,
        params: Optional[Mapping[str, Any]] = None,
        *,
        timeout: Optional[float] = None,
        **options: Any,
    ) -> Dict[str, Any]:
        """Invoke ``method`` with ``params`` and return the decoded reply.

        The envelope is built and signed before any I/O happens. ``options``
        are passed to :func:`~tozny_auth.envelope.build_envelope`.
        """
        pair = build_envelope(
            self.credential.realm_key_id,
            self.credential.secret,
            method,
            params,
            **options,
        )
        request_timeout = self.timeout if timeout is None else timeout
        logger.debug(f"Calling {method} at {self.api_url}")
        response = await self.transport.post_form(
            self.api_url, pair.as_form(), timeout=request_timeout
        )
        return decode_reply(response, self.api_url)


async def send_request(
    api_url: str,
    realm_key_id: str,
    secret: Secret,
    method: str,
    params: Optional[Mapping[str, Any]] = None,
    *,
    transport: Optional[BaseTransport] = None,
    timeout: Optional[float] = None,
) -> Dict[str, Any]:
    """One-off signed call to ``method`` at ``api_url``."""
    client = RpcClient(
        api_url,
        Credential(realm_key_id=realm_key_id, secret=secret),
        transport=transport,
    )
    return await client.call(method, params, timeout=timeout)


__all__ = ["RpcClient", "decode_reply", "send_request"]
