"""Realm API client."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional, Union

from .codec import encode_urlsafe_base64
from .contracts import Credential, LoginClaims
from .errors import ProtocolError
from .login import verify_login
from .rpc import RpcClient
from .signer import Secret
from .transports import DEFAULT_TIMEOUT, BaseTransport

logger = logging.getLogger(__name__)


class Realm:
    """Makes signed API calls on behalf of a realm.

    Example:
        realm = Realm("sid_d915e7226947b", secret, "https://api.tozny.com")
        claims = await realm.verify_login(signed_data, signature)
        user = await realm.user_get(claims.user_id)
    """

    def __init__(
        self,
        realm_key_id: str,
        realm_secret: Secret,
        api_url: str,
        transport: Optional[BaseTransport] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self.credential = Credential(realm_key_id=realm_key_id, secret=realm_secret)
        self.api_url = api_url
        self._rpc = RpcClient(api_url, self.credential, transport=transport, timeout=timeout)

    @property
    def realm_key_id(self) -> str:
        return self.credential.realm_key_id

    async def call(
        self, method: str, params: Optional[Dict[str, Any]] = None, **options: Any
    ) -> Dict[str, Any]:
        """Invoke an arbitrary realm method."""
        return await self._rpc.call(method, params, **options)

    async def verify_login(self, signed_data: str, signature: str) -> LoginClaims:
        """Verify a login assertion posted back by the user's browser."""
        return verify_login(self.credential.secret, signed_data, signature)

    async def check_valid_login(
        self, user_id: str, session_id: str, expires_at: Union[str, int]
    ) -> bool:
        """Ask the service whether a login session is still valid.

        ``expires_at`` is the session expiry and is sent as the envelope's
        own ``expires_at``.
        """
        resp = await self._rpc.call(
            "realm.check_valid_login",
            {"user_id": user_id, "session_id": session_id},
            expires_at=expires_at,
        )
        return resp.get("return") == "true"

    async def question_challenge(
        self, question: Any, user_id: Optional[str] = None
    ) -> Dict[str, Any]:
        """Push a question challenge, optionally to one user."""
        params: Dict[str, Any] = {"question": question}
        if user_id is not None:
            params["user_id"] = user_id
        return await self._rpc.call("realm.question_challenge", params)

    async def _user_exists(self, params: Dict[str, Any]) -> bool:
        resp = await self._rpc.call("realm.user_exists", params)
        if resp.get("return") == "true" and "user_id" in resp:
            return True
        if resp.get("return") == "false":
            return False
        raise ProtocolError("Unexpected reply to realm.user_exists", payload=resp)

    async def user_exists(self, user_id: str) -> bool:
        """Return ``True`` if ``user_id`` is enrolled in this realm."""
        return await self._user_exists({"user_id": user_id})

    async def user_email_exists(self, email: str) -> bool:
        """Return ``True`` if a user with ``email`` is enrolled in this realm."""
        return await self._user_exists({"tozny_email": email})

    async def user_add(
        self, defer: str = "false", metadata: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """Enroll a new user.

        Args:
            defer: ``"true"`` to use deferred enrollment.
            metadata: Extra user fields, sent Base64url-encoded as JSON.
        """
        params: Dict[str, Any] = {"defer": defer}
        if metadata:
            params["extra_fields"] = encode_urlsafe_base64(
                json.dumps(metadata, separators=(",", ":"), ensure_ascii=False)
            )
        resp = await self._rpc.call("realm.user_add", params)
        if resp.get("return") != "ok":
            raise ProtocolError("realm.user_add did not return ok", payload=resp)
        logger.info(f"Added user {resp.get('user_id')} to realm {self.realm_key_id}")
        return resp

    async def user_get(self, user_id: str) -> Dict[str, Any]:
        """Fetch a user's id and metadata."""
        resp = await self._rpc.call("realm.user_get", {"user_id": user_id})
        if not resp.get("results"):
            raise ProtocolError("realm.user_get returned no results", payload=resp)
        return resp["results"]
