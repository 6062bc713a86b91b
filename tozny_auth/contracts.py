"""Core data contracts exchanged with the Tozny service."""

from __future__ import annotations

import time
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

RESERVED_ENVELOPE_KEYS = ("nonce", "expires_at", "realm_key_id", "method")


class Credential(BaseModel):
    """Realm key id paired with the realm's shared secret."""

    model_config = ConfigDict(frozen=True)

    realm_key_id: str
    secret: Union[bytes, str] = Field(repr=False)


class RequestEnvelope(BaseModel):
    """Unsigned request record. Method params are carried as extra fields."""

    model_config = ConfigDict(extra="allow")

    nonce: str
    expires_at: str
    realm_key_id: str
    method: str

    @property
    def params(self) -> Dict[str, Any]:
        """Method params merged into the envelope, in insertion order."""
        return dict(self.model_extra or {})

    def to_json(self) -> str:
        """Serialize to compact JSON, reserved keys first."""
        return self.model_dump_json()


class SignedPair(BaseModel):
    """Base64url-encoded JSON payload and its signature.

    This is the unit of exchange in both directions: outbound requests and
    inbound login assertions.
    """

    signed_data: str
    signature: str

    def as_form(self) -> Dict[str, str]:
        """Return the form fields posted to the API."""
        return {"signed_data": self.signed_data, "signature": self.signature}


class LoginClaims(BaseModel):
    """Claims carried by a verified login assertion.

    ``expires_at`` is carried as data only; use :meth:`is_expired` to apply an
    expiry policy.
    """

    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    user_id: str
    nonce: Optional[str] = None
    expires_at: Optional[str] = None
    realm_key_id: Optional[str] = None
    method: Optional[str] = None

    def is_expired(self, now: Optional[float] = None) -> bool:
        """Return ``True`` if ``expires_at`` lies at or before ``now``.

        Claims without a parseable ``expires_at`` are treated as expired.
        """
        if self.expires_at is None:
            return True
        try:
            expires = int(self.expires_at)
        except ValueError:
            return True
        current = time.time() if now is None else now
        return expires <= int(current)


__all__ = [
    "RESERVED_ENVELOPE_KEYS",
    "Credential",
    "RequestEnvelope",
    "SignedPair",
    "LoginClaims",
]
