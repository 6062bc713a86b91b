"""HMAC-SHA256 signing of wire messages."""

from __future__ import annotations

import hashlib
import hmac
from typing import Union

from .codec import encode_urlsafe_base64

Secret = Union[bytes, str]
Message = Union[bytes, str]


def _as_bytes(value: Union[bytes, str]) -> bytes:
    return value.encode("utf-8") if isinstance(value, str) else bytes(value)


def sign(secret: Secret, message: Message) -> str:
    """Return the URL-safe Base64 HMAC-SHA256 of ``message`` under ``secret``.

    A ``str`` secret is used as its UTF-8 bytes, so a hex-encoded realm secret
    signs with the hex text itself. Callers that hold the decoded key bytes
    must use them consistently on both sides.
    """
    digest = hmac.new(_as_bytes(secret), _as_bytes(message), hashlib.sha256).digest()
    return encode_urlsafe_base64(digest)


def check_signature(secret: Secret, signature: str, message: Message) -> bool:
    """Return ``True`` if ``signature`` is the signature of ``message``."""
    expected = sign(secret, message)
    return hmac.compare_digest(expected.encode("ascii"), _as_bytes(signature or ""))


__all__ = ["sign", "check_signature"]
