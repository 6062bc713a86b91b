"""Verification of login assertions submitted by end users."""

from __future__ import annotations

import json
import logging

from pydantic import ValidationError

from .codec import decode_urlsafe_base64
from .contracts import LoginClaims
from .errors import DecodeError, InvalidSignatureError, MalformedClaimsError
from .signer import Secret, check_signature

logger = logging.getLogger(__name__)


def verify_login(secret: Secret, signed_data: str, signature: str) -> LoginClaims:
    """Authenticate a signed login assertion and return its claims.

    The signature is checked before anything in ``signed_data`` is decoded.
    Expiry is not enforced here; see :meth:`LoginClaims.is_expired`.

    Raises:
        InvalidSignatureError: ``signature`` does not match ``signed_data``.
        MalformedClaimsError: The signature is valid but the payload is not a
            JSON object carrying a ``user_id``.
    """
    if not check_signature(secret, signature, signed_data):
        logger.warning("Rejected login assertion with invalid signature")
        raise InvalidSignatureError("invalid signature")

    try:
        payload = decode_urlsafe_base64(signed_data)
        claims = json.loads(payload)
    except (DecodeError, UnicodeDecodeError, json.JSONDecodeError, RecursionError) as exc:
        logger.warning(f"Signed login payload could not be decoded: {exc}")
        raise MalformedClaimsError(f"Signed payload is not valid JSON: {exc}") from exc

    if not isinstance(claims, dict):
        raise MalformedClaimsError(
            f"Signed payload must be a JSON object, got {type(claims).__name__}"
        )

    try:
        return LoginClaims.model_validate(claims)
    except ValidationError as exc:
        logger.warning(f"Signed login payload has unexpected shape: {exc}")
        raise MalformedClaimsError(f"Signed payload is missing login claims: {exc}") from exc


__all__ = ["verify_login"]
