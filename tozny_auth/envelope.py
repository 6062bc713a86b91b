"""Construction of signed request envelopes."""

from __future__ import annotations

import logging
import secrets
import time
from datetime import datetime
from typing import Any, Callable, Mapping, Optional, Union

from .codec import encode_unix_seconds, encode_urlsafe_base64
from .contracts import RESERVED_ENVELOPE_KEYS, RequestEnvelope, SignedPair
from .errors import EnvelopeError, ReservedParamError
from .signer import Secret, sign

logger = logging.getLogger(__name__)

NONCE_BYTES = 32
DEFAULT_TTL_SECONDS = 5 * 60


def _new_nonce(nonce_factory: Callable[[int], str]) -> str:
    try:
        return nonce_factory(NONCE_BYTES)
    except (OSError, NotImplementedError) as exc:
        raise EnvelopeError(f"Secure random source unavailable: {exc}") from exc


def _format_expiry(value: Union[str, int, datetime]) -> str:
    if isinstance(value, datetime):
        return encode_unix_seconds(value)
    return str(value)


def make_envelope(
    realm_key_id: str,
    method: str,
    params: Optional[Mapping[str, Any]] = None,
    *,
    expires_at: Optional[Union[str, int, datetime]] = None,
    clock: Callable[[], float] = time.time,
    nonce_factory: Callable[[int], str] = secrets.token_hex,
) -> RequestEnvelope:
    """Assemble an unsigned envelope with a fresh nonce and expiry.

    Args:
        realm_key_id: Public identifier of the realm.
        method: Name of the remote method.
        params: Extra fields merged into the envelope after the reserved keys.
        expires_at: Explicit expiry as Unix seconds or a datetime. Defaults to
            five minutes after ``clock()``.
        clock: Returns the current time in seconds since the epoch.
        nonce_factory: Returns ``n`` secure-random bytes as hex.

    Raises:
        ReservedParamError: ``params`` contains a reserved envelope key.
        EnvelopeError: The random source failed.
    """
    params = dict(params or {})
    collisions = [key for key in RESERVED_ENVELOPE_KEYS if key in params]
    if collisions:
        raise ReservedParamError(collisions)

    if expires_at is None:
        expires = encode_unix_seconds((clock() + DEFAULT_TTL_SECONDS) * 1000)
    else:
        expires = _format_expiry(expires_at)

    return RequestEnvelope(
        nonce=_new_nonce(nonce_factory),
        expires_at=expires,
        realm_key_id=realm_key_id,
        method=method,
        **params,
    )


def sign_envelope(envelope: RequestEnvelope, secret: Secret) -> SignedPair:
    """Encode ``envelope`` canonically and sign the encoded text."""
    signed_data = encode_urlsafe_base64(envelope.to_json())
    return SignedPair(signed_data=signed_data, signature=sign(secret, signed_data))


def build_envelope(
    realm_key_id: str,
    secret: Secret,
    method: str,
    params: Optional[Mapping[str, Any]] = None,
    **options: Any,
) -> SignedPair:
    """Build and sign a request envelope for ``method``.

    ``options`` are forwarded to :func:`make_envelope`.
    """
    envelope = make_envelope(realm_key_id, method, params, **options)
    logger.debug(
        f"Built envelope for method={method} realm_key_id={realm_key_id} "
        f"expires_at={envelope.expires_at}"
    )
    return sign_envelope(envelope, secret)


__all__ = [
    "DEFAULT_TTL_SECONDS",
    "NONCE_BYTES",
    "make_envelope",
    "sign_envelope",
    "build_envelope",
]
