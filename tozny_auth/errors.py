"""Exception hierarchy for tozny_auth."""

from __future__ import annotations

from typing import Any, Optional


class ToznyError(Exception):
    """Base class for every error raised by tozny_auth."""


class DecodeError(ToznyError, ValueError):
    """Input is not valid URL-safe Base64."""


class EnvelopeError(ToznyError):
    """A signed request envelope could not be constructed."""


class ReservedParamError(EnvelopeError, ValueError):
    """Request params tried to replace one of the reserved envelope keys."""

    def __init__(self, keys: list[str]) -> None:
        self.keys = keys
        super().__init__(f"Params may not override reserved envelope keys: {', '.join(keys)}")


class TransportError(ToznyError):
    """The HTTP request failed before a usable reply was received."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class ProtocolError(ToznyError):
    """The reply was not JSON, or did not have the shape the method promises."""

    def __init__(self, message: str, payload: Any = None) -> None:
        self.payload = payload
        super().__init__(message)


class ApplicationError(ToznyError):
    """The remote method reported a domain error in its ``errors`` field."""

    def __init__(self, errors: Any, payload: Optional[dict] = None) -> None:
        self.errors = errors
        self.payload = payload if payload is not None else {"errors": errors}
        super().__init__(f"Remote method returned errors: {errors!r}")


class InvalidSignatureError(ToznyError):
    """Signature does not match the signed data under the realm secret."""


class MalformedClaimsError(ToznyError):
    """Signature is valid but the signed payload cannot be decoded into claims."""


__all__ = [
    "ToznyError",
    "DecodeError",
    "EnvelopeError",
    "ReservedParamError",
    "TransportError",
    "ProtocolError",
    "ApplicationError",
    "InvalidSignatureError",
    "MalformedClaimsError",
]
