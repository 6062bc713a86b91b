"""tozny_auth: signed-request client for the Tozny authentication service."""

from .codec import decode_urlsafe_base64, encode_unix_seconds, encode_urlsafe_base64
from .contracts import Credential, LoginClaims, RequestEnvelope, SignedPair
from .envelope import build_envelope
from .errors import (
    ApplicationError,
    DecodeError,
    EnvelopeError,
    InvalidSignatureError,
    MalformedClaimsError,
    ProtocolError,
    ReservedParamError,
    ToznyError,
    TransportError,
)
from .login import verify_login
from .realm import Realm
from .rpc import RpcClient, send_request
from .signer import check_signature, sign
from .transports import get_transport
from .user import User

__version__ = "1.3.2"
__all__ = [
    "ApplicationError",
    "Credential",
    "DecodeError",
    "EnvelopeError",
    "InvalidSignatureError",
    "LoginClaims",
    "MalformedClaimsError",
    "ProtocolError",
    "Realm",
    "RequestEnvelope",
    "ReservedParamError",
    "RpcClient",
    "SignedPair",
    "ToznyError",
    "TransportError",
    "User",
    "build_envelope",
    "check_signature",
    "decode_urlsafe_base64",
    "encode_unix_seconds",
    "encode_urlsafe_base64",
    "get_transport",
    "send_request",
    "sign",
    "verify_login",
]
