"""URL-safe Base64 and time encoding used on the wire."""

from __future__ import annotations

import base64
import binascii
import math
import re
from datetime import datetime
from typing import Union

from .errors import DecodeError

_URLSAFE_ALPHABET = re.compile(r"^[A-Za-z0-9_-]*$")


def encode_urlsafe_base64(data: Union[bytes, str]) -> str:
    """Encode ``data`` as unpadded URL-safe Base64.

    Strings are UTF-8 encoded before encoding.
    """
    raw = data.encode("utf-8") if isinstance(data, str) else bytes(data)
    return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")


def decode_urlsafe_base64(data: str) -> bytes:
    """Decode unpadded URL-safe Base64 produced by :func:`encode_urlsafe_base64`.

    Raises:
        DecodeError: ``data`` contains characters outside the URL-safe
            alphabet or has a length no Base64 encoding can produce.
    """
    if not isinstance(data, str):
        raise DecodeError(f"Expected str, got {type(data).__name__}")

    stripped = data.rstrip("=")
    if not _URLSAFE_ALPHABET.match(stripped):
        raise DecodeError("Input contains characters outside the URL-safe Base64 alphabet")
    if len(stripped) % 4 == 1:
        raise DecodeError(f"Invalid URL-safe Base64 length: {len(stripped)}")

    padded = stripped + "=" * (-len(stripped) % 4)
    try:
        return base64.urlsafe_b64decode(padded)
    except (binascii.Error, ValueError) as exc:
        raise DecodeError(str(exc)) from exc


def encode_unix_seconds(time: Union[datetime, int, float]) -> str:
    """Return whole seconds since the epoch as a decimal string.

    Numbers are interpreted as milliseconds since the epoch; datetimes are
    converted through :meth:`datetime.timestamp`.
    """
    if isinstance(time, datetime):
        millis = time.timestamp() * 1000
    else:
        millis = time
    return str(math.floor(millis / 1000))


__all__ = ["encode_urlsafe_base64", "decode_urlsafe_base64", "encode_unix_seconds"]
