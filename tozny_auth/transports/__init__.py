"""Transport factory and initialization."""

from __future__ import annotations

import os
from typing import Optional

from ..config import ToznyConfig, load_config
from .base import BaseTransport, TransportResponse
from .httpx import DEFAULT_TIMEOUT, HttpxTransport
from .inmemory import InMemoryTransport


def get_transport(
    backend: Optional[str] = None, config: Optional[ToznyConfig] = None
) -> BaseTransport:
    """Factory function to get the configured transport."""

    config = config or load_config()
    backend = (
        backend
        or os.getenv("TOZNY_TRANSPORT")
        or config.http.backend
    ).lower()

    if backend == "httpx":
        return HttpxTransport(timeout=config.http.timeout)
    elif backend == "inmemory":
        return InMemoryTransport()
    else:
        raise ValueError(f"Unsupported transport backend: {backend}")


__all__ = [
    "DEFAULT_TIMEOUT",
    "BaseTransport",
    "HttpxTransport",
    "InMemoryTransport",
    "TransportResponse",
    "get_transport",
]
