"""In-memory transport for testing."""

from __future__ import annotations

import asyncio
import json
from collections import deque
from typing import Any, Deque, Dict, List, Mapping, Optional, Tuple, Union

from ..errors import TransportError
from .base import BaseTransport, TransportResponse

Reply = Union[TransportResponse, Exception]


class InMemoryTransport(BaseTransport):
    """Replays queued replies and records every request it receives.

    When the queue is empty the transport answers ``{"return": "ok"}``.
    """

    def __init__(self) -> None:
        self.requests: List[Tuple[str, Dict[str, str]]] = []
        self.timeouts: List[Optional[float]] = []
        self._replies: Deque[Reply] = deque()
        self._lock = asyncio.Lock()

    def queue_json(self, payload: Any, status_code: int = 200) -> None:
        """Queue a JSON reply."""
        body = json.dumps(payload).encode("utf-8")
        self._replies.append(TransportResponse(status_code=status_code, body=body))

    def queue_raw(self, body: bytes, status_code: int = 200) -> None:
        """Queue a reply with an arbitrary body."""
        self._replies.append(TransportResponse(status_code=status_code, body=body))

    def queue_failure(self, message: str = "connection refused") -> None:
        """Queue a network failure."""
        self._replies.append(TransportError(message))

    async def post_form(
        self,
        url: str,
        fields: Mapping[str, str],
        timeout: Optional[float] = None,
    ) -> TransportResponse:
        """Record the request and return the next queued reply."""
        async with self._lock:
            self.requests.append((url, dict(fields)))
            self.timeouts.append(timeout)
            reply = self._replies.popleft() if self._replies else None

        if reply is None:
            return TransportResponse(status_code=200, body=b'{"return": "ok"}')
        if isinstance(reply, Exception):
            raise reply
        return reply
