"""Server-sent event stream: ``connected`` once, then periodic ``ping``.

The stream is one-directional. Requests are not read from it: they are
POSTed separately and answered in the POST response.
"""

from __future__ import annotations

import asyncio
import json
import logging
import time
from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Any

from weather_mcp.config import DEFAULT_PING_INTERVAL_S

logger = logging.getLogger(__name__)

CONNECTED_MESSAGE = "MCP SSE server ready"

DisconnectProbe = Callable[[], Awaitable[bool]]


def format_sse_message(event: str, data: Any) -> str:
    """Frame *data* as one SSE message: ``event:`` line, JSON ``data:`` line."""
    return f"event: {event}\ndata: {json.dumps(data)}\n\n"


class EventStream:
    """Async iterator of SSE frames for a single channel.

    The loop waits on the close event with the ping interval as timeout:
    a timeout means "send a ping", a set event means "stop". After
    :meth:`close` (or once *is_disconnected* reports true) no further frame
    is produced.

    Usage::

        stream = EventStream(ping_interval=30.0, is_disconnected=request.is_disconnected)
        return StreamingResponse(stream, media_type="text/event-stream")
    """

    def __init__(
        self,
        *,
        ping_interval: float = DEFAULT_PING_INTERVAL_S,
        is_disconnected: DisconnectProbe | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._ping_interval = ping_interval
        self._is_disconnected = is_disconnected
        self._clock = clock
        self._closed = asyncio.Event()
        self.pings_sent = 0

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def close(self) -> None:
        """Stop the stream; the iterator ends at its next step."""
        self._closed.set()

    def __aiter__(self) -> AsyncIterator[str]:
        return self.events()

    async def events(self) -> AsyncIterator[str]:
        logger.info("SSE channel opened")
        try:
            try:
                yield format_sse_message("connected", {"message": CONNECTED_MESSAGE})
                while not await self._should_stop():
                    try:
                        await asyncio.wait_for(self._closed.wait(), timeout=self._ping_interval)
                    except TimeoutError:
                        if await self._should_stop():
                            break
                        self.pings_sent += 1
                        yield format_sse_message("ping", {"timestamp": int(self._clock() * 1000)})
            except Exception as exc:
                logger.warning("SSE channel failed: %s", exc)
                yield format_sse_message("error", {"message": str(exc) or "Unknown error"})
        finally:
            self._closed.set()
            logger.info("SSE channel closed after %d ping(s)", self.pings_sent)

    async def _should_stop(self) -> bool:
        if self._closed.is_set():
            return True
        if self._is_disconnected is not None and await self._is_disconnected():
            self._closed.set()
            return True
        return False
