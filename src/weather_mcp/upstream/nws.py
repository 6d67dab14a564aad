"""NWSClient: GETs JSON documents from the National Weather Service API.

Every failure mode (timeout, transport error, non-2xx status, unparsable
body) collapses into :class:`Unavailable`; :meth:`NWSClient.fetch_json`
never raises.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import httpx

from weather_mcp.utils.telemetry import (
    ATTR_UPSTREAM_STATUS,
    ATTR_UPSTREAM_URL,
    SPAN_UPSTREAM_FETCH,
    get_tracer,
)

if TYPE_CHECKING:
    from opentelemetry.trace import Span

    from weather_mcp.config import ServerConfig

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)

GEO_JSON = "application/geo+json"


@dataclass(frozen=True)
class Data:
    """A successfully fetched and parsed upstream payload."""

    payload: Any

    def get_path(self, *keys: str) -> Any:
        """Walk nested mappings; ``None`` if any segment is missing."""
        node = self.payload
        for key in keys:
            if not isinstance(node, dict) or key not in node:
                return None
            node = node[key]
        return node


@dataclass(frozen=True)
class Unavailable:
    """The upstream could not provide data. ``reason`` is for logs only."""

    reason: str = ""


FetchResult = Data | Unavailable


class NWSClient:
    """Issues one GET per call with the configured headers and timeout.

    Usage::

        client = NWSClient(config)
        result = await client.fetch_json(f"{config.nws_api_base}/points/39.7,-104.9")
        if isinstance(result, Data):
            ...
    """

    def __init__(
        self,
        config: ServerConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config
        self._transport = transport
        self._headers = {"User-Agent": config.user_agent, "Accept": GEO_JSON}

    @property
    def base_url(self) -> str:
        return self._config.nws_api_base

    async def fetch_json(self, url: str) -> FetchResult:
        """GET *url* and return its JSON body, or :class:`Unavailable`."""
        timeout = self._config.request_timeout_seconds
        with _tracer.start_as_current_span(SPAN_UPSTREAM_FETCH) as span:
            span.set_attribute(ATTR_UPSTREAM_URL, url)
            try:
                return await asyncio.wait_for(self._get(url, span), timeout=timeout)
            except TimeoutError:
                return self._timed_out(url)

    async def _get(self, url: str, span: Span) -> FetchResult:
        async with httpx.AsyncClient(
            transport=self._transport,
            headers=self._headers,
            timeout=self._config.request_timeout_seconds,
            follow_redirects=True,
        ) as client:
            try:
                response = await client.get(url)
            except httpx.TimeoutException:
                return self._timed_out(url)
            except (httpx.HTTPError, httpx.InvalidURL, ValueError) as exc:
                # Malformed URLs can fail in request building before any transport runs.
                logger.warning("Error while requesting %s: %s", url, exc)
                return Unavailable(str(exc) or exc.__class__.__name__)

        span.set_attribute(ATTR_UPSTREAM_STATUS, response.status_code)
        if not response.is_success:
            logger.warning("HTTP error %d while requesting %s", response.status_code, url)
            return Unavailable(f"HTTP {response.status_code}")

        try:
            payload = response.json()
        except ValueError as exc:
            logger.warning("Invalid JSON from %s: %s", url, exc)
            return Unavailable("invalid JSON")
        return Data(payload)

    def _timed_out(self, url: str) -> Unavailable:
        logger.warning("Timeout after %dms while requesting %s", self._config.request_timeout, url)
        return Unavailable("timeout")
