"""Server configuration: upstream base URL, headers, timeouts, limits."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)

DEFAULT_NWS_API_BASE = "https://api.weather.gov"
DEFAULT_USER_AGENT = "cloudflare-mcp-sse/1.0"
DEFAULT_REQUEST_TIMEOUT_MS = 30000
DEFAULT_MAX_FORECAST_PERIODS = 5
DEFAULT_PING_INTERVAL_S = 30.0


class ServerConfig(BaseModel):
    """Process-wide, read-only configuration.

    ``request_timeout`` is in milliseconds and applies to each upstream fetch
    on its own. ``ping_interval`` is the SSE keep-alive period in seconds.
    """

    model_config = ConfigDict(frozen=True)

    nws_api_base: str = DEFAULT_NWS_API_BASE
    user_agent: str = DEFAULT_USER_AGENT
    request_timeout: int = DEFAULT_REQUEST_TIMEOUT_MS
    max_forecast_periods: int = DEFAULT_MAX_FORECAST_PERIODS
    ping_interval: float = DEFAULT_PING_INTERVAL_S

    @property
    def request_timeout_seconds(self) -> float:
        return self.request_timeout / 1000

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ServerConfig:
        """Build a config from ``NWS_API_BASE``, ``USER_AGENT``,
        ``REQUEST_TIMEOUT`` and ``MAX_FORECAST_PERIODS``.

        Unset or empty values use the defaults, and so do numeric values
        that are not a positive integer.
        """
        env = os.environ if environ is None else environ
        return cls(
            nws_api_base=(env.get("NWS_API_BASE") or DEFAULT_NWS_API_BASE).rstrip("/"),
            user_agent=env.get("USER_AGENT") or DEFAULT_USER_AGENT,
            request_timeout=_positive_int(env, "REQUEST_TIMEOUT", DEFAULT_REQUEST_TIMEOUT_MS),
            max_forecast_periods=_positive_int(
                env, "MAX_FORECAST_PERIODS", DEFAULT_MAX_FORECAST_PERIODS
            ),
        )


def _positive_int(env: Mapping[str, str], key: str, default: int) -> int:
    raw = env.get(key)
    if not raw:
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        logger.warning("Ignoring %s=%r: not an integer, using %d", key, raw, default)
        return default
    if value <= 0:
        logger.warning("Ignoring %s=%r: must be positive, using %d", key, raw, default)
        return default
    return value
