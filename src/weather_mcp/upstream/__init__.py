"""Upstream weather provider access."""

from weather_mcp.upstream.nws import Data, FetchResult, NWSClient, Unavailable

__all__ = ["Data", "FetchResult", "NWSClient", "Unavailable"]
