"""Weather MCP server: NWS alerts and forecasts over JSON-RPC and SSE."""

from __future__ import annotations

__version__ = "0.1.0"
