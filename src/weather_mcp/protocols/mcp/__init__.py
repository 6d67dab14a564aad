"""MCP protocol: envelopes, the request dispatcher, and the SSE stream.

The dispatcher lives in :mod:`weather_mcp.protocols.mcp.server` and is not
re-exported here because it depends on the tool layer.
"""

from weather_mcp.protocols.mcp.models import (
    PROTOCOL_VERSION,
    InitializeParams,
    JsonRpcError,
    JsonRpcRequest,
    JsonRpcResponse,
    ToolCallParams,
    ToolDescriptor,
)
from weather_mcp.protocols.mcp.stream import EventStream, format_sse_message

__all__ = [
    "PROTOCOL_VERSION",
    "EventStream",
    "InitializeParams",
    "JsonRpcError",
    "JsonRpcRequest",
    "JsonRpcResponse",
    "ToolCallParams",
    "ToolDescriptor",
    "format_sse_message",
]
