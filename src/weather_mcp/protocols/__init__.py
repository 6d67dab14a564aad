"""Protocol layer: JSON-RPC dispatch and the SSE stream."""

from weather_mcp.protocols.errors import (
    INTERNAL_ERROR,
    METHOD_NOT_FOUND,
    PARSE_ERROR,
    InternalError,
    InvalidToolArgumentsError,
    MethodNotFoundError,
    ParseError,
    ProtocolError,
    ToolNotFoundError,
)

__all__ = [
    "INTERNAL_ERROR",
    "METHOD_NOT_FOUND",
    "PARSE_ERROR",
    "InternalError",
    "InvalidToolArgumentsError",
    "MethodNotFoundError",
    "ParseError",
    "ProtocolError",
    "ToolNotFoundError",
]
