"""Shared error types for the protocol layer.

Every error carries the JSON-RPC ``code`` it maps to at the dispatch
boundary. Only three codes exist; tool-level failures are internal errors.
"""

PARSE_ERROR = -32700
METHOD_NOT_FOUND = -32601
INTERNAL_ERROR = -32603


class ProtocolError(Exception):
    """Base error for all protocol-layer failures."""

    code: int = INTERNAL_ERROR


class ParseError(ProtocolError):
    """The inbound body is not JSON or not a valid request envelope."""

    code = PARSE_ERROR

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        super().__init__("Parse error" + (f": {detail}" if detail else ""))


class MethodNotFoundError(ProtocolError):
    """The envelope names a method the server does not implement."""

    code = METHOD_NOT_FOUND

    def __init__(self, method: str) -> None:
        self.method = method
        super().__init__(f"Method not found: {method}")


class InternalError(ProtocolError):
    """Any other failure while handling a request."""

    code = INTERNAL_ERROR


class ToolNotFoundError(InternalError):
    """Requested tool does not exist in the registry."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown tool: {name}")


class InvalidToolArgumentsError(InternalError):
    """Tool arguments do not satisfy the tool's input schema."""

    def __init__(self, name: str, detail: str) -> None:
        self.name = name
        self.detail = detail
        super().__init__(f"Invalid arguments for tool {name}: {detail}")
