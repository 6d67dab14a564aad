"""MCPServer: dispatches JSON-RPC requests to the tool registry.

Each request is handled independently: the method selects a handler, the
handler's result (or failure) is wrapped into a response envelope, and the
request ``id`` is echoed back. Only three error codes are produced:
``-32700`` at the parsing edge, ``-32601`` for unknown methods and
``-32603`` for everything else.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from weather_mcp.protocols.errors import (
    INTERNAL_ERROR,
    PARSE_ERROR,
    InternalError,
    MethodNotFoundError,
    ParseError,
    ProtocolError,
)
from weather_mcp.protocols.mcp.models import (
    PROTOCOL_VERSION,
    SERVER_NAME,
    SERVER_VERSION,
    InitializeParams,
    JsonRpcError,
    JsonRpcRequest,
    JsonRpcResponse,
    ToolCallParams,
)
from weather_mcp.tools.registry import ToolRegistry
from weather_mcp.tools.weather import WeatherTools
from weather_mcp.upstream.nws import NWSClient
from weather_mcp.utils.telemetry import (
    ATTR_RPC_ERROR_CODE,
    ATTR_RPC_METHOD,
    SPAN_RPC_REQUEST,
    get_tracer,
)

if TYPE_CHECKING:
    import httpx

    from weather_mcp.config import ServerConfig

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)

INTERNAL_ERROR_MESSAGE = "Internal error"
TOOL_FAILED_MESSAGE = "Tool execution failed"


def parse_request(body: bytes | str) -> JsonRpcRequest:
    """Decode one request envelope, raising :class:`ParseError` on bad input."""
    try:
        data = json.loads(body)
    except ValueError as exc:
        raise ParseError(str(exc)) from exc
    try:
        return JsonRpcRequest.model_validate(data)
    except ValidationError as exc:
        raise ParseError(f"invalid request envelope ({exc.error_count()} error(s))") from exc


def parse_error_response() -> JsonRpcResponse:
    """The id-less envelope returned when a body cannot be parsed."""
    return JsonRpcResponse(error=JsonRpcError(code=PARSE_ERROR, message="Parse error"))


def _first_error(exc: ValidationError) -> str:
    err = exc.errors()[0]
    location = ".".join(str(part) for part in err["loc"]) or "params"
    return f"Invalid params: {location}: {err['msg']}"


class MCPServer:
    """Handles ``initialize``, ``tools/list`` and ``tools/call``.

    ``initialized`` records that the handshake happened but gates nothing:
    clients may list or call tools without initializing first.

    Usage::

        server = MCPServer.from_config(config)
        response = await server.handle_request(parse_request(body))
        payload = response.to_wire()
    """

    def __init__(self, registry: ToolRegistry) -> None:
        self._registry = registry
        self.initialized = False

    @classmethod
    def from_config(
        cls,
        config: ServerConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> MCPServer:
        """Wire a server with the weather tools over a fresh :class:`NWSClient`."""
        client = NWSClient(config, transport=transport)
        tools = WeatherTools(client, max_forecast_periods=config.max_forecast_periods)
        return cls(ToolRegistry(tools.tools()))

    @property
    def registry(self) -> ToolRegistry:
        return self._registry

    async def handle_request(self, request: JsonRpcRequest) -> JsonRpcResponse:
        """Route *request* and build its response. Never raises."""
        with _tracer.start_as_current_span(SPAN_RPC_REQUEST) as span:
            span.set_attribute(ATTR_RPC_METHOD, request.method)
            try:
                result = await self._route(request)
            except ProtocolError as exc:
                span.set_attribute(ATTR_RPC_ERROR_CODE, exc.code)
                logger.debug("Request %r (%s) failed: %s", request.id, request.method, exc)
                return JsonRpcResponse.failure(
                    request.id, exc.code, str(exc) or INTERNAL_ERROR_MESSAGE
                )
            except Exception as exc:
                span.set_attribute(ATTR_RPC_ERROR_CODE, INTERNAL_ERROR)
                logger.exception("Unhandled error while dispatching %s", request.method)
                return JsonRpcResponse.failure(
                    request.id, INTERNAL_ERROR, str(exc) or INTERNAL_ERROR_MESSAGE
                )
            return JsonRpcResponse.success(request.id, result)

    async def _route(self, request: JsonRpcRequest) -> dict[str, Any]:
        if request.method == "initialize":
            return self._initialize(request.params)
        if request.method == "tools/list":
            return self._list_tools()
        if request.method == "tools/call":
            return await self._call_tool(request.params)
        raise MethodNotFoundError(request.method)

    def _initialize(self, params: dict[str, Any] | None) -> dict[str, Any]:
        self.initialized = True
        try:
            init = InitializeParams.model_validate(params or {})
        except ValidationError:
            init = InitializeParams()
        if init.client_info is not None:
            logger.info(
                "Initialized by %s %s (protocol %s)",
                init.client_info.name,
                init.client_info.version,
                init.protocol_version,
            )
        return {
            "protocolVersion": PROTOCOL_VERSION,
            "capabilities": {"tools": {}},
            "serverInfo": {"name": SERVER_NAME, "version": SERVER_VERSION},
        }

    def _list_tools(self) -> dict[str, Any]:
        return {"tools": [tool.to_wire() for tool in self._registry.list_tools()]}

    async def _call_tool(self, params: dict[str, Any] | None) -> dict[str, Any]:
        try:
            call = ToolCallParams.model_validate(params or {})
            text = await self._registry.execute(call.name, call.arguments)
        except ValidationError as exc:
            raise InternalError(_first_error(exc)) from exc
        except ProtocolError:
            raise
        except Exception as exc:
            logger.exception("Tool call failed")
            raise InternalError(str(exc) or TOOL_FAILED_MESSAGE) from exc
        return {"content": [{"type": "text", "text": text}]}
