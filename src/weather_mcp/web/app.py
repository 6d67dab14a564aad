"""FastAPI application: JSON-RPC endpoints, SSE channel, health and tools.

Every POST builds its own :class:`MCPServer`, so no state is shared between
requests or channels apart from the read-only :class:`ServerConfig`.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request, Response
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse, StreamingResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from weather_mcp import __version__
from weather_mcp.config import ServerConfig
from weather_mcp.protocols.errors import ParseError
from weather_mcp.protocols.mcp.models import PROTOCOL_VERSION, JsonRpcRequest
from weather_mcp.protocols.mcp.server import MCPServer, parse_error_response, parse_request
from weather_mcp.protocols.mcp.stream import EventStream
from weather_mcp.web.page import INDEX_HTML

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    import httpx

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}

SSE_HEADERS = {
    **CORS_HEADERS,
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
}

_PLAIN_ERRORS = {404: "Not Found", 405: "Method not allowed"}

# Only these paths answer a wrong method with 405; elsewhere it is a 404.
_METHOD_CHECKED_PATHS = frozenset({"/mcp"})


def _utc_timestamp() -> str:
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def create_app(
    config: ServerConfig | None = None,
    *,
    upstream_transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Build the HTTP application.

    Args:
        config: Server configuration; read from the environment when omitted.
        upstream_transport: Optional httpx transport for upstream calls
            (tests pass an ``httpx.MockTransport``).
    """
    cfg = config or ServerConfig.from_env()
    app = FastAPI(
        title="Weather MCP SSE Server",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.config = cfg

    def new_server() -> MCPServer:
        return MCPServer.from_config(cfg, transport=upstream_transport)

    @app.middleware("http")
    async def cors(request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
        if request.method == "OPTIONS":
            return Response(status_code=200, headers=CORS_HEADERS)
        response = await call_next(request)
        response.headers.setdefault("Access-Control-Allow-Origin", "*")
        return response

    @app.exception_handler(StarletteHTTPException)
    async def plain_http_error(request: Request, exc: StarletteHTTPException) -> PlainTextResponse:
        status = exc.status_code
        if status == 405 and request.url.path not in _METHOD_CHECKED_PATHS:
            status = 404
        return PlainTextResponse(_PLAIN_ERRORS.get(status, str(exc.detail)), status_code=status)

    @app.get("/", response_class=HTMLResponse)
    async def index() -> HTMLResponse:
        return HTMLResponse(INDEX_HTML)

    @app.get("/sse")
    async def open_stream(request: Request) -> StreamingResponse:
        stream = EventStream(
            ping_interval=cfg.ping_interval,
            is_disconnected=request.is_disconnected,
        )
        return StreamingResponse(stream, media_type="text/event-stream", headers=SSE_HEADERS)

    @app.post("/sse")
    @app.post("/mcp")
    async def dispatch(request: Request) -> JSONResponse:
        body = await request.body()
        try:
            rpc = parse_request(body)
        except ParseError as exc:
            logger.debug("Rejected %s body: %s", request.url.path, exc)
            return JSONResponse(parse_error_response().to_wire(), status_code=400)
        response = await new_server().handle_request(rpc)
        return JSONResponse(response.to_wire())

    @app.get("/tools")
    async def list_tools() -> Response:
        rpc = JsonRpcRequest(id=2, method="tools/list")
        response = await new_server().handle_request(rpc)
        return Response(json.dumps(response.to_wire(), indent=2), media_type="application/json")

    @app.get("/health")
    async def health() -> JSONResponse:
        return JSONResponse({
            "status": "healthy",
            "timestamp": _utc_timestamp(),
            "protocolVersion": PROTOCOL_VERSION,
        })

    return app
