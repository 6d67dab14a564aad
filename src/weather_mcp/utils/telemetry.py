"""Tracing for the request path.

Three span kinds cover a tool call end to end: ``mcp.request`` around each
JSON-RPC dispatch, ``tool.execute`` around the handler, and
``upstream.fetch`` around every NWS GET. The OpenTelemetry API hands out
no-op tracers until :func:`configure_telemetry` installs a provider, which
needs the ``otel`` extra (``pip install weather-mcp-sse[otel]``).
"""

from __future__ import annotations

from typing import Any

from opentelemetry import trace

SPAN_RPC_REQUEST = "mcp.request"
SPAN_TOOL_EXECUTE = "tool.execute"
SPAN_UPSTREAM_FETCH = "upstream.fetch"

ATTR_RPC_METHOD = "weather_mcp.rpc.method"
ATTR_RPC_ERROR_CODE = "weather_mcp.rpc.error_code"
ATTR_TOOL_NAME = "weather_mcp.tool.name"
ATTR_UPSTREAM_URL = "weather_mcp.upstream.url"
ATTR_UPSTREAM_STATUS = "weather_mcp.upstream.status"

_INSTRUMENTATION_NAME = "weather_mcp"
_EXTRA_HINT = "Install it with: pip install weather-mcp-sse[otel]"


def get_tracer(name: str | None = None) -> trace.Tracer:
    return trace.get_tracer(name or _INSTRUMENTATION_NAME)


def configure_telemetry(
    *,
    service_name: str = "weather-mcp",
    export_to_console: bool = True,
    otlp_endpoint: str | None = None,
) -> None:
    """Install a global tracer provider with the requested exporters.

    Every exporter is resolved before the provider is swapped in, so a
    missing package leaves the current provider untouched.

    Raises
    ------
    ImportError
        If ``opentelemetry-sdk`` (or the OTLP exporter, when
        *otlp_endpoint* is given) is not installed.
    """
    try:
        from opentelemetry.sdk.resources import Resource  # pyright: ignore[reportMissingImports,reportUnknownVariableType]
        from opentelemetry.sdk.trace import TracerProvider  # pyright: ignore[reportMissingImports,reportUnknownVariableType]
    except ImportError as exc:
        msg = f"opentelemetry-sdk is required for configure_telemetry(). {_EXTRA_HINT}"
        raise ImportError(msg) from exc

    processors = _span_processors(export_to_console, otlp_endpoint)

    provider = TracerProvider(  # pyright: ignore[reportUnknownVariableType]
        resource=Resource.create({"service.name": service_name}),  # pyright: ignore[reportUnknownMemberType]
    )
    for processor in processors:
        provider.add_span_processor(processor)  # pyright: ignore[reportUnknownMemberType]
    trace.set_tracer_provider(provider)  # pyright: ignore[reportUnknownArgumentType]


def _span_processors(export_to_console: bool, otlp_endpoint: str | None) -> list[Any]:
    from opentelemetry.sdk.trace.export import (  # pyright: ignore[reportMissingImports,reportUnknownVariableType]
        BatchSpanProcessor,
        ConsoleSpanExporter,
        SimpleSpanProcessor,
    )

    processors: list[Any] = []
    if export_to_console:
        # Console output stays synchronous so spans interleave with log lines.
        processors.append(SimpleSpanProcessor(ConsoleSpanExporter()))
    if otlp_endpoint:
        try:
            from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import (  # pyright: ignore[reportMissingImports,reportUnknownVariableType]
                OTLPSpanExporter,
            )
        except ImportError as exc:
            msg = f"opentelemetry-exporter-otlp is required for OTLP export. {_EXTRA_HINT}"
            raise ImportError(msg) from exc
        processors.append(BatchSpanProcessor(OTLPSpanExporter(endpoint=otlp_endpoint)))
    return processors
