"""``weather-mcp serve``: run the HTTP server."""

from __future__ import annotations

import sys
from typing import Any

import click

from weather_mcp.cli_commands._output import configure_logging, console


@click.command()
@click.option("--host", default="127.0.0.1", show_default=True, help="Interface to bind.")
@click.option("--port", default=8787, show_default=True, type=int, help="Port to bind.")
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"]),
    default="info",
    show_default=True,
)
@click.option("--trace-console", is_flag=True, help="Export tracing spans to stdout.")
@click.option("--otlp-endpoint", default=None, help="Export tracing spans via OTLP/gRPC.")
@click.pass_obj
def serve(
    overrides: dict[str, Any] | None,
    host: str,
    port: int,
    log_level: str,
    trace_console: bool,
    otlp_endpoint: str | None,
) -> None:
    """Serve /mcp, /sse, /tools and /health.

    Upstream settings come from NWS_API_BASE, USER_AGENT, REQUEST_TIMEOUT
    and MAX_FORECAST_PERIODS, with the group-level options applied on top.
    """
    import uvicorn

    from weather_mcp.cli_commands._config import load_config
    from weather_mcp.web.app import create_app

    configure_logging(log_level)

    if trace_console or otlp_endpoint:
        from weather_mcp.utils.telemetry import configure_telemetry

        try:
            configure_telemetry(export_to_console=trace_console, otlp_endpoint=otlp_endpoint)
        except ImportError as exc:
            console.print(f"[red]Telemetry error:[/red] {exc}")
            sys.exit(1)

    config = load_config(overrides)
    console.print(f"Serving on http://{host}:{port} (upstream {config.nws_api_base})")
    uvicorn.run(create_app(config), host=host, port=port, log_level=log_level)
