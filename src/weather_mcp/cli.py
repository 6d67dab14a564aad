"""weather-mcp command line."""

from __future__ import annotations

from typing import Any

import click

from weather_mcp import __version__


@click.group()
@click.version_option(version=__version__, prog_name="weather-mcp")
@click.option("--api-base", default=None, help="NWS API base URL (overrides NWS_API_BASE).")
@click.option(
    "--timeout",
    "timeout_ms",
    type=click.IntRange(min=1),
    default=None,
    help="Per-request upstream timeout in ms (overrides REQUEST_TIMEOUT).",
)
@click.pass_context
def main(ctx: click.Context, api_base: str | None, timeout_ms: int | None) -> None:
    """NWS alerts and forecasts as MCP tools over JSON-RPC and SSE.

    Settings are read from NWS_API_BASE, USER_AGENT, REQUEST_TIMEOUT and
    MAX_FORECAST_PERIODS; the options above win over the environment.
    """
    overrides: dict[str, Any] = {}
    if api_base:
        overrides["nws_api_base"] = api_base.rstrip("/")
    if timeout_ms is not None:
        overrides["request_timeout"] = timeout_ms
    ctx.obj = overrides


from weather_mcp.cli_commands import register_commands  # noqa: E402

register_commands(main)

if __name__ == "__main__":
    main()
