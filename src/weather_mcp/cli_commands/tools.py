"""``weather-mcp tools``: inspect and invoke tools without the HTTP server."""

from __future__ import annotations

import asyncio
import json
import sys
from typing import Any

import click

from weather_mcp.cli_commands._output import console, print_tools_table


def _parse_value(raw: str) -> Any:
    """Numbers become numbers, anything else stays a string."""
    try:
        value = json.loads(raw)
    except ValueError:
        return raw
    return value if isinstance(value, int | float) and not isinstance(value, bool) else raw


def _parse_arguments(pairs: tuple[str, ...]) -> dict[str, Any]:
    arguments: dict[str, Any] = {}
    for pair in pairs:
        key, sep, raw = pair.partition("=")
        if not sep or not key:
            msg = f"expected KEY=VALUE, got {pair!r}"
            raise click.BadParameter(msg, param_hint="ARGS")
        arguments[key] = _parse_value(raw)
    return arguments


@click.group()
def tools() -> None:
    """List and call tools."""


@tools.command("list")
@click.pass_obj
def list_tools(overrides: dict[str, Any] | None) -> None:
    """Show the tool catalog."""
    from weather_mcp.cli_commands._config import load_config
    from weather_mcp.protocols.mcp.server import MCPServer

    server = MCPServer.from_config(load_config(overrides))
    print_tools_table(server.registry.list_tools())


@tools.command("call")
@click.argument("name")
@click.argument("args", nargs=-1)
@click.pass_obj
def call(overrides: dict[str, Any] | None, name: str, args: tuple[str, ...]) -> None:
    """Call tool NAME with KEY=VALUE arguments, e.g. ``get_alerts state=CA``."""
    from weather_mcp.cli_commands._config import load_config
    from weather_mcp.protocols.mcp.models import JsonRpcRequest
    from weather_mcp.protocols.mcp.server import MCPServer

    arguments = _parse_arguments(args)
    server = MCPServer.from_config(load_config(overrides))
    request = JsonRpcRequest(
        id=1, method="tools/call", params={"name": name, "arguments": arguments}
    )
    response = asyncio.run(server.handle_request(request))

    if response.error is not None:
        console.print(f"[red]Error {response.error.code}:[/red] {response.error.message}")
        sys.exit(1)

    assert response.result is not None
    for item in response.result.get("content", []):
        if item.get("type") == "text":
            console.print(item.get("text", ""), markup=False, highlight=False)
