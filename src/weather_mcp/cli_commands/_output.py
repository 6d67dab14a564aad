"""Shared CLI output formatters and logging setup."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

if TYPE_CHECKING:
    from weather_mcp.protocols.mcp.models import ToolDescriptor

console = Console()


def configure_logging(level: str = "info") -> None:
    """Route the root logger through a rich console handler."""
    logging.basicConfig(
        level=level.upper(),
        format="%(name)s: %(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
        force=True,
    )


def print_tools_table(tools: list[ToolDescriptor]) -> None:
    """Pretty-print tool descriptors as a table."""
    table = Table(title="Available Tools")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Description")
    table.add_column("Parameters")

    for tool in tools:
        required = set(tool.input_schema.get("required", []))
        params = ", ".join(
            f"{name}: {prop.get('type', '?')}" + ("" if name in required else "?")
            for name, prop in tool.input_schema.get("properties", {}).items()
        )
        table.add_row(tool.name, _truncate(tool.description), params or "-")

    console.print(table)


def _truncate(text: str, max_len: int = 80) -> str:
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."
