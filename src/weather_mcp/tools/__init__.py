"""Tool catalog and executor."""

from weather_mcp.tools.registry import (
    RegisteredTool,
    ToolParam,
    ToolRegistry,
    build_descriptor,
    validate_arguments,
)
from weather_mcp.tools.weather import WeatherTools

__all__ = [
    "RegisteredTool",
    "ToolParam",
    "ToolRegistry",
    "WeatherTools",
    "build_descriptor",
    "validate_arguments",
]
