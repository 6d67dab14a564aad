"""ToolRegistry: the fixed catalog of callable tools and their executor.

The registry is built once from an ordered sequence of tools and never
mutated. :meth:`ToolRegistry.execute` checks arguments against the tool's
input schema before the handler runs, so a bad call never reaches the
upstream.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Literal

from pydantic import BaseModel

from weather_mcp.protocols.errors import InvalidToolArgumentsError, ToolNotFoundError
from weather_mcp.protocols.mcp.models import ToolDescriptor
from weather_mcp.utils.telemetry import ATTR_TOOL_NAME, SPAN_TOOL_EXECUTE, get_tracer

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)

ToolHandler = Callable[[Mapping[str, Any]], Awaitable[str]]


class ToolParam(BaseModel):
    """A single named parameter of a tool."""

    name: str
    type: Literal["string", "number"] = "string"
    description: str = ""
    required: bool = True


def build_descriptor(name: str, description: str, params: list[ToolParam]) -> ToolDescriptor:
    """Turn a flat parameter list into a descriptor with a JSON-schema object."""
    properties: dict[str, Any] = {}
    required: list[str] = []
    for param in params:
        properties[param.name] = {"type": param.type, "description": param.description}
        if param.required:
            required.append(param.name)
    return ToolDescriptor(
        name=name,
        description=description,
        input_schema={"type": "object", "properties": properties, "required": required},
    )


@dataclass(frozen=True)
class RegisteredTool:
    descriptor: ToolDescriptor
    handler: ToolHandler


def _is_number(value: object) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool)


_TYPE_CHECKS: dict[str, Callable[[object], bool]] = {
    "string": lambda value: isinstance(value, str),
    "number": _is_number,
}


def validate_arguments(descriptor: ToolDescriptor, arguments: object) -> None:
    """Raise :class:`InvalidToolArgumentsError` unless *arguments* fit the schema.

    Required names must be present and every declared parameter that is
    present must match its primitive type. Undeclared names are ignored.
    """
    if not isinstance(arguments, Mapping):
        raise InvalidToolArgumentsError(descriptor.name, "arguments must be an object")

    schema = descriptor.input_schema
    for name in schema.get("required", []):
        if name not in arguments:
            raise InvalidToolArgumentsError(descriptor.name, f"missing required parameter '{name}'")

    for name, prop in schema.get("properties", {}).items():
        if name not in arguments:
            continue
        expected = prop.get("type")
        check = _TYPE_CHECKS.get(expected)
        if check is not None and not check(arguments[name]):
            raise InvalidToolArgumentsError(
                descriptor.name, f"parameter '{name}' must be a {expected}"
            )


class ToolRegistry:
    """Name-to-tool map with a stable, declaration-ordered catalog.

    Usage::

        registry = ToolRegistry(WeatherTools(client).tools())
        descriptors = registry.list_tools()
        text = await registry.execute("get_alerts", {"state": "CA"})
    """

    def __init__(self, tools: Iterable[RegisteredTool]) -> None:
        self._tools: dict[str, RegisteredTool] = {}
        for tool in tools:
            name = tool.descriptor.name
            if name in self._tools:
                msg = f"Duplicate tool name: {name}"
                raise ValueError(msg)
            self._tools[name] = tool

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    def list_tools(self) -> list[ToolDescriptor]:
        """Return every descriptor in declaration order."""
        return [tool.descriptor for tool in self._tools.values()]

    async def execute(self, name: str, arguments: object) -> str:
        """Validate *arguments* and run the named tool's handler."""
        tool = self._tools.get(name)
        if tool is None:
            raise ToolNotFoundError(name)
        validate_arguments(tool.descriptor, arguments)
        assert isinstance(arguments, Mapping)

        with _tracer.start_as_current_span(SPAN_TOOL_EXECUTE) as span:
            span.set_attribute(ATTR_TOOL_NAME, name)
            logger.debug("Executing tool %s with %s", name, dict(arguments))
            return await tool.handler(arguments)
