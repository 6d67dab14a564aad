"""Resolve the server config for a CLI invocation."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from weather_mcp.config import ServerConfig


def load_config(overrides: Mapping[str, Any] | None) -> ServerConfig:
    """Environment settings with the group-level option values applied on top."""
    config = ServerConfig.from_env()
    if not overrides:
        return config
    return config.model_copy(update=dict(overrides))
