"""HTTP surface."""

from weather_mcp.web.app import create_app

__all__ = ["create_app"]
