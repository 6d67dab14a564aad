"""Weather tools: ``get_alerts`` and ``get_forecast`` backed by the NWS API.

Upstream unavailability is not an error here: each failure path returns a
fixed sentence as the tool's text result.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from weather_mcp.config import DEFAULT_MAX_FORECAST_PERIODS
from weather_mcp.tools.registry import RegisteredTool, ToolParam, build_descriptor
from weather_mcp.upstream.nws import Data

if TYPE_CHECKING:
    from weather_mcp.upstream.nws import NWSClient

SEPARATOR = "\n---\n"

ALERTS_UNAVAILABLE = "Unable to fetch alerts or no alerts found."
NO_ACTIVE_ALERTS = "No active alerts for this state."
POINTS_UNAVAILABLE = "Unable to fetch forecast data for this location."
FORECAST_UNAVAILABLE = "Unable to fetch detailed forecast."

GET_ALERTS = build_descriptor(
    "get_alerts",
    "Get weather alerts for a US state",
    [ToolParam(name="state", type="string", description="Two-letter US state code (e.g. CA, NY)")],
)

GET_FORECAST = build_descriptor(
    "get_forecast",
    "Get weather forecast for a location",
    [
        ToolParam(name="latitude", type="number", description="Latitude of the location"),
        ToolParam(name="longitude", type="number", description="Longitude of the location"),
    ],
)


def _plain_number(value: Any) -> Any:
    # 40.0 prints as "40", matching how the values arrive in JSON.
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def _or(props: Mapping[str, Any], key: str, fallback: str) -> Any:
    value = props.get(key)
    return fallback if value is None or value == "" else value


def format_alert(feature: Any) -> str:
    """Render one alert feature as a fixed five-line block."""
    props = feature.get("properties") if isinstance(feature, dict) else None
    if not isinstance(props, dict):
        props = {}
    return (
        "\n"
        f"Event: {_or(props, 'event', 'Unknown')}\n"
        f"Area: {_or(props, 'areaDesc', 'Unknown')}\n"
        f"Severity: {_or(props, 'severity', 'Unknown')}\n"
        f"Description: {_or(props, 'description', 'No description available')}\n"
        f"Instructions: {_or(props, 'instruction', 'No specific instructions provided')}\n"
    )


def format_period(period: Any) -> str:
    """Render one forecast period."""
    if not isinstance(period, dict):
        period = {}
    temperature = _plain_number(_or(period, "temperature", "Unknown"))
    return (
        "\n"
        f"{_or(period, 'name', 'Unknown')}:\n"
        f"Temperature: {temperature}°{period.get('temperatureUnit') or ''}\n"
        f"Wind: {_or(period, 'windSpeed', 'Unknown')} {period.get('windDirection') or ''}\n"
        f"Forecast: {_or(period, 'detailedForecast', 'No forecast available')}\n"
    )


class WeatherTools:
    """Handlers for the two weather tools over a shared :class:`NWSClient`."""

    def __init__(
        self,
        client: NWSClient,
        *,
        max_forecast_periods: int = DEFAULT_MAX_FORECAST_PERIODS,
    ) -> None:
        self._client = client
        self._max_periods = max_forecast_periods

    def tools(self) -> list[RegisteredTool]:
        """The catalog, in the order ``tools/list`` reports it."""
        return [
            RegisteredTool(GET_ALERTS, self._call_alerts),
            RegisteredTool(GET_FORECAST, self._call_forecast),
        ]

    async def get_alerts(self, state: str) -> str:
        url = f"{self._client.base_url}/alerts/active/area/{state}"
        result = await self._client.fetch_json(url)

        features = result.get_path("features") if isinstance(result, Data) else None
        if not isinstance(features, list):
            return ALERTS_UNAVAILABLE
        if not features:
            return NO_ACTIVE_ALERTS
        return SEPARATOR.join(format_alert(feature) for feature in features)

    async def get_forecast(self, latitude: float, longitude: float) -> str:
        points_url = (
            f"{self._client.base_url}/points/"
            f"{_plain_number(latitude)},{_plain_number(longitude)}"
        )
        points = await self._client.fetch_json(points_url)
        forecast_url = points.get_path("properties", "forecast") if isinstance(points, Data) else None
        if not isinstance(forecast_url, str) or not forecast_url:
            return POINTS_UNAVAILABLE

        forecast = await self._client.fetch_json(forecast_url)
        periods = forecast.get_path("properties", "periods") if isinstance(forecast, Data) else None
        if not isinstance(periods, list):
            return FORECAST_UNAVAILABLE

        return SEPARATOR.join(format_period(period) for period in periods[: self._max_periods])

    async def _call_alerts(self, arguments: Mapping[str, Any]) -> str:
        return await self.get_alerts(arguments["state"])

    async def _call_forecast(self, arguments: Mapping[str, Any]) -> str:
        return await self.get_forecast(arguments["latitude"], arguments["longitude"])
