"""Tests for the weather tools."""

from __future__ import annotations

import pytest

from tests.fakes import (
    BASE,
    FORECAST_URL,
    FakeNWS,
    alert_feature,
    forecast_payload,
    points_payload,
)
from weather_mcp.config import ServerConfig
from weather_mcp.tools.weather import (
    ALERTS_UNAVAILABLE,
    FORECAST_UNAVAILABLE,
    NO_ACTIVE_ALERTS,
    POINTS_UNAVAILABLE,
    SEPARATOR,
    WeatherTools,
    format_alert,
    format_period,
)
from weather_mcp.upstream.nws import NWSClient

ALERTS_URL = f"{BASE}/alerts/active/area/CA"
POINTS_URL = f"{BASE}/points/39.7456,-97.0892"


def _tools(fake: FakeNWS, config: ServerConfig) -> WeatherTools:
    client = NWSClient(config, transport=fake.transport)
    return WeatherTools(client, max_forecast_periods=config.max_forecast_periods)


class TestCatalog:
    def test_order_and_names(self, config: ServerConfig) -> None:
        tools = _tools(FakeNWS(), config).tools()
        assert [t.descriptor.name for t in tools] == ["get_alerts", "get_forecast"]

    def test_forecast_schema(self, config: ServerConfig) -> None:
        forecast = _tools(FakeNWS(), config).tools()[1].descriptor
        assert forecast.input_schema["required"] == ["latitude", "longitude"]
        assert forecast.input_schema["properties"]["latitude"]["type"] == "number"


class TestFormatAlert:
    def test_all_fields(self) -> None:
        feature = alert_feature(
            "Flood Warning",
            areaDesc="Marin",
            severity="Severe",
            description="Rising water.",
            instruction="Move to higher ground.",
        )
        assert format_alert(feature) == (
            "\nEvent: Flood Warning\nArea: Marin\nSeverity: Severe\n"
            "Description: Rising water.\nInstructions: Move to higher ground.\n"
        )

    def test_fallbacks(self) -> None:
        text = format_alert({"properties": {}})
        assert "Event: Unknown" in text
        assert "Area: Unknown" in text
        assert "Severity: Unknown" in text
        assert "Description: No description available" in text
        assert "Instructions: No specific instructions provided" in text

    def test_missing_properties(self) -> None:
        assert "Event: Unknown" in format_alert({})


class TestFormatPeriod:
    def test_template(self) -> None:
        period = {
            "name": "Tonight",
            "temperature": 54,
            "temperatureUnit": "F",
            "windSpeed": "5 mph",
            "windDirection": "S",
            "detailedForecast": "Clear.",
        }
        assert format_period(period) == (
            "\nTonight:\nTemperature: 54°F\nWind: 5 mph S\nForecast: Clear.\n"
        )

    def test_whole_float_temperature_prints_as_integer(self) -> None:
        assert "Temperature: 54°F" in format_period({"temperature": 54.0, "temperatureUnit": "F"})


class TestGetAlerts:
    async def test_no_features(self, config: ServerConfig) -> None:
        fake = FakeNWS({ALERTS_URL: {"features": []}})
        assert await _tools(fake, config).get_alerts("CA") == NO_ACTIVE_ALERTS
        assert NO_ACTIVE_ALERTS == "No active alerts for this state."

    async def test_upstream_failure(self, config: ServerConfig) -> None:
        fake = FakeNWS({ALERTS_URL: 500})
        assert await _tools(fake, config).get_alerts("CA") == ALERTS_UNAVAILABLE

    @pytest.mark.parametrize("payload", [{}, {"features": None}, {"features": {"a": 1}}])
    async def test_missing_features(self, config: ServerConfig, payload: dict) -> None:
        fake = FakeNWS({ALERTS_URL: payload})
        assert await _tools(fake, config).get_alerts("CA") == ALERTS_UNAVAILABLE

    async def test_alerts_joined_in_order(self, config: ServerConfig) -> None:
        fake = FakeNWS({ALERTS_URL: {"features": [alert_feature("First"), alert_feature("Second")]}})
        text = await _tools(fake, config).get_alerts("CA")

        blocks = text.split(SEPARATOR)
        assert len(blocks) == 2
        assert "Event: First" in blocks[0]
        assert "Event: Second" in blocks[1]
        assert fake.urls == [ALERTS_URL]


class TestGetForecast:
    async def test_truncates_to_max_periods(self, config: ServerConfig) -> None:
        fake = FakeNWS({POINTS_URL: points_payload(), FORECAST_URL: forecast_payload(14)})
        text = await _tools(fake, config).get_forecast(39.7456, -97.0892)

        blocks = text.split(SEPARATOR)
        assert len(blocks) == 5
        assert blocks[0].startswith("\nPeriod 1:\n")
        assert "Period 6" not in text
        assert fake.urls == [POINTS_URL, FORECAST_URL]

    async def test_custom_period_limit(self) -> None:
        config = ServerConfig(nws_api_base=BASE, max_forecast_periods=2)
        fake = FakeNWS({POINTS_URL: points_payload(), FORECAST_URL: forecast_payload(4)})
        text = await _tools(fake, config).get_forecast(39.7456, -97.0892)
        assert text.count("Forecast: ") == 2

    async def test_fewer_periods_than_limit(self, config: ServerConfig) -> None:
        fake = FakeNWS({POINTS_URL: points_payload(), FORECAST_URL: forecast_payload(3)})
        text = await _tools(fake, config).get_forecast(39.7456, -97.0892)
        assert len(text.split(SEPARATOR)) == 3

    async def test_points_failure_skips_second_call(self, config: ServerConfig) -> None:
        fake = FakeNWS({POINTS_URL: 404})
        assert await _tools(fake, config).get_forecast(39.7456, -97.0892) == POINTS_UNAVAILABLE
        assert fake.urls == [POINTS_URL]

    async def test_points_without_forecast_url(self, config: ServerConfig) -> None:
        fake = FakeNWS({POINTS_URL: {"properties": {}}})
        assert await _tools(fake, config).get_forecast(39.7456, -97.0892) == POINTS_UNAVAILABLE

    async def test_forecast_failure(self, config: ServerConfig) -> None:
        fake = FakeNWS({POINTS_URL: points_payload(), FORECAST_URL: 503})
        assert await _tools(fake, config).get_forecast(39.7456, -97.0892) == FORECAST_UNAVAILABLE

    async def test_forecast_without_periods(self, config: ServerConfig) -> None:
        fake = FakeNWS({POINTS_URL: points_payload(), FORECAST_URL: {"properties": {}}})
        assert await _tools(fake, config).get_forecast(39.7456, -97.0892) == FORECAST_UNAVAILABLE

    async def test_relative_forecast_url(self, config: ServerConfig) -> None:
        fake = FakeNWS({POINTS_URL: points_payload("gridpoints/TOP/1,2")})
        assert await _tools(fake, config).get_forecast(39.7456, -97.0892) == FORECAST_UNAVAILABLE

    async def test_coordinates_passed_verbatim(self, config: ServerConfig) -> None:
        fake = FakeNWS()
        await _tools(fake, config).get_forecast(999, -500.5)
        assert fake.urls == [f"{BASE}/points/999,-500.5"]
