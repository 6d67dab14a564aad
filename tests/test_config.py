"""Tests for ServerConfig."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from weather_mcp.config import ServerConfig


class TestDefaults:
    def test_values(self) -> None:
        config = ServerConfig()
        assert config.nws_api_base == "https://api.weather.gov"
        assert config.user_agent == "cloudflare-mcp-sse/1.0"
        assert config.request_timeout == 30000
        assert config.request_timeout_seconds == 30.0
        assert config.max_forecast_periods == 5
        assert config.ping_interval == 30.0

    def test_frozen(self) -> None:
        with pytest.raises(ValidationError):
            ServerConfig().user_agent = "x"  # type: ignore[misc]


class TestFromEnv:
    def test_empty_env_uses_defaults(self) -> None:
        assert ServerConfig.from_env({}) == ServerConfig()

    def test_reads_all_keys(self) -> None:
        config = ServerConfig.from_env({
            "NWS_API_BASE": "https://nws.test/",
            "USER_AGENT": "agent/2",
            "REQUEST_TIMEOUT": "5000",
            "MAX_FORECAST_PERIODS": "3",
        })
        assert config.nws_api_base == "https://nws.test"
        assert config.user_agent == "agent/2"
        assert config.request_timeout == 5000
        assert config.max_forecast_periods == 3

    @pytest.mark.parametrize("raw", ["abc", "0", "-5", "1.5"])
    def test_invalid_numbers_fall_back(self, raw: str, caplog) -> None:
        config = ServerConfig.from_env({"REQUEST_TIMEOUT": raw, "MAX_FORECAST_PERIODS": raw})
        assert config.request_timeout == 30000
        assert config.max_forecast_periods == 5
        assert "Ignoring REQUEST_TIMEOUT" in caplog.text

    def test_empty_strings_fall_back(self) -> None:
        config = ServerConfig.from_env({"NWS_API_BASE": "", "USER_AGENT": ""})
        assert config.nws_api_base == "https://api.weather.gov"
        assert config.user_agent == "cloudflare-mcp-sse/1.0"
