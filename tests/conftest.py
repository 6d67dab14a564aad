"""Shared fixtures: a test config and a fake NWS upstream."""

from __future__ import annotations

import pytest

from tests.fakes import BASE, FakeNWS
from weather_mcp.config import ServerConfig


@pytest.fixture
def config() -> ServerConfig:
    return ServerConfig(nws_api_base=BASE, request_timeout=1000, max_forecast_periods=5)


@pytest.fixture
def fake_nws() -> FakeNWS:
    return FakeNWS()
