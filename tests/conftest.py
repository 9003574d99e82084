"""
Common test fixtures and configuration.
"""

from datetime import datetime, UTC, timedelta

import httpx
import pytest

from skycast.services.external_api import WeatherAPIClient

JAKARTA_OFFSET = 7 * 3600
# 12:00 local time in Jakarta on Sunday 2025-10-19
NOW = datetime(2025, 10, 19, 5, 0, tzinfo=UTC)
LOCAL_TODAY = datetime(2025, 10, 19, tzinfo=UTC)


@pytest.fixture
def local_time():
    """
    Build unix timestamps from city-local calendar positions.

    Returns:
        Callable taking (day_offset, hour[, offset]) where day 0 is the
        city-local "today" of ``NOW``
    """

    def _local_time(day_offset: int, hour: int, offset: int = JAKARTA_OFFSET) -> int:
        local = LOCAL_TODAY + timedelta(days=day_offset, hours=hour)
        return int(local.timestamp()) - offset

    return _local_time


@pytest.fixture
def forecast_sample():
    """Factory for one raw 3-hourly forecast entry."""

    def _forecast_sample(
        dt: int,
        temp_min: float = 24.0,
        temp_max: float = 30.0,
        description: str = "berawan",
        icon: str = "03d",
    ) -> dict:
        return {
            "dt": dt,
            "main": {"temp": (temp_min + temp_max) / 2, "temp_min": temp_min, "temp_max": temp_max},
            "weather": [{"id": 802, "main": "Clouds", "description": description, "icon": icon}],
        }

    return _forecast_sample


@pytest.fixture
def current_payload():
    """Factory for a raw current-conditions response (Jakarta by default)."""

    def _current_payload(**overrides) -> dict:
        payload = {
            "name": "Jakarta",
            "dt": int(NOW.timestamp()),
            "timezone": JAKARTA_OFFSET,
            "sys": {"country": "ID"},
            "main": {"temp": 30.6, "feels_like": 35.2, "humidity": 70},
            "wind": {"speed": 3.6},
            "weather": [{"id": 500, "main": "Rain", "description": "hujan ringan", "icon": "10d"}],
        }
        payload.update(overrides)
        return payload

    return _current_payload


@pytest.fixture
def two_day_forecast(local_time, forecast_sample):
    """Raw forecast response with a tail of today and two future local days."""
    return {
        "cod": "200",
        "list": [
            forecast_sample(local_time(0, 15), 29.0, 31.0),
            forecast_sample(local_time(1, 9), 25.2, 28.0, "cerah", "01d"),
            forecast_sample(local_time(1, 12), 27.0, 31.4, "hujan ringan", "10d"),
            forecast_sample(local_time(1, 21), 23.6, 25.0, "berawan", "04n"),
            forecast_sample(local_time(2, 12), 26.0, 32.5, "cerah", "01d"),
        ],
    }


@pytest.fixture
def make_weather_client():
    """
    Build a WeatherAPIClient backed by an in-memory OpenWeatherMap.

    ``current`` and ``forecast`` are either ``(status, body)`` tuples or
    exceptions raised by the transport. Every request is recorded on the
    returned client's ``calls`` list.
    """

    def _make(current=None, forecast=None, api_key: str = "test-key", handler=None):
        calls = []
        routes = {"weather": current, "forecast": forecast}

        def default_handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            route = routes[request.url.path.rsplit("/", 1)[-1]]
            if isinstance(route, Exception):
                raise route
            status, body = route
            if isinstance(body, str):
                return httpx.Response(status, text=body)
            return httpx.Response(status, json=body)

        client = WeatherAPIClient(
            api_key=api_key,
            base_url="https://owm.test/data/2.5",
            units="metric",
            lang="id",
            client=httpx.AsyncClient(transport=httpx.MockTransport(handler or default_handler)),
        )
        client.calls = calls
        return client

    return _make
