"""
Tests for the JSON API routes.
"""

import httpx
import pytest
from fastapi.testclient import TestClient

from skycast.main import app
from skycast.utils.dependencies import get_weather_client


class TestWeatherRoute:
    """Test suite for GET /api/weather.

    The upstream client is replaced with an in-memory provider so the
    route, the aggregator and the error mapping run end to end.
    """

    @pytest.fixture
    def use_client(self):
        """Install an upstream client for the duration of a test."""

        def _use(weather_client):
            app.dependency_overrides[get_weather_client] = lambda: weather_client
            return TestClient(app)

        yield _use
        app.dependency_overrides.clear()

    @pytest.fixture
    def ok_client(self, make_weather_client, current_payload, two_day_forecast):
        return make_weather_client(
            current=(200, current_payload()), forecast=(200, two_day_forecast)
        )

    def test_success_uses_camel_case_keys(self, use_client, ok_client):
        """Test the report JSON shape."""
        response = use_client(ok_client).get("/api/weather", params={"city": "Jakarta"})

        assert response.status_code == 200
        data = response.json()
        assert set(data) == {"city", "country", "updatedAt", "current", "forecast"}
        assert data["city"] == "Jakarta"
        assert data["country"] == "ID"
        assert data["current"] == {
            "description": "hujan ringan",
            "icon": "10d",
            "temp": 30.6,
            "feelsLike": 35.2,
            "humidity": 70,
            "windSpeed": 3.6,
        }
        assert data["forecast"][0] == {
            "description": "hujan ringan",
            "icon": "10d",
            "date": "2025-10-20",
            "tempMin": 23.6,
            "tempMax": 31.4,
        }
        assert len(data["forecast"]) == 2

    def test_city_is_trimmed(self, use_client, ok_client):
        use_client(ok_client).get("/api/weather", params={"city": "  Jakarta "})

        assert {call.url.params["q"] for call in ok_client.calls} == {"Jakarta"}

    @pytest.mark.parametrize("params", [{}, {"city": ""}, {"city": "   "}])
    def test_missing_city(self, use_client, make_weather_client, params):
        weather_client = make_weather_client()

        response = use_client(weather_client).get("/api/weather", params=params)

        assert response.status_code == 400
        assert response.json() == {"error": "Parameter city wajib diisi."}
        assert weather_client.calls == []

    def test_missing_credential(self, use_client, make_weather_client):
        response = use_client(make_weather_client(api_key="")).get(
            "/api/weather", params={"city": "Jakarta"}
        )

        assert response.status_code == 500
        assert response.json() == {"error": "Server belum memiliki OPENWEATHER_API_KEY."}

    def test_city_not_found(self, use_client, make_weather_client):
        weather_client = make_weather_client(
            current=(404, {"cod": "404", "message": "city not found"}),
            forecast=(404, {"cod": "404", "message": "city not found"}),
        )

        response = use_client(weather_client).get("/api/weather", params={"city": "Atlantis"})

        assert response.status_code == 404
        assert response.json() == {"error": "Kota tidak ditemukan. Coba nama kota lain."}

    def test_invalid_credential(self, use_client, make_weather_client, two_day_forecast):
        weather_client = make_weather_client(
            current=(401, {"cod": 401, "message": "Invalid API key"}),
            forecast=(200, two_day_forecast),
        )

        response = use_client(weather_client).get("/api/weather", params={"city": "Jakarta"})

        assert response.status_code == 401
        assert response.json() == {"error": "API key OpenWeatherMap tidak valid."}

    def test_upstream_server_error(self, use_client, make_weather_client, current_payload):
        weather_client = make_weather_client(
            current=(200, current_payload()),
            forecast=(500, {"message": "internal error"}),
        )

        response = use_client(weather_client).get("/api/weather", params={"city": "Jakarta"})

        assert response.status_code == 502
        assert response.json() == {"error": "internal error"}

    def test_upstream_unreachable(self, use_client, make_weather_client):
        weather_client = make_weather_client(
            current=httpx.ConnectError("refused"), forecast=httpx.ConnectError("refused")
        )

        response = use_client(weather_client).get("/api/weather", params={"city": "Jakarta"})

        assert response.status_code == 502
        assert response.json() == {
            "error": "Terjadi gangguan saat mengambil data dari OpenWeatherMap."
        }

    def test_out_of_range_timestamp(
        self, use_client, make_weather_client, current_payload, forecast_sample
    ):
        weather_client = make_weather_client(
            current=(200, current_payload()),
            forecast=(200, {"list": [forecast_sample(10**13)]}),
        )

        response = use_client(weather_client).get("/api/weather", params={"city": "Jakarta"})

        assert response.status_code == 502
        assert response.json() == {
            "error": "Terjadi gangguan saat mengambil data dari OpenWeatherMap."
        }

    def test_request_id_header(self, use_client, ok_client):
        client = use_client(ok_client)

        generated = client.get("/api/weather", params={"city": "Jakarta"})
        echoed = client.get(
            "/api/weather", params={"city": "Jakarta"}, headers={"X-Request-ID": "req-abc"}
        )

        assert generated.headers["X-Request-ID"].startswith("req_")
        assert "X-Process-Time" in generated.headers
        assert echoed.headers["X-Request-ID"] == "req-abc"


class TestHealthRoute:
    """Test suite for GET /health."""

    @pytest.fixture(autouse=True)
    def no_dashboard(self):
        previous = getattr(app.state, "dashboard", None)
        app.state.dashboard = None
        yield
        app.state.dashboard = previous
        app.dependency_overrides.clear()

    def test_healthy_when_configured(self, make_weather_client):
        app.dependency_overrides[get_weather_client] = lambda: make_weather_client()

        response = TestClient(app).get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["version"] == "1.0.0"
        assert data["services"] == {
            "openweathermap_credential": "configured",
            "dashboard_refresh": "disabled",
        }

    def test_degraded_without_credential(self, make_weather_client):
        app.dependency_overrides[get_weather_client] = lambda: make_weather_client(api_key="")

        data = TestClient(app).get("/health").json()

        assert data["status"] == "degraded"
        assert data["services"]["openweathermap_credential"] == "missing"
