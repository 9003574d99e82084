"""
FastAPI dependency injection providers.

Long-lived objects (the upstream HTTP client, the dashboard controller)
are created in the application lifespan and stored on ``app.state``;
these providers hand them to routes so tests can override any of them
through ``app.dependency_overrides``.
"""

from typing import Optional

from fastapi import Depends, HTTPException, Request

from skycast.dashboard.controller import DashboardController
from skycast.services.external_api import WeatherAPIClient
from skycast.services.weather_service import WeatherService


async def get_weather_client(request: Request) -> WeatherAPIClient:
    """
    Provide the upstream client created at startup.

    Falls back to a client built from settings when the lifespan has not
    run (e.g. a bare ``TestClient(app)``).
    """
    client: Optional[WeatherAPIClient] = getattr(request.app.state, "weather_client", None)
    if client is None:
        client = WeatherAPIClient()
        request.app.state.weather_client = client
    return client


async def get_weather_service(
    weather_client: WeatherAPIClient = Depends(get_weather_client),
) -> WeatherService:
    """
    Provide a weather service bound to the shared upstream client.

    Args:
        weather_client: Upstream client from dependency

    Returns:
        WeatherService: Stateless aggregator for this request
    """
    return WeatherService(weather_client)


async def get_dashboard(request: Request) -> DashboardController:
    """
    Provide the dashboard controller.

    Raises:
        HTTPException: 503 when the dashboard is disabled or not started
    """
    dashboard: Optional[DashboardController] = getattr(request.app.state, "dashboard", None)
    if dashboard is None:
        raise HTTPException(status_code=503, detail="Dashboard is not running")
    return dashboard
