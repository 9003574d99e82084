"""
This module defines the JSON API routes.
"""

from datetime import datetime, UTC
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from skycast.config import get_settings
from skycast.definitions.data_sources import CredentialStatus, TimerStatus
from skycast.exceptions import WeatherServiceException
from skycast.schemas.health import HealthResponse
from skycast.schemas.report import ErrorResponse, WeatherReport
from skycast.services.external_api import WeatherAPIClient
from skycast.services.weather_service import WeatherService
from skycast.utils.dependencies import get_weather_client, get_weather_service
from skycast.utils.logger import setup_logger

logger = setup_logger(__name__)
settings = get_settings()

router = APIRouter(tags=["weather"])

ERROR_RESPONSES = {
    status: {"model": ErrorResponse} for status in (400, 401, 404, 500, 502)
}


@router.get("/api/weather", response_model=WeatherReport, responses=ERROR_RESPONSES)
async def get_weather(
    request: Request,
    city: Optional[str] = Query(None, description="City name"),
    weather_service: WeatherService = Depends(get_weather_service),
):
    """
    Get current conditions and a 5-day forecast for a city.

    Upstream failures are answered as ``{"error": message}`` with a stable
    status code: 400, 401, 404, 500 or 502.
    """
    try:
        return await weather_service.get_weather_report(city)

    except WeatherServiceException as e:
        logger.warning(
            "Weather request failed",
            extra={
                "event": "api_error",
                "city": city,
                "status_code": e.status_code,
                "error_type": type(e).__name__,
                "request_id": getattr(request.state, "request_id", None),
            },
        )
        return JSONResponse(status_code=e.status_code, content={"error": e.message})


@router.get("/health", response_model=HealthResponse)
async def health_check(
    request: Request,
    weather_client: WeatherAPIClient = Depends(get_weather_client),
):
    """
    Health check endpoint that returns service status.
    """
    credential_status: CredentialStatus = "configured" if weather_client.is_configured else "missing"

    timer_status: TimerStatus
    dashboard = getattr(request.app.state, "dashboard", None)
    if dashboard is None:
        timer_status = "disabled"
    elif dashboard.timer.is_running:
        timer_status = "running"
    else:
        timer_status = "stopped"

    return HealthResponse(
        status="healthy" if credential_status == "configured" else "degraded",
        version=settings.app_version,
        timestamp=datetime.now(UTC).isoformat(),
        services={
            "openweathermap_credential": credential_status,
            "dashboard_refresh": timer_status,
        },
    )
