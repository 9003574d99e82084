"""
This module provides the forecast aggregator.
"""

import asyncio
import time
from datetime import datetime, UTC
from typing import Optional

from pydantic import ValidationError as PydanticValidationError

from skycast.definitions.data_sources import UpstreamEndpoint
from skycast.exceptions import (
    ConfigurationError,
    UpstreamTransportError,
    ValidationError,
)
from skycast.models.weather import CurrentWeatherResponse, ForecastResponse
from skycast.schemas.report import CurrentConditions, WeatherReport
from skycast.services.external_api import WeatherAPIClient
from skycast.services.forecast import bucket_daily_forecast
from skycast.utils.logger import setup_logger

logger = setup_logger(__name__)


class WeatherService:
    """
    Builds a WeatherReport for a city from two upstream calls.

    The service keeps no state between calls: every report is assembled
    from fresh upstream data and nothing is cached.
    """

    def __init__(self, weather_client: WeatherAPIClient):
        self.weather_client = weather_client

    @staticmethod
    def _normalize_city(city: Optional[str]) -> str:
        return (city or "").strip()

    async def get_weather_report(self, city: Optional[str]) -> WeatherReport:
        """
        Get the current conditions and daily forecast for a city.

        Raises:
            ConfigurationError: no upstream credential is configured
            ValidationError: the city is missing or blank
            UpstreamDomainError: the provider rejected the city or the key
            UpstreamTransportError: the provider failed or was unreachable
        """
        if not self.weather_client.is_configured:
            logger.error(
                "Upstream credential missing",
                extra={"event": "config_error", "setting": "OPENWEATHER_API_KEY"},
            )
            raise ConfigurationError()

        normalized_city = self._normalize_city(city)
        if not normalized_city:
            raise ValidationError()

        logger.info(
            "Fetching weather from provider",
            extra={"city": normalized_city, "event": "api_call", "api": "openweathermap"},
        )

        current_response, forecast_response = await asyncio.gather(
            self.weather_client.request(UpstreamEndpoint.CURRENT, normalized_city),
            self.weather_client.request(UpstreamEndpoint.FORECAST, normalized_city),
        )

        self.weather_client.raise_for_status(
            UpstreamEndpoint.CURRENT, normalized_city, current_response
        )
        self.weather_client.raise_for_status(
            UpstreamEndpoint.FORECAST, normalized_city, forecast_response
        )

        current_payload = self.weather_client.decode(
            UpstreamEndpoint.CURRENT, normalized_city, current_response
        )
        forecast_payload = self.weather_client.decode(
            UpstreamEndpoint.FORECAST, normalized_city, forecast_response
        )

        try:
            current = CurrentWeatherResponse(**current_payload)
            forecast = ForecastResponse(**forecast_payload)
        except PydanticValidationError as e:
            logger.error(
                "Weather provider payload did not match the expected shape",
                extra={
                    "city": normalized_city,
                    "event": "upstream_malformed",
                    "error_count": e.error_count(),
                },
            )
            raise UpstreamTransportError() from e

        report = self._build_report(current, forecast)
        logger.info(
            "Weather report assembled",
            extra={
                "city": report.city,
                "event": "report_built",
                "forecast_days": len(report.forecast),
            },
        )
        return report

    @staticmethod
    def _build_report(
        current: CurrentWeatherResponse, forecast: ForecastResponse
    ) -> WeatherReport:
        """
        Reshape both provider payloads into a WeatherReport.
        """
        timezone_offset = current.timezone if current.timezone is not None else 0
        now_unix = current.dt if current.dt is not None else int(time.time())

        return WeatherReport(
            city=current.name,
            country=current.country,
            updated_at=datetime.now(UTC),
            current=CurrentConditions(
                temp=current.main.temp,
                feels_like=current.main.feels_like,
                humidity=current.main.humidity,
                wind_speed=current.wind.speed,
                description=current.description,
                icon=current.icon,
            ),
            forecast=tuple(
                bucket_daily_forecast(forecast.samples or [], timezone_offset, now_unix)
            ),
        )
