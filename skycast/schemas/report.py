"""
This module defines the weather report returned by the aggregator.
"""

from datetime import datetime
from typing import Tuple

from pydantic import BaseModel, Field

from skycast.definitions.data_sources import Number
from skycast.schemas.common import FrozenModel, WeatherSummary


class CurrentConditions(WeatherSummary):
    temp: Number = Field(..., description="Temperature in Celsius")
    feels_like: Number = Field(..., alias="feelsLike", description="Feels like temperature")
    humidity: Number = Field(..., description="Humidity percentage")
    wind_speed: Number = Field(..., alias="windSpeed", description="Wind speed in m/s")


class DailyForecastEntry(WeatherSummary):
    """
    One city-local day of the forecast.

    The description and icon come from the sample closest to local noon,
    the temperatures span every sample of the day.
    """

    date: str = Field(..., description="City-local date in YYYY-MM-DD format")
    temp_min: Number = Field(..., alias="tempMin", description="Lowest temperature of the day")
    temp_max: Number = Field(..., alias="tempMax", description="Highest temperature of the day")


class WeatherReport(FrozenModel):
    """
    Normalized document consumed by the dashboard.

    Built fresh for every request and never mutated afterwards.
    """

    city: str = Field(..., description="City name confirmed by the provider")
    country: str = Field("", description="ISO country code")
    updated_at: datetime = Field(..., alias="updatedAt", description="Assembly timestamp")
    current: CurrentConditions = Field(..., description="Current conditions")
    forecast: Tuple[DailyForecastEntry, ...] = Field(
        default_factory=tuple, description="Up to five upcoming days, soonest first"
    )


class ErrorResponse(BaseModel):
    error: str = Field(..., description="Error message")
