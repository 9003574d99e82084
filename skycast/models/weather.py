"""
Models for the OpenWeatherMap payloads the aggregator consumes.

Only the fields the report needs are declared; everything else in the
provider's response is ignored. A payload missing a required field, or
carrying a timestamp that cannot be placed on a calendar, fails validation
and is treated as a malformed upstream response.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from skycast.definitions.data_sources import (
    DEFAULT_DESCRIPTION,
    DEFAULT_ICON,
    MAX_TIMEZONE_OFFSET,
    MAX_UNIX_SECONDS,
    Number,
)


class UpstreamCondition(BaseModel):
    description: Optional[str] = None
    icon: Optional[str] = None


class UpstreamMain(BaseModel):
    temp: Number = Field(..., description="Temperature in the requested units")
    feels_like: Number = Field(..., description="Perceived temperature")
    humidity: Number = Field(..., description="Humidity percentage")


class UpstreamForecastMain(BaseModel):
    temp_min: Number = Field(..., description="Minimum temperature of the sample")
    temp_max: Number = Field(..., description="Maximum temperature of the sample")


class UpstreamWind(BaseModel):
    speed: Number = Field(..., description="Wind speed in the requested units")


class UpstreamSys(BaseModel):
    country: Optional[str] = None


class WithConditions(BaseModel):
    weather: List[UpstreamCondition] = Field(default_factory=list)

    @property
    def description(self) -> str:
        condition = self.weather[0] if self.weather else None
        if condition is None or condition.description is None:
            return DEFAULT_DESCRIPTION
        return condition.description

    @property
    def icon(self) -> str:
        condition = self.weather[0] if self.weather else None
        if condition is None or condition.icon is None:
            return DEFAULT_ICON
        return condition.icon


class CurrentWeatherResponse(WithConditions):
    """Response of the ``/weather`` endpoint."""

    name: str = Field(..., description="City name as resolved by the provider")
    dt: Optional[int] = Field(
        None, ge=0, le=MAX_UNIX_SECONDS, description="Observation time, unix seconds"
    )
    timezone: Optional[int] = Field(
        None,
        ge=-MAX_TIMEZONE_OFFSET,
        le=MAX_TIMEZONE_OFFSET,
        description="Offset from UTC in seconds",
    )
    main: UpstreamMain
    wind: UpstreamWind
    sys: Optional[UpstreamSys] = None

    @property
    def country(self) -> str:
        if self.sys is None or self.sys.country is None:
            return ""
        return self.sys.country


class ForecastSample(WithConditions):
    """One 3-hourly entry of the ``/forecast`` endpoint."""

    dt: int = Field(..., ge=0, le=MAX_UNIX_SECONDS, description="Forecast time, unix seconds")
    main: UpstreamForecastMain


class ForecastResponse(BaseModel):
    """Response of the ``/forecast`` endpoint."""

    samples: Optional[List[ForecastSample]] = Field(None, alias="list")


class UpstreamErrorPayload(BaseModel):
    message: Optional[str] = None
