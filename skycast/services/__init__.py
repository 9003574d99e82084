"""
Services package initialization.
"""

from skycast.services.external_api import WeatherAPIClient
from skycast.services.forecast import (
    bucket_daily_forecast,
    city_date_key,
    city_hour,
    pick_representative,
)
from skycast.services.weather_service import WeatherService

__all__ = [
    "WeatherAPIClient",
    "WeatherService",
    "bucket_daily_forecast",
    "city_date_key",
    "city_hour",
    "pick_representative",
]
