"""
This module defines data sources for the application.
"""

from enum import Enum
from typing import FrozenSet, Literal, Union


class UpstreamEndpoint(str, Enum):
    """OpenWeatherMap endpoints queried for one report."""

    CURRENT = "weather"
    FORECAST = "forecast"


class ErrorMessage(str, Enum):
    """User-facing error messages (Indonesian, matching ``weather_lang``)."""

    MISSING_API_KEY = "Server belum memiliki OPENWEATHER_API_KEY."
    CITY_REQUIRED = "Parameter city wajib diisi."
    CITY_NOT_FOUND = "Kota tidak ditemukan. Coba nama kota lain."
    INVALID_API_KEY = "API key OpenWeatherMap tidak valid."
    FETCH_FAILED = "Gagal mengambil data cuaca."
    UPSTREAM_DISRUPTION = "Terjadi gangguan saat mengambil data dari OpenWeatherMap."

    def __str__(self) -> str:
        return self.value


class DashboardMessage(str, Enum):
    """Texts shown by the dashboard view."""

    EMPTY_SEARCH = "Masukkan nama kota terlebih dahulu."
    EMPTY_CITY = "Nama kota tidak boleh kosong."
    LOAD_FAILED = "Terjadi kesalahan saat memuat data."
    WAITING = "Menunggu data cuaca terbaru..."

    def __str__(self) -> str:
        return self.value


Number = Union[int, float]
ServiceStatus = Literal["healthy", "degraded"]
CredentialStatus = Literal["configured", "missing"]
TimerStatus = Literal["running", "stopped", "disabled"]

PASSTHROUGH_STATUS_CODES: FrozenSet[int] = frozenset({400, 401, 404})
BAD_GATEWAY_STATUS = 502

DEFAULT_DESCRIPTION = "-"
DEFAULT_ICON = "01d"

# Provider offsets span UTC-12 to UTC+14; timestamps must stay inside
# datetime range after the offset is applied.
MAX_TIMEZONE_OFFSET = 14 * 3600
MAX_UNIX_SECONDS = 253402300799 - MAX_TIMEZONE_OFFSET

FORECAST_DAYS = 5
REPRESENTATIVE_HOUR = 12
