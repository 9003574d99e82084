"""
Presentation helpers used by the dashboard template.

Dates are written in Indonesian to match the provider locale the
aggregator requests (``lang=id``).
"""

import math
from datetime import date, datetime, UTC
from typing import Optional, Union
from zoneinfo import ZoneInfo

from skycast.config import get_settings
from skycast.definitions.data_sources import DashboardMessage

settings = get_settings()

WEEKDAYS = ("Senin", "Selasa", "Rabu", "Kamis", "Jumat", "Sabtu", "Minggu")
WEEKDAYS_SHORT = ("Sen", "Sel", "Rab", "Kam", "Jum", "Sab", "Min")
MONTHS = (
    "Januari", "Februari", "Maret", "April", "Mei", "Juni",
    "Juli", "Agustus", "September", "Oktober", "November", "Desember",
)
MONTHS_SHORT = (
    "Jan", "Feb", "Mar", "Apr", "Mei", "Jun",
    "Jul", "Agu", "Sep", "Okt", "Nov", "Des",
)


def round_temperature(value: Union[int, float]) -> int:
    """Round to the nearest whole degree, halves going up (-2.5 -> -2)."""
    return math.floor(value + 0.5)


def capitalize_text(text: Optional[str]) -> str:
    if not text:
        return "-"
    return text[0].upper() + text[1:]


def build_icon_url(icon_code: str) -> str:
    return settings.openweather_icon_url.format(icon=icon_code)


def format_date_time(value: datetime, timezone: Optional[str] = None) -> str:
    """
    Format a timestamp as e.g. 'Senin, 19 Oktober 2026 pukul 14.05'.

    Args:
        value: Aware timestamp (naive values are taken as UTC)
        timezone: IANA zone to display in, ``settings.display_timezone`` by default
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    local = value.astimezone(ZoneInfo(timezone or settings.display_timezone))
    return (
        f"{WEEKDAYS[local.weekday()]}, {local.day} {MONTHS[local.month - 1]} "
        f"{local.year} pukul {local.hour:02d}.{local.minute:02d}"
    )


def format_forecast_date(date_key: str) -> str:
    """Format a YYYY-MM-DD key as e.g. 'Sel, 20 Okt'."""
    day = date.fromisoformat(date_key)
    return f"{WEEKDAYS_SHORT[day.weekday()]}, {day.day} {MONTHS_SHORT[day.month - 1]}"


def updated_label(last_updated: Optional[datetime]) -> str:
    if last_updated is None:
        return DashboardMessage.WAITING.value
    return f"Terakhir diperbarui: {format_date_time(last_updated)}"
