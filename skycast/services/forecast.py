"""
This module turns 3-hourly forecast samples into daily summaries.

All calendar arithmetic happens in the queried city's local time: a UTC
timestamp is shifted by the city's offset before its date or hour is read,
so day boundaries follow the city rather than the server.
"""

from datetime import datetime, UTC
from typing import Dict, List, Sequence

from skycast.definitions.data_sources import FORECAST_DAYS, REPRESENTATIVE_HOUR
from skycast.models.weather import ForecastSample
from skycast.schemas.report import DailyForecastEntry


def _to_city_time(unix_seconds: int, timezone_offset: int) -> datetime:
    return datetime.fromtimestamp(unix_seconds + timezone_offset, tz=UTC)


def city_date_key(unix_seconds: int, timezone_offset: int) -> str:
    """Return the city-local date of a timestamp as YYYY-MM-DD."""
    return _to_city_time(unix_seconds, timezone_offset).strftime("%Y-%m-%d")


def city_hour(unix_seconds: int, timezone_offset: int) -> int:
    """Return the city-local hour (0-23) of a timestamp."""
    return _to_city_time(unix_seconds, timezone_offset).hour


def pick_representative(
    samples: Sequence[ForecastSample], timezone_offset: int
) -> ForecastSample:
    """
    Pick the sample whose local hour is closest to noon.

    The running best is only replaced on a strictly smaller distance, so
    on a tie the sample seen first wins.

    Args:
        samples: Non-empty samples of a single local day, in input order
        timezone_offset: City offset from UTC in seconds

    Returns:
        The representative sample
    """
    closest = samples[0]
    closest_distance = abs(city_hour(closest.dt, timezone_offset) - REPRESENTATIVE_HOUR)

    for sample in samples[1:]:
        distance = abs(city_hour(sample.dt, timezone_offset) - REPRESENTATIVE_HOUR)
        if distance < closest_distance:
            closest, closest_distance = sample, distance

    return closest


def bucket_daily_forecast(
    samples: Sequence[ForecastSample],
    timezone_offset: int,
    now_unix: int,
    max_days: int = FORECAST_DAYS,
) -> List[DailyForecastEntry]:
    """
    Group forecast samples into at most ``max_days`` daily entries.

    Samples falling on the city's current date or earlier are dropped, the
    remaining ones are grouped by local date and the earliest dates kept.

    Args:
        samples: 3-hourly samples in provider order
        timezone_offset: City offset from UTC in seconds
        now_unix: Observation time of the current conditions
        max_days: Maximum number of days returned

    Returns:
        Daily entries with strictly increasing dates
    """
    today = city_date_key(now_unix, timezone_offset)
    grouped: Dict[str, List[ForecastSample]] = {}

    for sample in samples:
        date_key = city_date_key(sample.dt, timezone_offset)
        if date_key <= today:
            continue
        grouped.setdefault(date_key, []).append(sample)

    entries = []
    for date_key in sorted(grouped)[:max_days]:
        day_samples = grouped[date_key]
        representative = pick_representative(day_samples, timezone_offset)
        entries.append(
            DailyForecastEntry(
                date=date_key,
                temp_min=min(sample.main.temp_min for sample in day_samples),
                temp_max=max(sample.main.temp_max for sample in day_samples),
                description=representative.description,
                icon=representative.icon,
            )
        )

    return entries
