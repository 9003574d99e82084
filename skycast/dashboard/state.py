from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from skycast.schemas.report import WeatherReport


@dataclass
class DashboardState:
    """
    Everything the dashboard page renders.

    Attributes:
        city_input: Text currently in the search box
        active_city: Last city confirmed by the aggregator, refreshed by the timer
        report: Latest successful report, kept when a later fetch fails
        is_loading: True while a manual (non-silent) fetch is running
        error_message: Text of the last failure, empty when none
        last_updated: ``updatedAt`` of the current report
    """

    city_input: str
    active_city: str
    report: Optional[WeatherReport] = None
    is_loading: bool = False
    error_message: str = ""
    last_updated: Optional[datetime] = None
