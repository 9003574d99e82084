"""
This module drives the dashboard: searches, fetches and timed refreshes.
"""

import asyncio
from typing import Optional

import httpx
from pydantic import ValidationError as PydanticValidationError

from skycast.background.auto_refresh import RefreshTimer
from skycast.config import get_settings
from skycast.dashboard.state import DashboardState
from skycast.definitions.data_sources import DashboardMessage, ErrorMessage
from skycast.schemas.report import WeatherReport
from skycast.utils.logger import setup_logger

logger = setup_logger(__name__)
settings = get_settings()

WEATHER_PATH = "/api/weather"


class DashboardFetchError(Exception):
    """Raised when the aggregator answers with a non-success status."""


class DashboardController:
    """
    Owns the dashboard state and talks to the aggregator over HTTP.

    Manual searches and timed refreshes share ``fetch_weather``; a silent
    fetch leaves ``is_loading`` alone. Concurrent fetches are not
    de-duplicated, the response that lands last wins.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        default_city: Optional[str] = None,
        refresh_interval: Optional[float] = None,
    ):
        self.http_client = http_client
        self.default_city = default_city or settings.default_city
        self.state = DashboardState(
            city_input=self.default_city, active_city=self.default_city
        )
        self.timer = RefreshTimer(
            refresh_interval if refresh_interval is not None else settings.auto_refresh_interval,
            self._silent_refresh,
        )
        self._initial_fetch: Optional[asyncio.Task] = None

    async def start(self) -> None:
        """
        Mount the dashboard: load the default city and arm the timer.

        The first fetch runs in the background so startup is not blocked
        on the provider.
        """
        self._initial_fetch = asyncio.create_task(self.fetch_weather(self.default_city))
        self.timer.arm(self.state.active_city)
        logger.info(
            "Dashboard started",
            extra={"city": self.default_city, "event": "dashboard_started"},
        )

    async def stop(self) -> None:
        """Tear the dashboard down, cancelling the timer and pending fetches."""
        if self._initial_fetch is not None and not self._initial_fetch.done():
            self._initial_fetch.cancel()
            await asyncio.gather(self._initial_fetch, return_exceptions=True)
        await self.timer.shutdown()
        logger.info("Dashboard stopped", extra={"event": "dashboard_stopped"})

    async def search(self, city_input: str) -> None:
        """
        Handle a search form submission.

        Args:
            city_input: Raw text typed by the user
        """
        self.state.city_input = city_input
        city = city_input.strip()
        if not city:
            self.state.error_message = DashboardMessage.EMPTY_SEARCH.value
            return

        await self.fetch_weather(city)

    async def fetch_weather(self, city: str, silent: bool = False) -> None:
        """
        Fetch a report for a city and fold the outcome into the state.

        A failure only sets ``error_message``; the previous report stays.

        Args:
            city: City name sent to the aggregator
            silent: Leave the loading indicator untouched
        """
        if not city:
            self.state.error_message = DashboardMessage.EMPTY_CITY.value
            return

        if not silent:
            self.state.is_loading = True

        self.state.error_message = ""

        try:
            response = await self.http_client.get(
                WEATHER_PATH,
                params={"city": city},
                headers={"Cache-Control": "no-store"},
            )
            payload = response.json()

            if not response.is_success:
                error = payload.get("error") if isinstance(payload, dict) else None
                raise DashboardFetchError(error or ErrorMessage.FETCH_FAILED.value)

            report = WeatherReport.model_validate(payload)

            self.state.report = report
            self._set_active_city(report.city)
            self.state.last_updated = report.updated_at
        except DashboardFetchError as e:
            self.state.error_message = str(e)
            logger.warning(
                "Dashboard fetch rejected",
                extra={"city": city, "event": "dashboard_fetch_failed", "silent": silent},
            )
        except (httpx.HTTPError, PydanticValidationError, ValueError) as e:
            self.state.error_message = DashboardMessage.LOAD_FAILED.value
            logger.error(
                "Dashboard fetch errored",
                extra={
                    "city": city,
                    "event": "dashboard_fetch_error",
                    "silent": silent,
                    "error_type": type(e).__name__,
                },
            )
        finally:
            if not silent:
                self.state.is_loading = False

    def _set_active_city(self, city: str) -> None:
        if city == self.state.active_city:
            return
        self.state.active_city = city
        self.timer.arm(city)

    async def _silent_refresh(self, city: str) -> None:
        await self.fetch_weather(city, silent=True)
