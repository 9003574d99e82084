"""
This module handles the dashboard's periodic refresh.
"""

import asyncio
from typing import Awaitable, Callable, Optional, Set

from skycast.utils.logger import setup_logger

logger = setup_logger(__name__)

RefreshCallback = Callable[[str], Awaitable[None]]


class RefreshTimer:
    """
    Fires a refresh callback for one city at a fixed interval.

    The timer is bound to a single city at a time. Arming it again (for
    instance after the active city changed) replaces the pending schedule.
    Each fired refresh runs as its own task, so cancelling or re-arming the
    timer never aborts a refresh that is already waiting on the network.
    """

    def __init__(self, interval: float, callback: RefreshCallback):
        self.interval = interval
        self.callback = callback
        self.city: Optional[str] = None
        self._task: Optional[asyncio.Task] = None
        self._inflight: Set[asyncio.Task] = set()

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def arm(self, city: str) -> None:
        """
        Start (or restart) the schedule for a city.

        Args:
            city: City refreshed on every tick
        """
        self.cancel()
        self.city = city
        self._task = asyncio.create_task(self._run(city))
        logger.debug(
            "Refresh timer armed",
            extra={"city": city, "event": "timer_armed", "interval": self.interval},
        )

    def cancel(self) -> None:
        """Stop the schedule; refreshes already fired keep running."""
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    async def shutdown(self) -> None:
        """Stop the schedule and every refresh still in flight."""
        task = self._task
        self.cancel()
        pending = [t for t in self._inflight if not t.done()]
        for inflight in pending:
            inflight.cancel()
        if task is not None:
            pending.append(task)
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
        self._inflight.clear()

    async def _run(self, city: str) -> None:
        try:
            while True:
                await asyncio.sleep(self.interval)
                refresh = asyncio.create_task(self._fire(city))
                self._inflight.add(refresh)
                refresh.add_done_callback(self._inflight.discard)
        except asyncio.CancelledError:
            logger.debug("Refresh timer cancelled", extra={"city": city, "event": "timer_cancelled"})
            raise

    async def _fire(self, city: str) -> None:
        try:
            await self.callback(city)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.error(
                "Scheduled refresh failed",
                extra={"city": city, "event": "refresh_error", "error": str(e)},
            )
