"""
Scheduled refresh of a provider's booking list.

The dashboards re-fetched bookings every 15-30 seconds and re-ran the
evaluators against the fresh list. This poller owns that loop so the
evaluators stay pure: callers read ``poller.snapshot`` and pass it in.

Usage:
    poller = BookingPoller(fetch=api.get_provider_bookings)
    stop = asyncio.Event()
    task = asyncio.create_task(poller.run(stop))
    ...
    busy = is_slot_busy(poller.snapshot, candidate)
"""

import asyncio
import logging
from collections.abc import Awaitable, Iterable
from typing import Any, Callable, Optional

from carebook.config import settings
from carebook.scheduling.overlap import BookingLike, iter_bookings
from carebook.schemas.booking_schema import Booking

logger = logging.getLogger(__name__)

FetchBookings = Callable[[], Awaitable[Iterable[BookingLike]]]
UpdateCallback = Callable[[list[Booking]], Any]


class BookingPoller:
    """Keeps the latest booking snapshot fetched from the bookings API."""

    def __init__(
        self,
        fetch: FetchBookings,
        interval_seconds: Optional[float] = None,
        on_update: Optional[UpdateCallback] = None,
    ) -> None:
        interval = interval_seconds
        if interval is None:
            interval = settings.polling.interval_seconds
        if interval <= 0:
            raise ValueError(f"interval_seconds must be > 0, got {interval}")
        self._fetch = fetch
        self._on_update = on_update
        self.interval_seconds = interval
        self._snapshot: list[Booking] = []
        self.refresh_count = 0
        self.failure_count = 0

    @property
    def snapshot(self) -> list[Booking]:
        """Copy of the most recent successfully fetched bookings."""
        return list(self._snapshot)

    async def refresh(self) -> bool:
        """Fetch once. On failure the previous snapshot is kept."""
        try:
            records = await self._fetch()
        except asyncio.CancelledError:
            raise
        except Exception:
            self.failure_count += 1
            logger.exception("Booking refresh failed; keeping previous snapshot")
            return False

        if not isinstance(records, (list, tuple)):
            self.failure_count += 1
            logger.warning(
                "Booking refresh returned %s instead of a list; keeping previous snapshot",
                type(records).__name__,
            )
            return False

        self._snapshot = list(iter_bookings(records))
        self.refresh_count += 1
        logger.debug("Booking snapshot refreshed: %d record(s)", len(self._snapshot))

        if self._on_update is not None:
            result = self._on_update(self.snapshot)
            if asyncio.iscoroutine(result):
                await result
        return True

    async def run(self, stop_event: asyncio.Event) -> None:
        """Refresh immediately, then every interval until ``stop_event`` is set."""
        logger.info("Booking poller started (every %.0fs)", self.interval_seconds)
        while not stop_event.is_set():
            await self.refresh()
            try:
                await asyncio.wait_for(stop_event.wait(), timeout=self.interval_seconds)
            except asyncio.TimeoutError:
                continue
        logger.info("Booking poller stopped after %d refresh(es)", self.refresh_count)
