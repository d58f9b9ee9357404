"""Periodic refresh of match data with single-flight coalescing."""

import asyncio
import dataclasses
import logging

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from config.constants import (
    ERROR_REFRESH_FAILED,
    REFRESH_INTERVAL_SECONDS,
    REFRESH_JOB_ID,
    TIMEZONE,
)
from core.cricket.models import MatchDetail, RefreshState
from core.cricket.repository import MatchRepository

logger = logging.getLogger(__name__)


class RefreshScheduler:
    """Keeps a RefreshState current by polling the repository.

    Refreshes once on start and then every ``interval`` seconds. At most one
    refresh is in flight at a time: a manual or scheduled request made while
    one is running joins it instead of issuing new requests.

    After ``stop()`` no scheduled refresh fires, and a refresh that was
    already in flight completes without its result being applied.
    """

    def __init__(
        self,
        repository: MatchRepository,
        interval: float = REFRESH_INTERVAL_SECONDS,
        scheduler: AsyncIOScheduler | None = None,
    ):
        """Initialize the refresh scheduler.

        Args:
            repository: Repository to refresh from.
            interval: Seconds between scheduled refreshes.
            scheduler: Shared APScheduler instance. When omitted, the
                refresher creates its own scheduler on every start and shuts
                it down on stop.
        """
        self.repository = repository
        self.interval = interval
        self._owns_scheduler = scheduler is None
        self._scheduler = scheduler
        self._state = RefreshState()
        self._task: asyncio.Task | None = None
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    @property
    def refreshing(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def state(self) -> RefreshState:
        """Current state; ``loading`` is True while a refresh is in flight."""
        return dataclasses.replace(self._state, loading=self.refreshing)

    def start(self) -> asyncio.Task | None:
        """Refresh immediately and schedule periodic refreshes.

        Must be called from within a running event loop.

        Returns:
            Task of the immediate refresh.
        """
        if self._running:
            logger.debug("Refresh scheduler already running")
            return self._task

        self._running = True
        if self._owns_scheduler:
            # shutdown() of the previous scheduler may still be pending
            self._scheduler = AsyncIOScheduler(timezone=TIMEZONE)
        self._scheduler.add_job(
            self._scheduled_refresh,
            IntervalTrigger(seconds=self.interval, timezone=TIMEZONE),
            id=REFRESH_JOB_ID,
            max_instances=1,
            coalesce=True,
            replace_existing=True,
        )
        if not self._scheduler.running:
            self._scheduler.start()

        logger.info(f"Refresh scheduler started, interval {self.interval}s")
        return self.refresh_now()

    def stop(self) -> None:
        """Cancel future refreshes and discard any in-flight result."""
        if not self._running:
            return

        self._running = False
        if self._owns_scheduler:
            self._scheduler.shutdown(wait=False)
        elif self._scheduler.get_job(REFRESH_JOB_ID) is not None:
            self._scheduler.remove_job(REFRESH_JOB_ID)

        logger.info("Refresh scheduler stopped")

    def refresh_now(self) -> asyncio.Task | None:
        """Start a refresh unless one is already in flight.

        Returns:
            Task of the in-flight refresh (an existing one when coalesced),
            or None when the scheduler is stopped.
        """
        if not self._running:
            logger.warning("Refresh requested while scheduler is stopped")
            return None

        if self.refreshing:
            logger.info("Refresh already in progress, coalescing request")
            return self._task

        self._task = asyncio.get_running_loop().create_task(self._refresh())
        return self._task

    async def _scheduled_refresh(self) -> None:
        task = self.refresh_now()
        if task is not None:
            await task

    async def _refresh(self) -> None:
        logger.debug("Refresh cycle started")
        try:
            state = await self.repository.refresh_all()
        except Exception as e:
            logger.error(f"Refresh cycle failed: {e}", exc_info=True)
            state = dataclasses.replace(
                self._state, loading=False, error=ERROR_REFRESH_FAILED
            )

        if not self._running:
            logger.info("Discarding refresh result after stop")
            return

        self._state = state
        logger.info(
            f"Refresh cycle finished: {len(state.live)} live, "
            f"{len(state.upcoming)} upcoming, {len(state.past)} past"
        )

    async def fetch_detail(self, match_id: str) -> MatchDetail:
        """Fetch detail for a live match, independent of the refresh cycle.

        Raises:
            DetailFetchError: If the detail cannot be fetched.
        """
        return await self.repository.fetch_detail(match_id)
