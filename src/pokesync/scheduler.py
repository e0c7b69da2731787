"""Periodic trigger for sync cycles backed by APScheduler."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Final

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger

from pokesync.config.errors import ConfigurationError
from pokesync.config.sync import DEFAULT_SYNC_CRON
from pokesync.domain.errors import SyncAlreadyRunning, SyncFailed

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import datetime

    from apscheduler.job import Job
    from apscheduler.schedulers.base import BaseScheduler

    from pokesync.domain.synchronization import SyncCycleResult

log = logging.getLogger(__name__)

SYNC_JOB_ID: Final[str] = "pokesync-sync-cycle"


class SyncScheduler:
    """Fires ``trigger`` on a cron schedule in a background thread.

    A tick that fails is logged and left for the next scheduled run. Overlapping
    ticks are prevented by the job settings; a tick that still collides with a
    manually started cycle is skipped.
    """

    def __init__(
        self,
        trigger: Callable[[], SyncCycleResult],
        *,
        cron: str = DEFAULT_SYNC_CRON,
        scheduler: BaseScheduler | None = None,
    ) -> None:
        try:
            self._cron_trigger = CronTrigger.from_crontab(cron, timezone="UTC")
        except ValueError as exc:
            raise ConfigurationError(f"Invalid sync schedule {cron!r}: {exc}") from exc
        self._trigger = trigger
        self.cron = cron
        self._scheduler = scheduler or BackgroundScheduler(timezone="UTC")
        self._job: Job | None = None

    @property
    def running(self) -> bool:
        return bool(self._scheduler.running)

    @property
    def next_run_time(self) -> datetime | None:
        return self._job.next_run_time if self._job is not None else None

    def jobs(self) -> list[Job]:
        return self._scheduler.get_jobs()

    def start(self) -> None:
        if self.running:
            return
        self._job = self._scheduler.add_job(
            self.run_tick,
            trigger=self._cron_trigger,
            id=SYNC_JOB_ID,
            name="Synchronize Pokémon catalog",
            max_instances=1,
            coalesce=True,
            replace_existing=True,
        )
        self._scheduler.start()
        log.info("Sync scheduler started (cron=%r, next run at %s)", self.cron, self.next_run_time)

    def shutdown(self, *, wait: bool = True) -> None:
        if not self.running:
            return
        self._scheduler.shutdown(wait=wait)
        self._job = None
        log.info("Sync scheduler stopped")

    def run_tick(self) -> SyncCycleResult | None:
        """Run one scheduled cycle; failures are logged, never raised."""

        try:
            return self._trigger()
        except SyncAlreadyRunning:
            log.warning("Scheduled sync skipped: a cycle is already running")
        except SyncFailed:
            log.exception("Scheduled sync failed; waiting for the next tick")
        except Exception:
            log.exception("Unexpected error during scheduled sync")
        return None

    def trigger_now(self) -> SyncCycleResult:
        """Run a cycle right away in the calling thread, propagating failures."""

        log.info("Sync triggered manually")
        return self._trigger()
