from __future__ import annotations

import asyncio
import logging
from contextlib import suppress
from datetime import datetime, timezone
from typing import Awaitable, Callable

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from hoststat.collectors.source import RawReadings, gather_readings
from hoststat.core.config import SAMPLE_CRON_SECOND
from hoststat.services.gate import check_cycle, missing_fields
from hoststat.services.normalizer import normalize
from hoststat.services.readiness import Readiness
from hoststat.storage.store import SampleStore

logger = logging.getLogger(__name__)


def build_trigger(second: str = SAMPLE_CRON_SECOND) -> CronTrigger:
    return CronTrigger(second=second, timezone=timezone.utc)


class SampleScheduler:
    """Runs one sampling cycle per cron tick once the store is ready.

    Ticks never wait for earlier cycles, so a slow cycle can overlap the next
    one; the store's connection pool is the only bound on concurrent writes.
    """

    def __init__(
        self,
        store: SampleStore,
        readiness: Readiness,
        *,
        source: Callable[[], Awaitable[RawReadings]] = gather_readings,
        trigger: CronTrigger | None = None,
    ) -> None:
        self._store = store
        self._readiness = readiness
        self._source = source
        self._trigger = trigger or build_trigger()
        self._scheduler: AsyncIOScheduler | None = None
        self._cycles: set[asyncio.Task[None]] = set()

    @property
    def in_flight(self) -> int:
        return len(self._cycles)

    def start(self) -> None:
        if self._scheduler is not None:
            return
        self._scheduler = AsyncIOScheduler(event_loop=asyncio.get_running_loop())
        self._scheduler.add_job(
            self._tick,
            self._trigger,
            id="sample-cycle",
            max_instances=1,
            coalesce=True,
        )
        self._scheduler.start()

    async def stop(self) -> None:
        if self._scheduler is not None:
            self._scheduler.shutdown(wait=False)
            self._scheduler = None
        cycles = list(self._cycles)
        for task in cycles:
            task.cancel()
        for task in cycles:
            with suppress(asyncio.CancelledError):
                await task

    async def _tick(self) -> None:
        if not self._readiness.is_ready:
            logger.debug("Database not ready, skipping tick")
            return
        task = asyncio.create_task(self._guarded_cycle(), name="sample-cycle")
        self._cycles.add(task)
        task.add_done_callback(self._cycles.discard)

    async def _guarded_cycle(self) -> None:
        try:
            await self.run_cycle()
        except Exception:
            logger.exception("Sampling cycle failed")

    async def run_cycle(self) -> bool:
        raw = await self._source()
        sample, snapshot = normalize(raw)

        checked = check_cycle(sample, snapshot)
        if checked is None:
            logger.info(
                "Skipping cycle, unmeasurable: %s",
                ", ".join(missing_fields(sample, snapshot)),
            )
            return False

        sample, snapshot = checked
        appended = await self._store.append_sample(sample)
        replaced = await self._store.replace_snapshot(snapshot)
        if appended and replaced:
            logger.info("Saved sample at %s", datetime.now(timezone.utc).isoformat())
        return True
