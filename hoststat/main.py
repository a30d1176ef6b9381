from __future__ import annotations

import asyncio
import logging
import signal
from contextlib import suppress

from hoststat.core.config import APP_NAME
from hoststat.core.logging import setup_logging
from hoststat.services.readiness import Readiness
from hoststat.services.scheduler import SampleScheduler
from hoststat.storage.db import create_db_engine
from hoststat.storage.store import SampleStore

logger = logging.getLogger(__name__)


async def run() -> int:
    engine = create_db_engine()
    store = SampleStore(engine)
    readiness = Readiness()

    scheduler = SampleScheduler(store, readiness)
    scheduler.start()

    stop = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGTERM, signal.SIGINT):
        with suppress(NotImplementedError):
            loop.add_signal_handler(sig, stop.set)

    try:
        try:
            await store.initialize()
        except Exception:
            logger.exception("Could not prepare database tables, exiting")
            return 1
        readiness.mark_ready()
        logger.info("%s started", APP_NAME)

        await stop.wait()
        logger.info("%s stopped", APP_NAME)
        return 0
    finally:
        await scheduler.stop()
        engine.dispose()


def main() -> None:
    setup_logging()
    raise SystemExit(asyncio.run(run()))


if __name__ == "__main__":
    main()
