from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, Callable

from sqlalchemy import Connection, Engine

from hoststat.core.schemas import GraphSample, StatSnapshot
from hoststat.storage.db import init_db
from hoststat.storage.graph import count_graph_rows, get_graph_history, insert_graph_row
from hoststat.storage.stat import get_stat_row, update_stat_row

logger = logging.getLogger(__name__)


def _now_ms() -> float:
    return time.time() * 1000.0


class SampleStore:
    """The ``graph`` series table and the single-row ``stat`` table.

    Each operation checks one connection out of the engine's pool and runs in a
    worker thread; the context managers return the connection on every path.
    """

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    @property
    def engine(self) -> Engine:
        return self._engine

    def _initialize_sync(self) -> None:
        with self._engine.begin() as conn:
            init_db(conn)
        logger.info("Ensured database table existence")

    async def initialize(self) -> None:
        await asyncio.to_thread(self._initialize_sync)

    def _write(self, what: str, func: Callable[[Connection], None]) -> bool:
        try:
            with self._engine.begin() as conn:
                func(conn)
        except Exception:
            logger.exception("Failed to %s", what)
            return False
        return True

    async def append_sample(self, sample: GraphSample) -> bool:
        return await asyncio.to_thread(
            self._write, "append graph sample", lambda conn: insert_graph_row(conn, sample, _now_ms())
        )

    async def replace_snapshot(self, snapshot: StatSnapshot) -> bool:
        return await asyncio.to_thread(
            self._write, "replace stat row", lambda conn: update_stat_row(conn, snapshot, _now_ms())
        )

    def _read(self, func: Callable[[Connection], Any]) -> Any:
        with self._engine.connect() as conn:
            return func(conn)

    async def get_stat(self) -> dict[str, Any] | None:
        return await asyncio.to_thread(self._read, get_stat_row)

    async def get_history(self, since_ms: float = 0.0) -> list[dict[str, Any]]:
        return await asyncio.to_thread(self._read, lambda conn: get_graph_history(conn, since_ms))

    async def count_samples(self) -> int:
        return await asyncio.to_thread(self._read, count_graph_rows)
