from __future__ import annotations

import asyncio
from dataclasses import replace
from pathlib import Path

import pytest

from hoststat.collectors.source import RawReadings
from hoststat.storage.db import create_db_engine
from hoststat.storage.store import SampleStore

GIB = 1024**3
MIB = 1024**2


def make_readings(**overrides) -> RawReadings:
    base = RawReadings(
        captured_at_ms=1_700_000_000_000.0,
        cpu_clock_ghz=2.4,
        cpu_cores=8,
        cpu_load_pct=12.345,
        process_count=321,
        uptime_sec=3600.5,
        ram_total_bytes=8 * GIB,
        ram_used_bytes=4 * GIB,
        swap_total_bytes=2 * GIB,
        swap_used_bytes=512 * MIB,
        disk_size_bytes=100 * GIB,
        disk_used_bytes=50 * GIB,
        disk_used_pct=50.04,
        disk_read_bytes=30 * GIB,
        disk_write_bytes=10 * GIB,
        disk_read_per_sec=5 * MIB,
        disk_write_per_sec=1.5 * MIB,
        net_rx_bytes=4 * GIB,
        net_tx_bytes=1 * GIB,
        net_rx_per_sec=125000.0,
        net_tx_per_sec=65536.0,
        ping_google_ms=12.34,
        ping_cloudflare_ms=8.06,
        ping_discord_ms=25.0,
    )
    return replace(base, **overrides)


@pytest.fixture
def readings() -> RawReadings:
    return make_readings()


@pytest.fixture
def engine(tmp_path: Path):
    eng = create_db_engine(f"sqlite:///{tmp_path / 'hoststat.db'}")
    yield eng
    eng.dispose()


@pytest.fixture
def store(engine) -> SampleStore:
    return SampleStore(engine)


@pytest.fixture
def ready_store(store: SampleStore) -> SampleStore:
    asyncio.run(store.initialize())
    return store
