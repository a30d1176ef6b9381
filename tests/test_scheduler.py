"""Tests for readiness gating, the sampling cycle and the cron cadence."""

import asyncio
import logging
from datetime import datetime, timezone

import pytest

from conftest import make_readings
from hoststat.services.readiness import Readiness, ReadinessState
from hoststat.services.scheduler import SampleScheduler, build_trigger


class RecordingStore:
    def __init__(self) -> None:
        self.appended = []
        self.replaced = []

    async def append_sample(self, sample) -> bool:
        self.appended.append(sample)
        return True

    async def replace_snapshot(self, snapshot) -> bool:
        self.replaced.append(snapshot)
        return True


def _source(*readings):
    queue = list(readings)

    async def next_readings():
        return queue.pop(0)

    return next_readings


# ============================================================================
# Readiness
# ============================================================================

def test_readiness_starts_not_ready_and_flips_once():
    readiness = Readiness()
    assert readiness.state is ReadinessState.NOT_READY
    assert not readiness.is_ready

    readiness.mark_ready()
    assert readiness.is_ready

    with pytest.raises(RuntimeError):
        readiness.mark_ready()


# ============================================================================
# run_cycle()
# ============================================================================

def test_valid_cycle_writes_both_tables(caplog):
    store = RecordingStore()
    scheduler = SampleScheduler(store, Readiness(), source=_source(make_readings()))

    with caplog.at_level(logging.INFO, logger="hoststat.services.scheduler"):
        assert asyncio.run(scheduler.run_cycle()) is True
    assert "Saved sample at " in caplog.text
    assert len(store.appended) == 1
    assert len(store.replaced) == 1
    assert store.appended[0].ram_used_mb == 4096


def test_null_latency_skips_then_valid_cycle_writes(caplog):
    store = RecordingStore()
    scheduler = SampleScheduler(
        store,
        Readiness(),
        source=_source(make_readings(ping_google_ms=None), make_readings()),
    )

    with caplog.at_level(logging.INFO, logger="hoststat.services.scheduler"):
        assert asyncio.run(scheduler.run_cycle()) is False
    assert store.appended == []
    assert store.replaced == []
    assert "graph.ping_google_ms" in caplog.text

    assert asyncio.run(scheduler.run_cycle()) is True
    assert len(store.appended) == 1
    assert len(store.replaced) == 1


def test_end_to_end_with_database(ready_store):
    scheduler = SampleScheduler(
        ready_store,
        Readiness(),
        source=_source(make_readings(ping_discord_ms=None), make_readings()),
    )

    asyncio.run(scheduler.run_cycle())
    assert asyncio.run(ready_store.count_samples()) == 0
    assert asyncio.run(ready_store.get_stat())["time"] is None

    asyncio.run(scheduler.run_cycle())
    assert asyncio.run(ready_store.count_samples()) == 1
    stat = asyncio.run(ready_store.get_stat())
    assert stat["ramTotal"] == 8192
    assert stat["diskUsed"] == 50.0


# ============================================================================
# Ticks
# ============================================================================

def test_tick_before_ready_does_nothing():
    store = RecordingStore()
    scheduler = SampleScheduler(store, Readiness(), source=_source(make_readings()))

    async def tick() -> int:
        await scheduler._tick()
        return scheduler.in_flight

    assert asyncio.run(tick()) == 0
    assert store.appended == []


def test_tick_spawns_cycle_without_waiting():
    store = RecordingStore()
    readiness = Readiness()
    readiness.mark_ready()
    async def scenario() -> tuple[int, int]:
        gate = asyncio.Event()

        async def slow_source():
            await gate.wait()
            return make_readings()

        scheduler = SampleScheduler(store, readiness, source=slow_source)
        await scheduler._tick()
        await scheduler._tick()
        overlapping = scheduler.in_flight
        gate.set()
        while scheduler.in_flight:
            await asyncio.sleep(0)
        return overlapping, scheduler.in_flight

    overlapping, remaining = asyncio.run(scenario())
    assert overlapping == 2
    assert remaining == 0
    assert len(store.appended) == 2
    assert len(store.replaced) == 2


def test_failed_gather_is_contained(caplog):
    readiness = Readiness()
    readiness.mark_ready()

    async def broken_source():
        raise RuntimeError("sensor read failed")

    scheduler = SampleScheduler(RecordingStore(), readiness, source=broken_source)

    async def scenario() -> None:
        await scheduler._tick()
        while scheduler.in_flight:
            await asyncio.sleep(0)

    with caplog.at_level(logging.ERROR, logger="hoststat.services.scheduler"):
        asyncio.run(scenario())

    assert "Sampling cycle failed" in caplog.text
    assert "sensor read failed" in caplog.text


def test_start_and_stop_register_cron_job():
    scheduler = SampleScheduler(RecordingStore(), Readiness(), source=_source())

    async def scenario() -> int:
        scheduler.start()
        jobs = len(scheduler._scheduler.get_jobs())
        await scheduler.stop()
        return jobs

    assert asyncio.run(scenario()) == 1


# ============================================================================
# Cadence
# ============================================================================

@pytest.mark.parametrize(
    "now, expected_second, expected_minute",
    [
        (datetime(2026, 1, 1, 12, 0, 7, tzinfo=timezone.utc), 30, 0),
        (datetime(2026, 1, 1, 12, 0, 31, tzinfo=timezone.utc), 0, 1),
        (datetime(2026, 1, 1, 12, 0, 59, 900000, tzinfo=timezone.utc), 0, 1),
    ],
)
def test_trigger_fires_on_wall_clock_half_minutes(now, expected_second, expected_minute):
    fire = build_trigger().get_next_fire_time(None, now)
    assert fire.second == expected_second
    assert fire.minute == expected_minute
    assert fire.microsecond == 0
