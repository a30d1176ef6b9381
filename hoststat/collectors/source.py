from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass
from typing import Any, Callable

from hoststat.collectors.cpu import collect_cpu_info, collect_cpu_load, collect_process_count, collect_uptime
from hoststat.collectors.disk import collect_disk_io, collect_fs_size
from hoststat.collectors.memory import collect_memory
from hoststat.collectors.network import collect_network
from hoststat.collectors.network_quality import ping_latency_ms
from hoststat.core.config import PING_TARGETS, PING_TIMEOUT_MS


@dataclass(frozen=True, slots=True)
class RawReadings:
    """Unconverted host readings from one gather; any field may be None."""

    captured_at_ms: float
    cpu_clock_ghz: float | None = None
    cpu_cores: int | None = None
    cpu_load_pct: float | None = None
    process_count: int | None = None
    uptime_sec: float | None = None
    ram_total_bytes: int | None = None
    ram_used_bytes: int | None = None
    swap_total_bytes: int | None = None
    swap_used_bytes: int | None = None
    disk_size_bytes: int | None = None
    disk_used_bytes: int | None = None
    disk_used_pct: float | None = None
    disk_read_bytes: int | None = None
    disk_write_bytes: int | None = None
    disk_read_per_sec: float | None = None
    disk_write_per_sec: float | None = None
    net_rx_bytes: int | None = None
    net_tx_bytes: int | None = None
    net_rx_per_sec: float | None = None
    net_tx_per_sec: float | None = None
    ping_google_ms: float | None = None
    ping_cloudflare_ms: float | None = None
    ping_discord_ms: float | None = None


def _probe(host: str) -> Callable[[], float | None]:
    return lambda: ping_latency_ms(host, PING_TIMEOUT_MS)


async def gather_readings() -> RawReadings:
    captured_at_ms = time.time() * 1000.0

    reads: dict[str, Callable[[], Any]] = {
        "cpu": collect_cpu_info,
        "load": collect_cpu_load,
        "processes": collect_process_count,
        "uptime": collect_uptime,
        "memory": collect_memory,
        "fs": collect_fs_size,
        "disk_io": collect_disk_io,
        "network": collect_network,
    }
    for name, host in PING_TARGETS.items():
        reads[f"ping_{name}"] = _probe(host)

    results = await asyncio.gather(*(asyncio.to_thread(func) for func in reads.values()))
    r: dict[str, Any] = dict(zip(reads.keys(), results))

    return RawReadings(
        captured_at_ms=captured_at_ms,
        cpu_clock_ghz=r["cpu"]["clock_ghz"],
        cpu_cores=r["cpu"]["cores"],
        cpu_load_pct=r["load"]["percent"],
        process_count=r["processes"]["count"],
        uptime_sec=r["uptime"]["uptime_sec"],
        ram_total_bytes=r["memory"]["total_bytes"],
        ram_used_bytes=r["memory"]["used_bytes"],
        swap_total_bytes=r["memory"]["swap_total_bytes"],
        swap_used_bytes=r["memory"]["swap_used_bytes"],
        disk_size_bytes=r["fs"]["size_bytes"],
        disk_used_bytes=r["fs"]["used_bytes"],
        disk_used_pct=r["fs"]["percent"],
        disk_read_bytes=r["disk_io"]["read_bytes"],
        disk_write_bytes=r["disk_io"]["write_bytes"],
        disk_read_per_sec=r["disk_io"]["read_per_sec"],
        disk_write_per_sec=r["disk_io"]["write_per_sec"],
        net_rx_bytes=r["network"]["bytes_recv"],
        net_tx_bytes=r["network"]["bytes_sent"],
        net_rx_per_sec=r["network"]["bytes_recv_per_sec"],
        net_tx_per_sec=r["network"]["bytes_sent_per_sec"],
        ping_google_ms=r.get("ping_google"),
        ping_cloudflare_ms=r.get("ping_cloudflare"),
        ping_discord_ms=r.get("ping_discord"),
    )
