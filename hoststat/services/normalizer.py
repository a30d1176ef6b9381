"""Unit conversion and rounding from raw readings to stored records.

Memory is reported in MB, disk sizes and disk I/O totals in GB, disk rates in
MB/s, network totals in Gb and network rates in Mb/s. Disk totals and rates use
different magnitudes, and only network values are converted to bits; dashboards
built against the existing tables expect exactly these units.
"""
from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal

from hoststat.collectors.source import RawReadings
from hoststat.core.schemas import GraphSample, StatSnapshot

MEGABYTE: int = 1024**2
GIGABYTE: int = 1024**3
BITS_PER_BYTE: int = 8


def round_half_away(value: float | None, ndigits: int = 1) -> float | None:
    """Round like a display formatter: 0.25 -> 0.3, -0.25 -> -0.3."""
    if value is None or not math.isfinite(value):
        return None
    quantum = Decimal(1).scaleb(-ndigits)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def round_int(value: float | None) -> int | None:
    rounded = round_half_away(value, 0)
    return None if rounded is None else int(rounded)


def _scale(value: float | None, divisor: int, factor: int = 1) -> float | None:
    if value is None:
        return None
    return value / divisor * factor


def percent(used: float | None, total: float | None) -> float | None:
    if used is None or total is None:
        return None
    if total == 0:
        # nothing configured, nothing used (typically a host without swap)
        return 0.0
    return round_half_away(used / total * 100)


def normalize(raw: RawReadings) -> tuple[GraphSample, StatSnapshot]:
    sample = GraphSample(
        capture_time=raw.captured_at_ms,
        cpu_load_pct=round_half_away(raw.cpu_load_pct),
        cpu_process_count=raw.process_count,
        ram_used_mb=round_int(_scale(raw.ram_used_bytes, MEGABYTE)),
        ram_used_pct=percent(raw.ram_used_bytes, raw.ram_total_bytes),
        swap_used_mb=round_int(_scale(raw.swap_used_bytes, MEGABYTE)),
        swap_used_pct=percent(raw.swap_used_bytes, raw.swap_total_bytes),
        disk_read_mbps=round_half_away(_scale(raw.disk_read_per_sec, MEGABYTE)),
        disk_write_mbps=round_half_away(_scale(raw.disk_write_per_sec, MEGABYTE)),
        download_mbps=round_half_away(_scale(raw.net_rx_per_sec, MEGABYTE, BITS_PER_BYTE)),
        upload_mbps=round_half_away(_scale(raw.net_tx_per_sec, MEGABYTE, BITS_PER_BYTE)),
        ping_google_ms=round_half_away(raw.ping_google_ms),
        ping_cloudflare_ms=round_half_away(raw.ping_cloudflare_ms),
        ping_discord_ms=round_half_away(raw.ping_discord_ms),
    )
    snapshot = StatSnapshot(
        capture_time=raw.captured_at_ms,
        cpu_clock_ghz=raw.cpu_clock_ghz,
        cpu_cores=raw.cpu_cores,
        uptime_sec=raw.uptime_sec,
        ram_total_mb=round_int(_scale(raw.ram_total_bytes, MEGABYTE)),
        swap_total_mb=round_int(_scale(raw.swap_total_bytes, MEGABYTE)),
        disk_size_gb=round_half_away(_scale(raw.disk_size_bytes, GIGABYTE)),
        disk_read_total_gb=round_int(_scale(raw.disk_read_bytes, GIGABYTE)),
        disk_write_total_gb=round_int(_scale(raw.disk_write_bytes, GIGABYTE)),
        disk_used_gb=round_half_away(_scale(raw.disk_used_bytes, GIGABYTE)),
        disk_used_pct=round_half_away(raw.disk_used_pct),
        download_total_gb=round_int(_scale(raw.net_rx_bytes, GIGABYTE, BITS_PER_BYTE)),
        upload_total_gb=round_int(_scale(raw.net_tx_bytes, GIGABYTE, BITS_PER_BYTE)),
    )
    return sample, snapshot
