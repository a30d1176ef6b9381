from __future__ import annotations

from pydantic import BaseModel


class GraphSample(BaseModel):
    """One point of the time series, written once per successful cycle."""

    capture_time: float | None = None
    cpu_load_pct: float | None = None
    cpu_process_count: int | None = None
    ram_used_mb: int | None = None
    ram_used_pct: float | None = None
    swap_used_mb: int | None = None
    swap_used_pct: float | None = None
    disk_read_mbps: float | None = None
    disk_write_mbps: float | None = None
    download_mbps: float | None = None
    upload_mbps: float | None = None
    ping_google_ms: float | None = None
    ping_cloudflare_ms: float | None = None
    ping_discord_ms: float | None = None


class StatSnapshot(BaseModel):
    """Current totals and static host facts; the store keeps a single row of these."""

    capture_time: float | None = None
    cpu_clock_ghz: float | None = None
    cpu_cores: int | None = None
    uptime_sec: float | None = None
    ram_total_mb: int | None = None
    swap_total_mb: int | None = None
    disk_size_gb: float | None = None
    disk_read_total_gb: int | None = None
    disk_write_total_gb: int | None = None
    disk_used_gb: float | None = None
    disk_used_pct: float | None = None
    download_total_gb: int | None = None
    upload_total_gb: int | None = None
