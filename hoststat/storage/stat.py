from __future__ import annotations

from typing import Any

from sqlalchemy import Connection, text

from hoststat.core.schemas import StatSnapshot

# (column, StatSnapshot field) in table order
STAT_COLUMNS: list[tuple[str, str]] = [
    ("time", "capture_time"),
    ("cpuClock", "cpu_clock_ghz"),
    ("cpuCores", "cpu_cores"),
    ("uptime", "uptime_sec"),
    ("ramTotal", "ram_total_mb"),
    ("swapTotal", "swap_total_mb"),
    ("diskSize", "disk_size_gb"),
    ("diskReadTotal", "disk_read_total_gb"),
    ("diskWriteTotal", "disk_write_total_gb"),
    ("diskUsed", "disk_used_gb"),
    ("diskUsedPercentage", "disk_used_pct"),
    ("downloadTotal", "download_total_gb"),
    ("uploadTotal", "upload_total_gb"),
]

# the table only ever holds one row, so no WHERE clause
_UPDATE_SQL: str = "UPDATE stat SET {}".format(
    ", ".join(f"{col} = :{col}" for col, _ in STAT_COLUMNS)
)


def update_stat_row(conn: Connection, snapshot: StatSnapshot, time_ms: float) -> None:
    params: dict[str, Any] = {col: getattr(snapshot, field) for col, field in STAT_COLUMNS}
    params["time"] = time_ms
    conn.execute(text(_UPDATE_SQL), params)


def get_stat_row(conn: Connection) -> dict[str, Any] | None:
    row = conn.execute(text("SELECT * FROM stat")).mappings().first()
    return dict(row) if row else None


def count_stat_rows(conn: Connection) -> int:
    return int(conn.execute(text("SELECT COUNT(*) FROM stat")).scalar_one())
