from __future__ import annotations

from typing import Any

from sqlalchemy import Connection, text

from hoststat.core.schemas import GraphSample

# (column, GraphSample field) in table order
GRAPH_COLUMNS: list[tuple[str, str]] = [
    ("time", "capture_time"),
    ("cpuLoad", "cpu_load_pct"),
    ("cpuProcessCount", "cpu_process_count"),
    ("ramUsed", "ram_used_mb"),
    ("ramUsedPercentage", "ram_used_pct"),
    ("swapUsed", "swap_used_mb"),
    ("swapUsedPercentage", "swap_used_pct"),
    ("diskReadSpeed", "disk_read_mbps"),
    ("diskWriteSpeed", "disk_write_mbps"),
    ("downloadSpeed", "download_mbps"),
    ("uploadSpeed", "upload_mbps"),
    ("pingGoogle", "ping_google_ms"),
    ("pingCloudflare", "ping_cloudflare_ms"),
    ("pingDiscord", "ping_discord_ms"),
]

_INSERT_SQL: str = "INSERT INTO graph ({}) VALUES ({})".format(
    ", ".join(col for col, _ in GRAPH_COLUMNS),
    ", ".join(f":{col}" for col, _ in GRAPH_COLUMNS),
)


def insert_graph_row(conn: Connection, sample: GraphSample, time_ms: float) -> None:
    params: dict[str, Any] = {col: getattr(sample, field) for col, field in GRAPH_COLUMNS}
    params["time"] = time_ms
    conn.execute(text(_INSERT_SQL), params)


def get_graph_history(conn: Connection, since_ms: float) -> list[dict[str, Any]]:
    rows = conn.execute(
        text("SELECT * FROM graph WHERE time >= :since ORDER BY time ASC"),
        {"since": since_ms},
    ).mappings()
    return [dict(r) for r in rows]


def count_graph_rows(conn: Connection) -> int:
    return int(conn.execute(text("SELECT COUNT(*) FROM graph")).scalar_one())
