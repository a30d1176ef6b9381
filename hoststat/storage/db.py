from __future__ import annotations

from sqlalchemy import URL, Connection, Engine, create_engine, text

from hoststat.core.config import (
    DB_DATABASE,
    DB_DRIVER,
    DB_HOST,
    DB_PASSWORD,
    DB_POOL_SIZE,
    DB_URL,
    DB_USER,
)
from hoststat.storage.stat import STAT_COLUMNS

GRAPH_DDL: str = """
CREATE TABLE IF NOT EXISTS graph (
    time double,
    cpuLoad float,
    cpuProcessCount int,
    ramUsed int,
    ramUsedPercentage float,
    swapUsed int,
    swapUsedPercentage float,
    diskReadSpeed float,
    diskWriteSpeed float,
    downloadSpeed float,
    uploadSpeed float,
    pingGoogle float,
    pingCloudflare float,
    pingDiscord float
)
"""

STAT_DDL: str = """
CREATE TABLE IF NOT EXISTS stat (
    time double,
    cpuClock float,
    cpuCores int,
    uptime double,
    ramTotal int,
    swapTotal int,
    diskSize float,
    diskReadTotal int,
    diskWriteTotal int,
    diskUsed float,
    diskUsedPercentage float,
    downloadTotal int,
    uploadTotal int
)
"""


def database_url() -> str | URL:
    if DB_URL:
        return DB_URL
    return URL.create(
        DB_DRIVER,
        username=DB_USER,
        password=DB_PASSWORD,
        host=DB_HOST,
        database=DB_DATABASE,
    )


def create_db_engine(url: str | URL | None = None, pool_size: int = DB_POOL_SIZE) -> Engine:
    return create_engine(
        url if url is not None else database_url(),
        pool_size=pool_size,
        max_overflow=0,
        pool_pre_ping=True,
    )


def init_db(conn: Connection) -> None:
    """Create both tables and leave ``stat`` holding exactly one all-NULL row."""
    conn.execute(text(GRAPH_DDL))
    conn.execute(text(STAT_DDL))
    conn.execute(text("DELETE FROM stat"))
    placeholders = ", ".join(["NULL"] * len(STAT_COLUMNS))
    conn.execute(text(f"INSERT INTO stat VALUES ({placeholders})"))
