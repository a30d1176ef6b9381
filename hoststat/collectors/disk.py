from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass

import psutil

from hoststat.core.config import DISK_MOUNTPOINT

logger = logging.getLogger(__name__)

FALLBACK_MOUNTPOINT: str = "/"


@dataclass
class _IoSample:
    ts_monotonic: float
    read_bytes: int
    write_bytes: int


_last_io_sample: _IoSample | None = None
_io_lock = threading.Lock()


def collect_fs_size(mountpoint: str = DISK_MOUNTPOINT) -> dict[str, float | int]:
    try:
        usage = psutil.disk_usage(mountpoint)
    except OSError as exc:
        if mountpoint == FALLBACK_MOUNTPOINT:
            raise RuntimeError("Unable to determine disk usage") from exc
        logger.warning(
            "Disk usage for %s unavailable (%s), reporting %s instead",
            mountpoint,
            exc,
            FALLBACK_MOUNTPOINT,
        )
        try:
            usage = psutil.disk_usage(FALLBACK_MOUNTPOINT)
        except OSError as fallback_exc:
            raise RuntimeError("Unable to determine disk usage") from fallback_exc

    return {
        "size_bytes": int(usage.total),
        "used_bytes": int(usage.used),
        "percent": float(usage.percent),
    }


def collect_disk_io() -> dict[str, float | int | None]:
    """Cumulative read/write bytes plus per-second rates since the previous call.

    Rates are None on the first call, when there is nothing to diff against.
    """
    global _last_io_sample

    with _io_lock:
        counters = psutil.disk_io_counters()
        if counters is None:
            return {
                "read_bytes": None,
                "write_bytes": None,
                "read_per_sec": None,
                "write_per_sec": None,
            }

        now = time.monotonic()
        current = _IoSample(
            ts_monotonic=now,
            read_bytes=int(counters.read_bytes),
            write_bytes=int(counters.write_bytes),
        )
        previous = _last_io_sample
        _last_io_sample = current

    read_per_sec: float | None = None
    write_per_sec: float | None = None
    if previous is not None:
        dt = now - previous.ts_monotonic
        if dt > 0:
            read_per_sec = max((current.read_bytes - previous.read_bytes) / dt, 0.0)
            write_per_sec = max((current.write_bytes - previous.write_bytes) / dt, 0.0)

    return {
        "read_bytes": current.read_bytes,
        "write_bytes": current.write_bytes,
        "read_per_sec": read_per_sec,
        "write_per_sec": write_per_sec,
    }
