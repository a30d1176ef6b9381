from __future__ import annotations

import threading
import time
from dataclasses import dataclass

import psutil

from hoststat.core.config import NETWORK_INTERFACE


@dataclass
class _NetSample:
    ts_monotonic: float
    bytes_sent: int
    bytes_recv: int


_last_sample: _NetSample | None = None
_lock = threading.Lock()


def collect_network(interface: str = NETWORK_INTERFACE) -> dict[str, float | int | None]:
    global _last_sample

    with _lock:
        counters = psutil.net_io_counters(pernic=True).get(interface)
        if counters is None:
            return {
                "bytes_recv": None,
                "bytes_sent": None,
                "bytes_recv_per_sec": None,
                "bytes_sent_per_sec": None,
            }

        now = time.monotonic()
        current = _NetSample(
            ts_monotonic=now,
            bytes_sent=int(counters.bytes_sent),
            bytes_recv=int(counters.bytes_recv),
        )
        previous = _last_sample
        _last_sample = current

    sent_per_sec: float | None = None
    recv_per_sec: float | None = None
    if previous is not None:
        dt = now - previous.ts_monotonic
        if dt > 0:
            sent_per_sec = max((current.bytes_sent - previous.bytes_sent) / dt, 0.0)
            recv_per_sec = max((current.bytes_recv - previous.bytes_recv) / dt, 0.0)

    return {
        "bytes_recv": current.bytes_recv,
        "bytes_sent": current.bytes_sent,
        "bytes_recv_per_sec": recv_per_sec,
        "bytes_sent_per_sec": sent_per_sec,
    }
