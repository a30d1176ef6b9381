from __future__ import annotations

import logging
import re
import time
from pathlib import Path

import psutil

logger = logging.getLogger(__name__)

CPUINFO_PATH: Path = Path("/proc/cpuinfo")
_CPU_MHZ_RE = re.compile(r"^cpu MHz\s*:\s*([\d.]+)", re.MULTILINE)

_warned_no_clock: bool = False


def _clock_mhz() -> float | None:
    freq = psutil.cpu_freq()
    if freq is not None:
        for value in (freq.current, freq.max):
            if value:
                return float(value)
    try:
        text = CPUINFO_PATH.read_text()
    except OSError:
        return None
    match = _CPU_MHZ_RE.search(text)
    if not match or not float(match.group(1)):
        return None
    return float(match.group(1))


def collect_cpu_info() -> dict[str, float | int | None]:
    global _warned_no_clock

    mhz = _clock_mhz()
    if mhz is None and not _warned_no_clock:
        _warned_no_clock = True
        logger.warning("No CPU clock speed available; every sampling cycle will be skipped")
    return {
        "clock_ghz": mhz / 1000.0 if mhz is not None else None,
        "cores": psutil.cpu_count(),
    }


def collect_cpu_load() -> dict[str, float]:
    return {"percent": float(psutil.cpu_percent(interval=None))}


def collect_process_count() -> dict[str, int]:
    return {"count": len(psutil.pids())}


def collect_uptime() -> dict[str, float]:
    return {"uptime_sec": max(time.time() - psutil.boot_time(), 0.0)}
