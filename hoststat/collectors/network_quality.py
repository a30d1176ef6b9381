from __future__ import annotations

import math
import re
import subprocess

_TIME_RE = re.compile(r"time[=<]\s*([\d.]+)\s*ms", re.IGNORECASE)


def ping_latency_ms(host: str, timeout_ms: int) -> float | None:
    wait_seconds = max(1, math.ceil(timeout_ms / 1000.0))
    try:
        proc = subprocess.run(
            ["ping", "-c", "1", "-W", str(wait_seconds), host],
            capture_output=True,
            text=True,
            check=False,
            timeout=wait_seconds + 1.0,
        )
    except (OSError, subprocess.TimeoutExpired):
        return None

    output = f"{proc.stdout}\n{proc.stderr}"
    match = _TIME_RE.search(output)
    if not match:
        return None
    try:
        return float(match.group(1))
    except ValueError:
        return None
