from __future__ import annotations

import psutil


def collect_memory() -> dict[str, int]:
    mem = psutil.virtual_memory()
    swap = psutil.swap_memory()
    return {
        "total_bytes": int(mem.total),
        "used_bytes": int(mem.used),
        "swap_total_bytes": int(swap.total),
        "swap_used_bytes": int(swap.used),
    }
