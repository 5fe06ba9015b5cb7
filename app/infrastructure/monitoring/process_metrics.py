"""Process metrics via psutil: uptime, memory (MB, 2 decimals), CPU time.

Memory fields:
    used      resident set size of this process
    total     virtual memory size of this process
    external  shared memory (0.0 where the platform does not report it)
    rss       resident set size (detailed check only)
"""

import platform
import sys
import time

import psutil

_BYTES_PER_MB = 1024 * 1024

_process = psutil.Process()


def bytes_to_mb(value: int | float) -> float:
    """Convert bytes to megabytes rounded to 2 decimals."""
    return round(value / _BYTES_PER_MB, 2)


def process_uptime() -> float:
    """Seconds since this process started."""
    return max(0.0, time.time() - _process.create_time())


def memory_usage(include_rss: bool = False) -> dict[str, float]:
    info = _process.memory_info()
    usage = {
        "used": bytes_to_mb(info.rss),
        "total": bytes_to_mb(info.vms),
        "external": bytes_to_mb(getattr(info, "shared", 0)),
    }
    if include_rss:
        usage["rss"] = bytes_to_mb(info.rss)
    return usage


def cpu_usage() -> dict[str, int]:
    """User and system CPU time consumed by this process, in microseconds."""
    times = _process.cpu_times()
    return {
        "user": int(times.user * 1_000_000),
        "system": int(times.system * 1_000_000),
    }


def runtime_info() -> dict[str, str]:
    return {
        "platform": sys.platform,
        "arch": platform.machine(),
        "python_version": platform.python_version(),
    }
