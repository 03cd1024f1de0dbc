# ============================================================================
# PROCESS METRICS
# ============================================================================
# STATUS: Infrastructure - Runtime metadata for health responses
# PURPOSE: Process uptime and memory snapshot
# ============================================================================
"""
Process Metrics

Descriptive metadata attached to the overall health response. These
values never influence the health verdict.
"""

import time
from typing import Optional

import psutil

from health.core import MemorySnapshot


class ProcessMetrics:
    """Uptime and memory of the current process."""

    def __init__(self, process: Optional[psutil.Process] = None):
        self._process = process or psutil.Process()

    def uptime_seconds(self) -> float:
        return max(0.0, time.time() - self._process.create_time())

    def memory(self) -> MemorySnapshot:
        info = self._process.memory_info()
        # shared/data are Linux-only fields
        return MemorySnapshot(
            rss=info.rss,
            vms=info.vms,
            shared=getattr(info, "shared", 0),
            data=getattr(info, "data", 0),
        )


__all__ = ["ProcessMetrics"]
