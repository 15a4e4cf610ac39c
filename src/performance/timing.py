"""Lightweight timing utilities for instrumentation.

Provides:
  - time_block context manager
  - global TimingCollector

Accumulates wall time, call count and optional item counts (residue pairs,
raster cells) per named block. Each finished block is logged at DEBUG so a
``CMAP_LOG_FILE`` trace shows how long the matrix build and each re-render
took. Disable with ``CMAP_ENABLE_TIMING=0``.
"""
from __future__ import annotations
import time
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional

from loguru import logger


class TimingCollector:
    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self._data: Dict[str, Dict[str, float]] = {}

    def add(self, key: str, duration: float, items: Optional[int] = None):
        if not self.enabled:
            return
        rec = self._data.setdefault(key, {"time": 0.0, "calls": 0.0, "items": 0.0})
        rec["time"] += float(duration)
        rec["calls"] += 1.0
        if items is not None:
            rec["items"] += float(items)

    def snapshot(self) -> Dict[str, Any]:
        out = {}
        for k, rec in self._data.items():
            avg = rec["time"] / rec["calls"] if rec["calls"] else 0.0
            rate = rec["items"] / rec["time"] if rec["time"] and rec["items"] else None
            out[k] = {
                "total_time": round(rec["time"], 6),
                "calls": int(rec["calls"]),
                "avg_time": round(avg, 6),
                **({"total_items": int(rec["items"])} if rec["items"] else {}),
                **({"items_per_sec": round(rate, 3)} if rate else {}),
            }
        return out

    def clear(self):
        self._data.clear()


TIMINGS = TimingCollector()


@contextmanager
def time_block(name: str, items: Optional[int] = None) -> Iterator[None]:
    if not TIMINGS.enabled:
        yield
        return
    start = time.perf_counter()
    try:
        yield
    finally:
        duration = time.perf_counter() - start
        TIMINGS.add(name, duration, items=items)
        logger.debug(f"{name} took {duration * 1000:.1f} ms" + (f" ({items} items)" if items is not None else ""))


__all__ = ["time_block", "TIMINGS", "TimingCollector"]
