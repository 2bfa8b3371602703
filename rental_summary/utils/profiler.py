"""
Profiling helpers for the rental summary.

Measures wall-clock time (perf_counter) and resident memory (psutil) of a
block, so refresh runs can report how long a rebuild took and how much memory
the in-memory stores needed.

Usage:
    from rental_summary.utils.profiler import profile_block

    with profile_block("refresh") as stats:
        controller.refresh(source)

    print(stats.duration_seconds, stats.peak_rss_bytes)
"""

from __future__ import annotations

import contextlib
import threading
import time
from dataclasses import dataclass, field
from typing import Generator, Optional

import psutil


@dataclass
class ProfileStats:
    """
    Container for profiling measurements.
    """

    label: str
    start_ts: float = field(default=0.0)
    end_ts: float = field(default=0.0)
    duration_seconds: float = field(default=0.0)
    start_rss_bytes: Optional[int] = field(default=None)
    peak_rss_bytes: Optional[int] = field(default=None)


@contextlib.contextmanager
def profile_block(label: str, sample_interval_ms: int = 50) -> Generator[ProfileStats, None, None]:
    """
    Context manager to profile a block of code.

    Peak RSS is sampled by a background thread every ``sample_interval_ms``
    milliseconds, so short spikes between the start and end snapshots are
    still captured.
    """
    stats = ProfileStats(label=label)
    process = psutil.Process()
    stats.start_rss_bytes = process.memory_info().rss
    peak_rss = stats.start_rss_bytes
    stop_sampling = threading.Event()

    def _sample_memory() -> None:
        nonlocal peak_rss
        while not stop_sampling.is_set():
            try:
                peak_rss = max(peak_rss, process.memory_info().rss)
            except psutil.Error:
                return
            stop_sampling.wait(timeout=sample_interval_ms / 1000.0)

    sampler = threading.Thread(target=_sample_memory, name=f"profile-{label}", daemon=True)
    sampler.start()

    stats.start_ts = time.perf_counter()
    try:
        yield stats
    finally:
        stats.end_ts = time.perf_counter()
        stats.duration_seconds = stats.end_ts - stats.start_ts
        stop_sampling.set()
        sampler.join(timeout=1.0)
        stats.peak_rss_bytes = max(peak_rss, process.memory_info().rss)


__all__ = ["ProfileStats", "profile_block"]
