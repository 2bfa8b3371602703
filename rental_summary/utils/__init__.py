"""
Utilities package for the rental summary.

Exports shared helpers for logging and profiling. Keep this package free of
domain-specific logic.
"""

from rental_summary.utils.logging import configure_logging, get_logger
from rental_summary.utils.profiler import ProfileStats, profile_block

__all__ = [
    "configure_logging",
    "get_logger",
    "ProfileStats",
    "profile_block",
]
