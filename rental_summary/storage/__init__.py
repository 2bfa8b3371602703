"""
Storage package for the rental summary.

Owns the detail and summary record sets and the lock discipline coordinating
them. Keep this layer free of ranking logic.
"""

from rental_summary.storage.locks import StoreGuard
from rental_summary.storage.stores import DetailStore, SummaryStore

__all__ = [
    "DetailStore",
    "StoreGuard",
    "SummaryStore",
]
