"""
Infrastructure package for the rental summary.

Centralizes database connectivity for the Postgres source accessor. Keep this
layer focused on I/O, decoupled from ranking and store logic.
"""

from rental_summary.infrastructure.db_factory import apply_search_path, get_sync_connection

__all__ = [
    "apply_search_path",
    "get_sync_connection",
]
