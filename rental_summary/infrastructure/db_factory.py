"""
Database connection factory for the rental summary.

The only database the rental summary talks to is the upstream rental source,
read once per refresh, so a dedicated connection per refresh is enough.

Includes retry logic for transient connection failures using tenacity.
"""

from __future__ import annotations

from typing import Optional

import psycopg
from psycopg import Connection, sql
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from rental_summary.config import build_dsn, get_settings


def apply_search_path(cur: psycopg.Cursor, schema: str) -> None:
    """Resolve unqualified table names against ``schema`` first."""
    cur.execute(
        sql.SQL("SET search_path TO {}, public").format(sql.Identifier(schema))
    )


@retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=1, max=10),
    retry=retry_if_exception_type((psycopg.OperationalError, psycopg.InterfaceError)),
    reraise=True,
)
def get_sync_connection(dsn_override: Optional[str] = None) -> Connection:
    """
    Acquire a dedicated synchronous connection with automatic retry.

    Retries up to 3 times with exponential backoff for transient connection errors.

    Parameters
    ----------
    dsn_override : str | None
        Connect here instead of the DSN built from settings.

    Returns
    -------
    Connection
        A new psycopg connection instance.

    Raises
    ------
    psycopg.OperationalError
        If connection fails after all retry attempts.
    """
    settings = get_settings()
    return psycopg.connect(
        dsn_override or build_dsn(settings),
        connect_timeout=settings.db_connect_timeout,
    )


__all__ = [
    "apply_search_path",
    "get_sync_connection",
]
