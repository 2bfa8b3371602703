"""
Postgres source accessor: the five-table join over a dvdrental-style schema.

One row per rental event, joined to its inventory copy, film and category.
A film listed under several categories yields one row per category.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from psycopg.rows import dict_row

from rental_summary.config import get_settings
from rental_summary.infrastructure.db_factory import apply_search_path, get_sync_connection
from rental_summary.sources.abstract import AbstractSourceAccessor
from rental_summary.utils.logging import get_logger

log = get_logger(__name__)

SOURCE_QUERY = """
SELECT
    inv.inventory_id,
    fi.film_id,
    re.rental_id,
    fi.title,
    fi.rental_rate,
    re.rental_date,
    ca.category_id,
    ca.name AS category_name
FROM film AS fi
INNER JOIN inventory AS inv
    ON inv.film_id = fi.film_id
INNER JOIN rental AS re
    ON re.inventory_id = inv.inventory_id
INNER JOIN film_category AS fi_ca
    ON fi_ca.film_id = fi.film_id
INNER JOIN category AS ca
    ON ca.category_id = fi_ca.category_id
ORDER BY re.rental_id, inv.inventory_id;
"""


class PostgresSourceAccessor(AbstractSourceAccessor):
    """
    Read the joined rental source from Postgres with psycopg.

    Connection failures are retried by ``get_sync_connection``; anything still
    failing propagates so the refresh can report the source as unavailable.
    """

    name: str = "postgres"

    def __init__(
        self,
        dsn_override: Optional[str] = None,
        schema: Optional[str] = None,
    ) -> None:
        self._dsn_override = dsn_override
        self.schema = schema or get_settings().db_schema

    def fetch_rows(self) -> List[Dict[str, object]]:
        conn = get_sync_connection(self._dsn_override)
        try:
            with conn.cursor(row_factory=dict_row) as cur:
                apply_search_path(cur, self.schema)
                cur.execute(SOURCE_QUERY)
                rows = cur.fetchall()
        finally:
            conn.close()

        log.info("Fetched source rows", extra={"source": self.name, "rows": len(rows)})
        return rows


__all__ = ["PostgresSourceAccessor", "SOURCE_QUERY"]
