"""
Incremental summary maintenance after a single detail insert.

Only the category of the inserted record is re-ranked; its summary slice is
replaced as a unit. Because the re-rank reads every detail in that category
and uses the same ranking function as the full refresh, the result is
identical to what a refresh would produce for the category.
"""

from __future__ import annotations

from typing import List

from rental_summary.core.ranking import DEFAULT_TOP_N, rank_details
from rental_summary.domain.models import DetailRecord, SummaryRecord
from rental_summary.storage.stores import DetailStore, SummaryStore
from rental_summary.utils.logging import get_logger

log = get_logger(__name__)


class IncrementalUpdateHandler:
    """Recompute one category's summary after its detail set grew."""

    def __init__(
        self,
        detail_store: DetailStore,
        summary_store: SummaryStore,
        top_n: int = DEFAULT_TOP_N,
    ) -> None:
        self.detail_store = detail_store
        self.summary_store = summary_store
        self.top_n = top_n

    def on_inserted(self, record: DetailRecord) -> List[SummaryRecord]:
        """Must run after ``record`` is in the detail store, under its category lock."""
        category = record.category_name
        details = self.detail_store.list(category=category)
        ranked = rank_details(details, scope_category=category, top_n=self.top_n)
        installed = self.summary_store.replace_category(category, ranked)
        log.debug(
            "Summary slice recomputed",
            extra={
                "category": category,
                "detail_id": record.detail_id,
                "details": len(details),
                "ranked": len(installed),
            },
        )
        return installed


__all__ = ["IncrementalUpdateHandler"]
