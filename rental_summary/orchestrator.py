"""
Rental report orchestrator: the public face of the rental summary.

Owns one detail store and one summary store, wires the refresh and incremental
paths to them, and applies the lock discipline of ``StoreGuard``:

- ``append_and_propagate`` / ``record_rental`` hold the inserted record's
  category, so inserts into one category are serialized and inserts into
  different categories run in parallel.
- ``refresh`` holds both stores exclusively.
- ``list_details`` / ``list_summary`` hold a shared lock and never observe a
  refresh half done.

Usage:
    from rental_summary.orchestrator import RentalReport
    from rental_summary.sources import PostgresSourceAccessor

    report = RentalReport(source=PostgresSourceAccessor())
    report.refresh()
    report.list_summary(category="Action")
"""

from __future__ import annotations

from typing import List, Optional

from rental_summary.config import get_settings
from rental_summary.core.builder import SourceRowLike, build_detail
from rental_summary.core.ranking import validate_top_n
from rental_summary.domain.errors import SourceUnavailable
from rental_summary.domain.models import DetailDraft, DetailRecord, RefreshResult, SummaryRecord
from rental_summary.incremental import IncrementalUpdateHandler
from rental_summary.refresh import RefreshController
from rental_summary.sources.abstract import SourceAccessor
from rental_summary.storage.locks import StoreGuard
from rental_summary.storage.stores import DetailStore, SummaryStore
from rental_summary.utils.logging import get_logger

log = get_logger(__name__)


class RentalReport:
    """
    Detail and summary record sets kept consistent with each other.

    Parameters
    ----------
    source : SourceAccessor | None
        Where ``refresh`` reads upstream rows from.
    top_n : int | None
        Ranks kept per category. Defaults to settings.summary_top_n.
    """

    def __init__(
        self,
        source: Optional[SourceAccessor] = None,
        top_n: Optional[int] = None,
    ) -> None:
        self.top_n = top_n if top_n is not None else get_settings().summary_top_n
        validate_top_n(self.top_n)

        self.source = source
        self.details = DetailStore()
        self.summary = SummaryStore()
        self.guard = StoreGuard()
        self.refresher = RefreshController(self.details, self.summary, top_n=self.top_n)
        self.handler = IncrementalUpdateHandler(self.details, self.summary, top_n=self.top_n)

    def append_and_propagate(self, draft: DetailDraft) -> DetailRecord:
        """
        Store one detail record and bring its category's summary up to date.

        If the summary update fails the record is taken back out, so both
        stores are as they were before the call.
        """
        with self.guard.category(draft.category_name):
            record = self.details.append(draft)
            try:
                self.handler.on_inserted(record)
            except Exception:
                self.details.discard(record.detail_id)
                log.exception(
                    "Summary update failed; insert rolled back",
                    extra={"category": record.category_name, "detail_id": record.detail_id},
                )
                raise
        return record

    def record_rental(self, row: SourceRowLike) -> DetailRecord:
        """
        Build a detail from one raw source row, then append and propagate it.

        Raises
        ------
        InvalidTimestamp
            If the row's rental_date is invalid. Nothing is stored.
        """
        return self.append_and_propagate(build_detail(row))

    def list_details(
        self, category: Optional[str] = None, title: Optional[str] = None
    ) -> List[DetailRecord]:
        """Detail records ordered by detail_id."""
        with self.guard.shared():
            return self.details.list(category=category, title=title)

    def list_summary(self, category: Optional[str] = None) -> List[SummaryRecord]:
        """Summary records ordered by (category_name, rank)."""
        with self.guard.shared():
            return self.summary.list(category=category)

    def refresh(self) -> RefreshResult:
        """
        Rebuild both stores from the configured source.

        Raises
        ------
        SourceUnavailable
            If no source is configured or it could not be read. Both stores
            are left empty.
        """
        with self.guard.exclusive():
            if self.source is None:
                self.details.clear()
                self.summary.clear()
                raise SourceUnavailable("No source accessor configured for refresh")
            return self.refresher.refresh(self.source)


__all__ = ["RentalReport"]
