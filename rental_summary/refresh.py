"""
Full refresh: clear both stores and rebuild them from the source.

The refresh is all-or-nothing at the store level. If anything fails after the
stores are cleared, they are cleared again before the error propagates, so a
caller never sees a partially rebuilt detail or summary set. Retrying is the
caller's decision.
"""

from __future__ import annotations

from typing import List

from rental_summary.core.builder import build_details
from rental_summary.core.ranking import DEFAULT_TOP_N, rank_details
from rental_summary.domain.errors import SourceUnavailable
from rental_summary.domain.models import RankedTitle, RefreshResult
from rental_summary.sources.abstract import SourceAccessor
from rental_summary.storage.stores import DetailStore, SummaryStore
from rental_summary.utils.logging import get_logger
from rental_summary.utils.profiler import profile_block

log = get_logger(__name__)


class RefreshController:
    """
    Rebuild the detail and summary stores from a source accessor.

    The caller is responsible for holding the stores exclusively for the
    duration of ``refresh``.
    """

    def __init__(
        self,
        detail_store: DetailStore,
        summary_store: SummaryStore,
        top_n: int = DEFAULT_TOP_N,
    ) -> None:
        self.detail_store = detail_store
        self.summary_store = summary_store
        self.top_n = top_n

    def _clear(self) -> None:
        self.detail_store.clear()
        self.summary_store.clear()

    def _fetch(self, source: SourceAccessor) -> list:
        try:
            return list(source.fetch_rows())
        except Exception as exc:
            raise SourceUnavailable(
                f"Source '{getattr(source, 'name', type(source).__name__)}' unavailable: {exc}"
            ) from exc

    def refresh(self, source: SourceAccessor) -> RefreshResult:
        """
        Clear, rebuild details, re-rank every category and install the summary.

        Returns
        -------
        RefreshResult
            Counts, the categories ranked, rejected source rows and duration.

        Raises
        ------
        SourceUnavailable
            If the source could not be read. Both stores are left empty.
        """
        source_name = getattr(source, "name", type(source).__name__)
        log.info("[REFRESH START]", extra={"source": source_name})

        with profile_block("refresh") as stats:
            self._clear()
            try:
                rows = self._fetch(source)
                built = build_details(rows)
                self.detail_store.extend(built.details)

                categories = self.detail_store.categories()
                entries: List[RankedTitle] = []
                for category in categories:
                    entries.extend(
                        rank_details(
                            self.detail_store.list(category=category),
                            scope_category=category,
                            top_n=self.top_n,
                        )
                    )
                self.summary_store.replace_all(entries)
            except Exception:
                self._clear()
                log.exception("[REFRESH FAILED]", extra={"source": source_name})
                raise

        result = RefreshResult(
            detail_count=len(self.detail_store),
            summary_count=len(self.summary_store),
            categories=categories,
            rejected=built.rejected,
            duration_seconds=stats.duration_seconds,
        )
        log.info(
            "[REFRESH COMPLETE]",
            extra={
                "source": source_name,
                "details": result.detail_count,
                "summary": result.summary_count,
                "categories": len(result.categories),
                "rejected": len(result.rejected),
                "duration": round(result.duration_seconds, 3),
                "peak_rss_bytes": stats.peak_rss_bytes,
            },
        )
        return result


__all__ = ["RefreshController"]
