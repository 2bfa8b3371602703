"""
In-memory detail and summary stores.

Each store guards its own state with a lock so that every public method is
observed as a single step: a reader gets a whole snapshot, and a failed
mutation leaves the store as it was. Coordination across the two stores
(per-category inserts, exclusive refresh) belongs to ``StoreGuard``.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable
from typing import Dict, List, Optional

from rental_summary.domain.errors import CategoryMismatch
from rental_summary.domain.models import DetailDraft, DetailRecord, RankedTitle, SummaryRecord


class DetailStore:
    """
    Append-only set of detail records, cleared only in bulk.

    ``detail_id`` numbering restarts at 1 after ``clear()``, like a table
    truncated with RESTART IDENTITY.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._records: List[DetailRecord] = []
        self._next_id = 1

    def _stamp(self, draft: DetailDraft, detail_id: int) -> DetailRecord:
        return DetailRecord(detail_id=detail_id, **draft.model_dump(exclude={"detail_id"}))

    def append(self, draft: DetailDraft) -> DetailRecord:
        """Assign the next detail_id to ``draft`` and store it."""
        with self._lock:
            record = self._stamp(draft, self._next_id)
            self._records.append(record)
            self._next_id += 1
        return record

    def extend(self, drafts: Iterable[DetailDraft]) -> List[DetailRecord]:
        """Append a batch; either every draft is stored or none is."""
        drafts = list(drafts)
        with self._lock:
            records = [self._stamp(d, self._next_id + i) for i, d in enumerate(drafts)]
            self._records.extend(records)
            self._next_id += len(records)
        return records

    def discard(self, detail_id: int) -> None:
        """
        Undo an ``append`` whose propagation failed.

        The id is handed out again only if no later record took one meanwhile.
        """
        with self._lock:
            self._records = [r for r in self._records if r.detail_id != detail_id]
            if detail_id == self._next_id - 1:
                self._next_id = detail_id

    def list(self, category: Optional[str] = None, title: Optional[str] = None) -> List[DetailRecord]:
        """Records ordered by detail_id, optionally filtered."""
        with self._lock:
            return [
                r
                for r in self._records
                if (category is None or r.category_name == category)
                and (title is None or r.title == title)
            ]

    def categories(self) -> List[str]:
        with self._lock:
            return sorted({r.category_name for r in self._records})

    def clear(self) -> None:
        with self._lock:
            self._records = []
            self._next_id = 1

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)


class SummaryStore:
    """
    Current top-N summary, keyed by category.

    Ids are assigned when entries are installed and restart at 1 after
    ``clear()``.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._by_category: Dict[str, List[SummaryRecord]] = {}
        self._next_id = 1

    def _install(self, entries: List[RankedTitle]) -> List[SummaryRecord]:
        records = [
            SummaryRecord(id=self._next_id + i, **e.model_dump(exclude={"id"}))
            for i, e in enumerate(entries)
        ]
        self._next_id += len(records)
        return records

    def replace_all(self, entries: Iterable[RankedTitle]) -> List[SummaryRecord]:
        """Discard every summary record and install ``entries``."""
        entries = list(entries)
        with self._lock:
            records = self._install(entries)
            by_category: Dict[str, List[SummaryRecord]] = {}
            for record in records:
                by_category.setdefault(record.category_name, []).append(record)
            self._by_category = by_category
        return records

    def replace_category(self, category_name: str, entries: Iterable[RankedTitle]) -> List[SummaryRecord]:
        """
        Discard the records of one category and install ``entries``.

        Raises
        ------
        CategoryMismatch
            If any entry belongs to another category. Nothing is replaced.
        """
        entries = list(entries)
        for entry in entries:
            if entry.category_name != category_name:
                raise CategoryMismatch(category_name, entry.category_name)

        with self._lock:
            records = self._install(entries)
            if records:
                self._by_category[category_name] = records
            else:
                self._by_category.pop(category_name, None)
        return records

    def list(self, category: Optional[str] = None) -> List[SummaryRecord]:
        """Records ordered by (category_name, rank)."""
        with self._lock:
            if category is not None:
                records = list(self._by_category.get(category, ()))
            else:
                records = [r for name in sorted(self._by_category) for r in self._by_category[name]]
        return sorted(records, key=lambda r: (r.category_name, r.rank))

    def categories(self) -> List[str]:
        with self._lock:
            return sorted(self._by_category)

    def clear(self) -> None:
        with self._lock:
            self._by_category = {}
            self._next_id = 1

    def __len__(self) -> int:
        with self._lock:
            return sum(len(records) for records in self._by_category.values())


__all__ = ["DetailStore", "SummaryStore"]
