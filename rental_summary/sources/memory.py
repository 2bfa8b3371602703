"""
In-memory source accessor.

``StaticSourceAccessor`` serves a fixed list of rows (tests, demos).
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import List

from rental_summary.core.builder import SourceRowLike
from rental_summary.sources.abstract import AbstractSourceAccessor


class StaticSourceAccessor(AbstractSourceAccessor):
    """Serve rows held in memory."""

    name: str = "static"

    def __init__(self, rows: Iterable[SourceRowLike] = ()) -> None:
        self.rows: List[SourceRowLike] = list(rows)

    def fetch_rows(self) -> List[SourceRowLike]:
        return list(self.rows)


__all__ = ["StaticSourceAccessor"]
