"""
Detail builder: turns joined source rows into flat detail drafts.

Rows are processed in (rental_id, inventory_id) order so repeated builds over
the same source emit the same sequence. A row whose rental_date cannot be
formatted is rejected and reported; the rest of the build continues.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import List, Union

from rental_summary.core.transforms import adjust_rate, format_month_year
from rental_summary.domain.errors import InvalidTimestamp
from rental_summary.domain.models import (
    SOURCE_COLUMNS,
    BuildResult,
    DetailDraft,
    RowRejection,
    SourceRow,
)
from rental_summary.utils.logging import get_logger

log = get_logger(__name__)

SourceRowLike = Union[SourceRow, Mapping, tuple]


def to_source_row(row: SourceRowLike) -> SourceRow:
    """Coerce a mapping or a ``SOURCE_COLUMNS``-ordered tuple into a SourceRow."""
    if isinstance(row, SourceRow):
        return row
    if isinstance(row, Mapping):
        return SourceRow.model_validate(dict(row))
    if len(row) != len(SOURCE_COLUMNS):
        raise ValueError(
            f"Source tuple has {len(row)} columns, expected {len(SOURCE_COLUMNS)}: {SOURCE_COLUMNS}"
        )
    return SourceRow.model_validate(dict(zip(SOURCE_COLUMNS, row)))


def build_detail(row: SourceRowLike) -> DetailDraft:
    """
    Build a single detail draft.

    Raises
    ------
    InvalidTimestamp
        If the row's rental_date is missing or unparseable.
    """
    source = to_source_row(row)
    return DetailDraft(
        inventory_id=source.inventory_id,
        film_id=source.film_id,
        rental_id=source.rental_id,
        title=source.title,
        rental_rate=source.rental_rate,
        premium_rate=adjust_rate(source.rental_rate),
        month_year=format_month_year(source.rental_date),
        category_id=source.category_id,
        category_name=source.category_name,
    )


def build_details(rows: Iterable[SourceRowLike]) -> BuildResult:
    """
    Build detail drafts for every source row.

    Parameters
    ----------
    rows : iterable
        Joined source rows (SourceRow, mapping or tuple).

    Returns
    -------
    BuildResult
        Drafts in (rental_id, inventory_id) order, plus one RowRejection per
        row whose rental_date was invalid.
    """
    sources: List[SourceRow] = sorted(
        (to_source_row(row) for row in rows),
        key=lambda r: (r.rental_id, r.inventory_id),
    )

    result = BuildResult()
    for source in sources:
        try:
            result.details.append(build_detail(source))
        except InvalidTimestamp as exc:
            log.warning(
                "Rejected source row",
                extra={
                    "rental_id": source.rental_id,
                    "inventory_id": source.inventory_id,
                    "reason": str(exc),
                },
            )
            result.rejected.append(
                RowRejection(
                    rental_id=source.rental_id,
                    inventory_id=source.inventory_id,
                    reason=str(exc),
                )
            )

    return result


__all__ = ["SourceRowLike", "build_detail", "build_details", "to_source_row"]
