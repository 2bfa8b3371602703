"""
Domain models for the rental summary.

The detail and summary shapes follow the `detail_table` / `summary_table`
layout of the reporting database: one detail row per rental event, one summary
row per ranked title within a category.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, List, Optional

from pydantic import BaseModel, Field, model_validator

_FROZEN = {
    "frozen": True,
    "populate_by_name": True,
    "arbitrary_types_allowed": False,
}

MONTH_YEAR_PATTERN = re.compile(r"^(0[1-9]|1[0-2])/\d{4}$")

# Column order of a joined source row when it arrives as a plain tuple.
SOURCE_COLUMNS = (
    "inventory_id",
    "film_id",
    "rental_id",
    "title",
    "rental_rate",
    "rental_date",
    "category_id",
    "category_name",
)


class SourceRow(BaseModel):
    """
    One row of the film/inventory/rental/film_category/category join.
    """

    inventory_id: int
    film_id: int
    rental_id: int
    title: str
    rental_rate: Decimal
    rental_date: Any = Field(None, description="Timestamp, date or ISO string; parsed on build.")
    category_id: int
    category_name: str

    model_config = _FROZEN


class DetailDraft(BaseModel):
    """
    A detail row before the store has assigned it a `detail_id`.
    """

    inventory_id: int
    film_id: int
    rental_id: int
    title: str
    rental_rate: Decimal
    premium_rate: Decimal
    month_year: str = Field(..., description="Rental period as MM/YYYY.")
    category_id: int
    category_name: str

    model_config = _FROZEN

    @model_validator(mode="after")
    def _check_derived_columns(self) -> "DetailDraft":
        # Imported here: rental_summary.core imports this module.
        from rental_summary.core.transforms import adjust_rate

        expected = adjust_rate(self.rental_rate)
        if self.premium_rate != expected:
            raise ValueError(
                f"premium_rate {self.premium_rate} does not equal rental_rate plus premium ({expected})"
            )
        if not MONTH_YEAR_PATTERN.fullmatch(self.month_year):
            raise ValueError(f"month_year {self.month_year!r} is not formatted as MM/YYYY")
        return self


class DetailRecord(DetailDraft):
    """
    A stored detail row.
    """

    detail_id: int = Field(..., description="Monotonically assigned by DetailStore.")


class RankedTitle(BaseModel):
    """
    One ranking result: a title's position within its category.
    """

    rank: int = Field(..., ge=1)
    category_name: str
    movie_title: str
    new_rental_rate: Decimal
    rental_count: int = Field(..., ge=1)

    model_config = _FROZEN


class SummaryRecord(RankedTitle):
    """
    A stored summary row.
    """

    id: int = Field(..., description="Assigned by SummaryStore on install.")

    def as_ranked(self) -> RankedTitle:
        return RankedTitle(**self.model_dump(exclude={"id"}))


class RowRejection(BaseModel):
    """A source row the builder refused, with the reason."""

    rental_id: Optional[int] = None
    inventory_id: Optional[int] = None
    reason: str

    model_config = _FROZEN


@dataclass
class BuildResult:
    details: List[DetailDraft] = field(default_factory=list)
    rejected: List[RowRejection] = field(default_factory=list)


@dataclass
class RefreshResult:
    """
    Outcome of a full refresh.
    """

    detail_count: int = 0
    summary_count: int = 0
    categories: List[str] = field(default_factory=list)
    rejected: List[RowRejection] = field(default_factory=list)
    duration_seconds: float = 0.0


__all__ = [
    "BuildResult",
    "DetailDraft",
    "DetailRecord",
    "MONTH_YEAR_PATTERN",
    "RankedTitle",
    "RefreshResult",
    "RowRejection",
    "SOURCE_COLUMNS",
    "SourceRow",
    "SummaryRecord",
]
