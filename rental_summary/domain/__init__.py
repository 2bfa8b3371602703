"""
Domain package for the rental summary.

Exports the record models and error types shared by the core, the stores and
the source accessors. Keep this package focused on data definitions.
"""

from rental_summary.domain.errors import (
    CategoryMismatch,
    InvalidTimestamp,
    InvalidTopN,
    RentalSummaryError,
    SourceUnavailable,
)
from rental_summary.domain.models import (
    SOURCE_COLUMNS,
    BuildResult,
    DetailDraft,
    DetailRecord,
    RankedTitle,
    RefreshResult,
    RowRejection,
    SourceRow,
    SummaryRecord,
)

__all__ = [
    # Models
    "BuildResult",
    "DetailDraft",
    "DetailRecord",
    "RankedTitle",
    "RefreshResult",
    "RowRejection",
    "SOURCE_COLUMNS",
    "SourceRow",
    "SummaryRecord",
    # Errors
    "CategoryMismatch",
    "InvalidTimestamp",
    "InvalidTopN",
    "RentalSummaryError",
    "SourceUnavailable",
]
