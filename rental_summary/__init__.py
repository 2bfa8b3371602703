"""
Rental Summary - top-N most rented films per category, kept up to date.

This package maintains two record sets derived from a film rental source:

- a denormalized detail set, one row per rental with its film, premium rate
  and category
- a summary set holding, per category, the top-N titles by rental count

The summary is rebuilt in full by a refresh and kept consistent after every
single detail insert by re-ranking only the affected category.
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from rental_summary.config import Settings, get_settings
from rental_summary.core import adjust_rate, build_details, format_month_year, rank_details
from rental_summary.domain import (
    CategoryMismatch,
    DetailDraft,
    DetailRecord,
    InvalidTimestamp,
    InvalidTopN,
    RankedTitle,
    RefreshResult,
    RentalSummaryError,
    SourceRow,
    SourceUnavailable,
    SummaryRecord,
)
from rental_summary.incremental import IncrementalUpdateHandler
from rental_summary.orchestrator import RentalReport
from rental_summary.refresh import RefreshController
from rental_summary.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Core
    "adjust_rate",
    "build_details",
    "format_month_year",
    "rank_details",
    # Orchestration
    "IncrementalUpdateHandler",
    "RefreshController",
    "RentalReport",
    # Models
    "DetailDraft",
    "DetailRecord",
    "RankedTitle",
    "RefreshResult",
    "SourceRow",
    "SummaryRecord",
    # Errors
    "CategoryMismatch",
    "InvalidTimestamp",
    "InvalidTopN",
    "RentalSummaryError",
    "SourceUnavailable",
    # Logging
    "configure_logging",
    "get_logger",
]
