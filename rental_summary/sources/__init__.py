"""
Source accessors for the rental summary.

Re-exports the accessor interface and the concrete accessors so callers can
import from `rental_summary.sources` directly.
"""

from rental_summary.sources.abstract import AbstractSourceAccessor, SourceAccessor
from rental_summary.sources.csv_file import CsvSourceAccessor
from rental_summary.sources.memory import StaticSourceAccessor
from rental_summary.sources.postgres import PostgresSourceAccessor

__all__ = [
    # Abstracts
    "AbstractSourceAccessor",
    "SourceAccessor",
    # Concrete accessors
    "CsvSourceAccessor",
    "PostgresSourceAccessor",
    "StaticSourceAccessor",
]
