"""
Error types raised by the rental summary core.

Every error derives from ``RentalSummaryError`` and also from the builtin
exception it refines, so callers can catch either.
"""
from __future__ import annotations

from typing import Any


class RentalSummaryError(Exception):
    """Base class for all rental summary errors."""


class InvalidTimestamp(RentalSummaryError, ValueError):
    """A rental_date that is missing or cannot be parsed."""

    def __init__(self, value: Any) -> None:
        self.value = value
        super().__init__(f"Invalid rental timestamp: {value!r}")


class InvalidTopN(RentalSummaryError, ValueError):
    """A top-N limit that is not a positive integer."""

    def __init__(self, top_n: Any) -> None:
        self.top_n = top_n
        super().__init__(f"top_n must be a positive integer, got {top_n!r}")


class CategoryMismatch(RentalSummaryError, ValueError):
    """A scoped summary replace received an entry for another category."""

    def __init__(self, expected: str, found: str) -> None:
        self.expected = expected
        self.found = found
        super().__init__(
            f"Summary entry for category '{found}' passed to replace of category '{expected}'"
        )


class SourceUnavailable(RentalSummaryError, RuntimeError):
    """The upstream source could not be read during a refresh."""


__all__ = [
    "CategoryMismatch",
    "InvalidTimestamp",
    "InvalidTopN",
    "RentalSummaryError",
    "SourceUnavailable",
]
