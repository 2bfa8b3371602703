"""
Column transforms applied while building detail rows.
"""
from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Union

from rental_summary.domain.errors import InvalidTimestamp

PREMIUM = Decimal("0.5")

RateLike = Union[Decimal, int, float, str]


def adjust_rate(rate: RateLike) -> Decimal:
    """Return ``rate`` plus the fixed premium, in exact decimal arithmetic."""
    if isinstance(rate, float):
        # str() keeps the shortest repr, so 0.99 stays 0.99 rather than 0.98999...
        rate = str(rate)
    return Decimal(rate) + PREMIUM


def format_month_year(timestamp: Any) -> str:
    """
    Format a rental timestamp as ``MM/YYYY``.

    Accepts ``datetime``, ``date`` or an ISO-8601 string. Anything else,
    including ``None``, raises ``InvalidTimestamp``.
    """
    if isinstance(timestamp, str):
        try:
            timestamp = datetime.fromisoformat(timestamp.strip())
        except ValueError as exc:
            raise InvalidTimestamp(timestamp) from exc
    if not isinstance(timestamp, date):
        raise InvalidTimestamp(timestamp)
    return f"{timestamp.month:02d}/{timestamp.year:04d}"


__all__ = ["PREMIUM", "adjust_rate", "format_month_year"]
