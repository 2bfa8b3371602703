"""
Core transforms, detail building and ranking.

Everything in this package is pure in-memory computation with no store or
source access.
"""

from rental_summary.core.builder import build_detail, build_details, to_source_row
from rental_summary.core.ranking import DEFAULT_TOP_N, count_rentals, rank_details, validate_top_n
from rental_summary.core.transforms import PREMIUM, adjust_rate, format_month_year

__all__ = [
    "DEFAULT_TOP_N",
    "PREMIUM",
    "adjust_rate",
    "build_detail",
    "build_details",
    "count_rentals",
    "format_month_year",
    "rank_details",
    "to_source_row",
    "validate_top_n",
]
