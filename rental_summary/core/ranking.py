"""
Ranking engine: top-N most rented titles per category.

Detail rows are grouped by (title, premium_rate, category_name); the group size
is the rental count. Within a category, groups are ordered by rental count
descending, ties broken by title ascending and then by premium rate ascending,
and numbered 1..k. Only ranks up to ``top_n`` are kept.

The same function serves both the full rebuild (every category) and the
incremental path (one category), which is what keeps the two in agreement.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from decimal import Decimal
from typing import Dict, List, Optional, Protocol, Tuple

from rental_summary.domain.errors import InvalidTopN
from rental_summary.domain.models import RankedTitle

DEFAULT_TOP_N = 10

GroupKey = Tuple[str, Decimal, str]


class RankableDetail(Protocol):
    title: str
    premium_rate: Decimal
    category_name: str


def validate_top_n(top_n: int) -> None:
    if isinstance(top_n, bool) or not isinstance(top_n, int) or top_n <= 0:
        raise InvalidTopN(top_n)


def count_rentals(
    details: Iterable[RankableDetail], scope_category: Optional[str] = None
) -> Counter[GroupKey]:
    """Count rentals per (title, premium_rate, category_name) group."""
    return Counter(
        (d.title, d.premium_rate, d.category_name)
        for d in details
        if scope_category is None or d.category_name == scope_category
    )


def rank_details(
    details: Iterable[RankableDetail],
    scope_category: Optional[str] = None,
    top_n: int = DEFAULT_TOP_N,
) -> List[RankedTitle]:
    """
    Rank titles by rental count within each category.

    Parameters
    ----------
    details : iterable
        Detail records or drafts; only title, premium_rate and category_name
        are read.
    scope_category : str | None
        Restrict the computation to this category.
    top_n : int
        Maximum ranks kept per category.

    Returns
    -------
    list[RankedTitle]
        Ordered by (category_name, rank). Empty when there is nothing to rank.

    Raises
    ------
    InvalidTopN
        If ``top_n`` is not a positive integer.
    """
    validate_top_n(top_n)

    by_category: Dict[str, List[Tuple[str, Decimal, int]]] = {}
    for (title, rate, category), count in count_rentals(details, scope_category).items():
        by_category.setdefault(category, []).append((title, rate, count))

    ranked: List[RankedTitle] = []
    for category in sorted(by_category):
        groups = sorted(by_category[category], key=lambda g: (-g[2], g[0], g[1]))
        for rank, (title, rate, count) in enumerate(groups[:top_n], start=1):
            ranked.append(
                RankedTitle(
                    rank=rank,
                    category_name=category,
                    movie_title=title,
                    new_rental_rate=rate,
                    rental_count=count,
                )
            )
    return ranked


__all__ = ["DEFAULT_TOP_N", "RankableDetail", "count_rentals", "rank_details", "validate_top_n"]
