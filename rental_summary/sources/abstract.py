"""
Source accessor interface.

A source accessor is the only way the rental summary reads upstream data: it
returns the film/inventory/rental/film_category/category join, one row per
rental, with the columns of ``SourceRow``.
"""

from __future__ import annotations

import abc
from collections.abc import Iterable
from typing import Protocol, runtime_checkable

from rental_summary.core.builder import SourceRowLike


@runtime_checkable
class SourceAccessor(Protocol):
    """
    Common interface all source accessors must implement.

    Attributes
    ----------
    name : str
        A short machine-friendly identifier, used in logs.
    """

    name: str

    def fetch_rows(self) -> Iterable[SourceRowLike]:
        """
        Return the joined source rows.

        Any exception raised here is treated by a refresh as the source being
        unavailable.
        """
        ...


class AbstractSourceAccessor(abc.ABC):
    """
    Optional ABC helper for class-based implementations.

    Subclasses should set `name` and implement `fetch_rows`.
    """

    name: str

    @abc.abstractmethod
    def fetch_rows(self) -> Iterable[SourceRowLike]:  # pragma: no cover - interface only
        """Return the joined source rows."""
        raise NotImplementedError


__all__ = ["AbstractSourceAccessor", "SourceAccessor"]
