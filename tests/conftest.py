"""
Pytest configuration for the rental summary.

Provides fixtures for:
- Building source rows and detail drafts
- The Action-category scenario used throughout the tests
- Settings and database access for Postgres integration tests
"""

from __future__ import annotations

import os
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Callable, Generator, List

import psycopg
import pytest

from rental_summary.config import Settings, build_dsn
from rental_summary.core.builder import build_detail
from rental_summary.domain.models import DetailDraft, SourceRow
from rental_summary.orchestrator import RentalReport
from rental_summary.sources.memory import StaticSourceAccessor

RUGRATS = "Rugrats Shakespeare"
SUSPECTS = "Suspects Quills"
RUGRATS_RENTALS = 26
SUSPECTS_RENTALS = 21


class SourceRowFactory:
    """Hand out source rows with fresh rental and inventory ids."""

    def __init__(self) -> None:
        self._rental_id = 0
        self._start = datetime(2005, 5, 24, 22, 53, 30)

    def __call__(
        self,
        title: str,
        rental_rate: str = "2.99",
        category_name: str = "Action",
        category_id: int = 1,
        film_id: int | None = None,
        rental_date: object = "unset",
    ) -> SourceRow:
        self._rental_id += 1
        film_id = film_id if film_id is not None else abs(hash(title)) % 1000 + 1
        if rental_date == "unset":
            rental_date = self._start + timedelta(hours=self._rental_id)
        return SourceRow(
            inventory_id=film_id * 4 + self._rental_id % 4,
            film_id=film_id,
            rental_id=self._rental_id,
            title=title,
            rental_rate=Decimal(rental_rate),
            rental_date=rental_date,
            category_id=category_id,
            category_name=category_name,
        )

    def many(self, count: int, title: str, **kwargs) -> List[SourceRow]:
        return [self(title, **kwargs) for _ in range(count)]


@pytest.fixture
def make_row() -> SourceRowFactory:
    return SourceRowFactory()


@pytest.fixture
def make_draft(make_row: SourceRowFactory) -> Callable[..., DetailDraft]:
    """Build a detail draft the way an external insert would provide one."""

    def _make(title: str, **kwargs) -> DetailDraft:
        return build_detail(make_row(title, **kwargs))

    return _make


@pytest.fixture
def action_rows(make_row: SourceRowFactory) -> List[SourceRow]:
    """
    One category, two titles: Rugrats Shakespeare (26 rentals at 0.99) and
    Suspects Quills (21 rentals at 2.99).
    """
    return make_row.many(RUGRATS_RENTALS, RUGRATS, rental_rate="0.99", film_id=748) + make_row.many(
        SUSPECTS_RENTALS, SUSPECTS, rental_rate="2.99", film_id=869
    )


@pytest.fixture
def mixed_rows(make_row: SourceRowFactory, action_rows: List[SourceRow]) -> List[SourceRow]:
    """The Action scenario plus a Comedy and a Drama category."""
    comedy = (
        make_row.many(5, "Zorro Ark", rental_rate="4.99", category_name="Comedy", category_id=5)
        + make_row.many(5, "Airplane Sierra", rental_rate="4.99", category_name="Comedy", category_id=5)
        + make_row.many(2, "Caddyshack Kiss", rental_rate="0.99", category_name="Comedy", category_id=5)
    )
    drama = make_row.many(3, "Apollo Teen", rental_rate="2.99", category_name="Drama", category_id=7)
    return action_rows + comedy + drama


@pytest.fixture
def report(mixed_rows: List[SourceRow]) -> RentalReport:
    """A report refreshed from ``mixed_rows``."""
    report = RentalReport(source=StaticSourceAccessor(mixed_rows), top_n=10)
    report.refresh()
    return report


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """
    Settings fixture with test-specific overrides.

    Can be overridden via environment variables in CI or local testing.
    """
    return Settings(
        db_host=os.getenv("DB_HOST", "localhost"),
        db_port=int(os.getenv("DB_PORT", "5432")),
        db_user=os.getenv("DB_USER", "postgres"),
        db_password=os.getenv("DB_PASSWORD", "postgres"),
        db_name=os.getenv("DB_NAME", "dvdrental"),
        log_level="DEBUG",
    )


@pytest.fixture(scope="session")
def test_dsn(test_settings: Settings) -> str:
    return build_dsn(test_settings)


@pytest.fixture(scope="session")
def db_connection(test_dsn: str) -> Generator[psycopg.Connection, None, None]:
    """
    Provide a session-scoped connection to a dvdrental database.

    Skips tests if the database is not reachable.
    """
    try:
        conn = psycopg.connect(test_dsn, connect_timeout=5)
    except psycopg.OperationalError:
        pytest.skip("dvdrental database not available for integration tests")
    try:
        yield conn
    finally:
        conn.close()
