"""
Integration tests against a real dvdrental database.

These tests verify that:
1. The source join returns rows shaped like SourceRow
2. A refresh over the real data satisfies the summary invariants
3. An inserted rental propagates into the summary

Run with: RUN_INTEGRATION_TESTS=1 pytest tests/integration/
"""

from __future__ import annotations

import os
from decimal import Decimal

import pytest

from rental_summary.core.builder import build_detail, to_source_row
from rental_summary.core.ranking import rank_details
from rental_summary.domain.errors import SourceUnavailable
from rental_summary.orchestrator import RentalReport
from rental_summary.sources.postgres import PostgresSourceAccessor

TOP_N = 10

pytestmark = [
    pytest.mark.integration,
    pytest.mark.skipif(
        os.getenv("RUN_INTEGRATION_TESTS", "0") != "1",
        reason="Integration tests require RUN_INTEGRATION_TESTS=1 and a reachable dvdrental database",
    ),
]


@pytest.fixture(scope="module")
def refreshed_report(test_dsn: str, db_connection) -> RentalReport:
    report = RentalReport(source=PostgresSourceAccessor(dsn_override=test_dsn), top_n=TOP_N)
    report.refresh()
    return report


def test_source_rows_validate(test_dsn: str, db_connection) -> None:
    rows = PostgresSourceAccessor(dsn_override=test_dsn).fetch_rows()

    assert rows
    first = to_source_row(rows[0])
    assert isinstance(first.rental_rate, Decimal)
    assert [r["rental_id"] for r in rows[:100]] == sorted(r["rental_id"] for r in rows[:100])


def test_refresh_summary_matches_ranking(refreshed_report: RentalReport) -> None:
    details = refreshed_report.list_details()

    assert details
    assert all(d.premium_rate == d.rental_rate + Decimal("0.5") for d in details)
    assert [r.as_ranked() for r in refreshed_report.list_summary()] == rank_details(details, top_n=TOP_N)


def test_insert_propagates(refreshed_report: RentalReport) -> None:
    leader = refreshed_report.list_summary(category="Action")[0]
    template = refreshed_report.list_details(category="Action", title=leader.movie_title)[0]

    refreshed_report.record_rental(
        {
            "inventory_id": template.inventory_id,
            "film_id": template.film_id,
            "rental_id": 100001,
            "title": template.title,
            "rental_rate": template.rental_rate,
            "rental_date": "2005-05-25 00:00:00",
            "category_id": template.category_id,
            "category_name": template.category_name,
        }
    )

    updated = refreshed_report.list_summary(category="Action")[0]
    assert (updated.movie_title, updated.rental_count) == (leader.movie_title, leader.rental_count + 1)


def test_unreachable_database_is_source_unavailable() -> None:
    report = RentalReport(source=PostgresSourceAccessor(dsn_override="postgresql://nobody@127.0.0.1:1/none"))

    with pytest.raises(SourceUnavailable):
        report.refresh()

    assert report.list_details() == []
