import csv
from pathlib import Path
from time import sleep

import pytest

from rental_summary import config
from rental_summary.core.ranking import rank_details
from rental_summary.domain.models import SOURCE_COLUMNS
from rental_summary.orchestrator import RentalReport
from rental_summary.reporter import build_summary_table
from rental_summary.sources import SourceAccessor, StaticSourceAccessor
from rental_summary.sources.csv_file import CsvSourceAccessor
from rental_summary.utils import profiler
from scripts import generate_data

GENERATED_ROWS = 500
GENERATED_FILMS = 60


def test_settings_defaults(monkeypatch):
    for name in ("DB_HOST", "DB_PORT", "DB_NAME", "SUMMARY_TOP_N"):
        monkeypatch.delenv(name, raising=False)
    settings = config.Settings(_env_file=None)
    assert settings.db_host == "localhost"
    assert settings.db_port == 5432
    assert settings.db_name == "dvdrental"
    assert settings.summary_top_n == 10


def test_build_dsn_uses_settings():
    settings = config.Settings(_env_file=None, db_host="db", db_port=6543, db_name="rentals")
    assert config.build_dsn(settings).endswith("@db:6543/rentals")


def test_profile_block_measures_time():
    with profiler.profile_block("sleep") as stats:
        sleep(0.05)
    assert stats.duration_seconds >= 0.05
    assert stats.peak_rss_bytes >= stats.start_rss_bytes > 0


def test_accessors_satisfy_protocol(tmp_path: Path):
    assert isinstance(StaticSourceAccessor([]), SourceAccessor)
    assert isinstance(CsvSourceAccessor(tmp_path / "x.csv"), SourceAccessor)


def test_generate_data_writes_csv(tmp_path: Path):
    csv_path = tmp_path / "source.csv"
    generate_data._generate_rows_csv(csv_path, rows=GENERATED_ROWS, films=GENERATED_FILMS, seed=123)

    with csv_path.open("r", newline="", encoding="utf-8") as f:
        rows = list(csv.reader(f))
    assert rows[0] == list(SOURCE_COLUMNS)
    assert len(rows) == GENERATED_ROWS + 1


def test_csv_source_refresh_end_to_end(tmp_path: Path):
    csv_path = tmp_path / "source.csv"
    generate_data._generate_rows_csv(csv_path, rows=GENERATED_ROWS, films=GENERATED_FILMS, seed=123)
    report = RentalReport(source=CsvSourceAccessor(csv_path), top_n=5)

    result = report.refresh()

    assert result.detail_count == GENERATED_ROWS
    assert result.rejected == []
    details = report.list_details()
    assert [r.as_ranked() for r in report.list_summary()] == rank_details(details, top_n=5)
    for category in result.categories:
        assert 1 <= len(report.list_summary(category=category)) <= 5


def test_csv_source_passes_blank_dates_as_missing(tmp_path: Path):
    csv_path = tmp_path / "source.csv"
    with csv_path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(SOURCE_COLUMNS)
        writer.writerow([1, 1, 1, "Moon Trap", "0.99", "2005-05-25 10:00:00", 1, "Action"])
        writer.writerow([2, 1, 2, "Moon Trap", "0.99", "", 1, "Action"])

    result = RentalReport(source=CsvSourceAccessor(csv_path)).refresh()

    assert result.detail_count == 1
    assert [r.rental_id for r in result.rejected] == [2]


def test_csv_source_requires_columns(tmp_path: Path):
    csv_path = tmp_path / "source.csv"
    csv_path.write_text("title,rental_rate\nMoon Trap,0.99\n", encoding="utf-8")

    with pytest.raises(ValueError, match="missing columns"):
        CsvSourceAccessor(csv_path).fetch_rows()


def test_summary_table_has_one_row_per_record(report):
    records = report.list_summary()
    table = build_summary_table(records)
    assert table.row_count == len(records)
