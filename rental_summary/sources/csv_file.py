"""
CSV source accessor.

Reads a CSV whose header matches ``SOURCE_COLUMNS``, the format written by
``scripts/generate_data.py``.
"""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Dict, List

from rental_summary.domain.models import SOURCE_COLUMNS
from rental_summary.sources.abstract import AbstractSourceAccessor


class CsvSourceAccessor(AbstractSourceAccessor):
    """
    Read joined source rows from a CSV file.

    Empty ``rental_date`` cells are passed on as ``None`` so the builder
    rejects them instead of failing the whole read.
    """

    name: str = "csv"

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def fetch_rows(self) -> List[Dict[str, str | None]]:
        with self.path.open("r", newline="", encoding="utf-8") as f:
            reader = csv.DictReader(f)
            missing = set(SOURCE_COLUMNS) - set(reader.fieldnames or ())
            if missing:
                raise ValueError(f"{self.path} is missing columns: {sorted(missing)}")
            return [
                {column: (row[column] or None) for column in SOURCE_COLUMNS}
                for row in reader
            ]


__all__ = ["CsvSourceAccessor"]
