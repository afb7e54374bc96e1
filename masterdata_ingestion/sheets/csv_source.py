"""
CSV sheet source.

One CSV file holds one sheet. ``source_path`` is either the CSV file itself
or a directory holding ``<sheet_name>.csv`` files (one per sheet, like the
worksheets of a workbook). Handles BOM via utf-8-sig when encoding is utf-8.
"""

from __future__ import annotations

import csv
from pathlib import Path

from masterdata_ingestion.sheets.model import Sheet
from masterdata_kernel.exceptions import SourceUnavailableError


def _get_encoding(encoding: str) -> str:
    if encoding.lower() in ("utf-8", "utf8"):
        return "utf-8-sig"  # Strip BOM if present
    return encoding


class CsvSheetSource:
    """Read a CSV file as a ``Sheet``. Every cell is kept as raw text."""

    def __init__(self, delimiter: str = ",", encoding: str = "utf-8") -> None:
        self.delimiter = delimiter
        self.encoding = encoding

    def resolve_path(self, source_path: Path | str, sheet_name: str) -> Path:
        path = Path(source_path)
        if path.is_dir():
            return path / f"{sheet_name}.csv"
        return path

    def load_sheet(self, source_path: Path | str, sheet_name: str) -> Sheet:
        path = self.resolve_path(source_path, sheet_name)
        if not path.is_file():
            raise SourceUnavailableError(str(path), sheet_name, "file not found")
        try:
            with path.open("r", encoding=_get_encoding(self.encoding), newline="") as f:
                rows = [tuple(row) for row in csv.reader(f, delimiter=self.delimiter)]
        except (OSError, UnicodeDecodeError, csv.Error) as e:
            raise SourceUnavailableError(str(path), sheet_name, str(e)) from e
        return Sheet(name=sheet_name, rows=tuple(rows))
