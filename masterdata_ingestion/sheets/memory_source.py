"""In-memory sheet source for hosts that already hold cell text."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Sequence

from masterdata_ingestion.sheets.model import Sheet
from masterdata_kernel.exceptions import SourceUnavailableError


class InMemorySheetSource:
    """Sheets keyed by (source path, sheet name)."""

    def __init__(self) -> None:
        self._sheets: dict[str, dict[str, Sheet]] = {}

    def add_sheet(
        self, source_path: Path | str, sheet_name: str, rows: Sequence[Sequence[Any]]
    ) -> Sheet:
        sheet = Sheet.from_rows(sheet_name, rows)
        self._sheets.setdefault(str(source_path), {})[sheet_name] = sheet
        return sheet

    def remove_source(self, source_path: Path | str) -> None:
        self._sheets.pop(str(source_path), None)

    def load_sheet(self, source_path: Path | str, sheet_name: str) -> Sheet:
        sheets = self._sheets.get(str(source_path))
        if sheets is None:
            raise SourceUnavailableError(str(source_path), sheet_name, "source not found")
        try:
            return sheets[sheet_name]
        except KeyError:
            raise SourceUnavailableError(
                str(source_path), sheet_name, "sheet not found"
            ) from None
