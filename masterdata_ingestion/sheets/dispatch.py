"""
Sheet source that picks a reader by source path.

``.xlsx``/``.xlsm`` files go to the openpyxl source, ``.csv`` files and
directories of CSV files go to the CSV source. Anything else is reported as
an unavailable source.
"""

from __future__ import annotations

from pathlib import Path

from masterdata_ingestion.sheets.base import SheetSource
from masterdata_ingestion.sheets.csv_source import CsvSheetSource
from masterdata_ingestion.sheets.model import Sheet
from masterdata_ingestion.sheets.xlsx_source import XlsxSheetSource
from masterdata_kernel.exceptions import SourceUnavailableError


class SuffixSheetSource:
    """Delegates to one SheetSource per file suffix."""

    def __init__(
        self,
        by_suffix: dict[str, SheetSource] | None = None,
        directory_source: SheetSource | None = None,
    ) -> None:
        if by_suffix is None:
            xlsx = XlsxSheetSource()
            by_suffix = {".xlsx": xlsx, ".xlsm": xlsx, ".csv": CsvSheetSource()}
        self._by_suffix = {k.lower(): v for k, v in by_suffix.items()}
        self._directory_source = directory_source or CsvSheetSource()

    def load_sheet(self, source_path: Path | str, sheet_name: str) -> Sheet:
        path = Path(source_path)
        if path.is_dir():
            return self._directory_source.load_sheet(path, sheet_name)
        source = self._by_suffix.get(path.suffix.lower())
        if source is None:
            raise SourceUnavailableError(
                str(path), sheet_name, f"unsupported source format {path.suffix!r}"
            )
        return source.load_sheet(path, sheet_name)
