"""
XLSX sheet source (openpyxl).

Opens workbooks read-only with cached formula values and converts every cell
to text the way it would read in the spreadsheet: integral floats lose their
``.0``, booleans become ``TRUE``/``FALSE``, dates use ISO format, empty cells
stay None. Sheets are selected by name; the workbook's file stem is the
group name used for destinations.
"""

from __future__ import annotations

import zipfile
from datetime import date, datetime, time
from pathlib import Path
from typing import Any

import openpyxl
from openpyxl.utils.exceptions import InvalidFileException

from masterdata_ingestion.sheets.model import Cell, Sheet
from masterdata_kernel.exceptions import SourceUnavailableError
from masterdata_kernel.logging_config import get_logger

logger = get_logger("ingestion.xlsx_source")


def _cell_text(value: Any) -> Cell:
    """Text form of an openpyxl cell value."""
    if value is None:
        return None
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return repr(value)
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    return str(value)


class XlsxSheetSource:
    """Read one worksheet of an .xlsx workbook as a ``Sheet``."""

    def __init__(self, max_rows: int | None = None) -> None:
        self.max_rows = max_rows

    def load_sheet(self, source_path: Path | str, sheet_name: str) -> Sheet:
        path = Path(source_path)
        if not path.is_file():
            raise SourceUnavailableError(str(path), sheet_name, "file not found")

        try:
            wb = openpyxl.load_workbook(path, read_only=True, data_only=True)
        except (InvalidFileException, zipfile.BadZipFile, OSError, KeyError) as e:
            raise SourceUnavailableError(str(path), sheet_name, str(e)) from e

        try:
            if sheet_name not in wb.sheetnames:
                raise SourceUnavailableError(
                    str(path), sheet_name, f"sheet not found (available: {wb.sheetnames})"
                )
            ws = wb[sheet_name]
            rows = [
                tuple(_cell_text(v) for v in row)
                for row in ws.iter_rows(max_row=self.max_rows, values_only=True)
            ]
        finally:
            wb.close()

        logger.debug(
            "xlsx_sheet_loaded",
            extra={"path": str(path), "sheet": sheet_name, "row_count": len(rows)},
        )
        return Sheet(name=sheet_name, rows=tuple(rows))
