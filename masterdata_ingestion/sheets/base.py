"""
Sheet source protocol.

Contract:
    SheetSource.load_sheet() returns one named sheet of a source as a
    ``Sheet``, or raises SourceUnavailableError when the source file cannot be
    located/opened or does not contain the sheet.

Architecture: masterdata_ingestion/sheets. File I/O only, no DB imports.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from masterdata_ingestion.sheets.model import Sheet


@runtime_checkable
class SheetSource(Protocol):
    """Protocol for reading one sheet of a workbook-like source."""

    def load_sheet(self, source_path: Path | str, sheet_name: str) -> Sheet:
        """Load ``sheet_name`` from ``source_path``.

        Raises:
            SourceUnavailableError: file missing/unreadable or sheet absent.
        """
        ...
