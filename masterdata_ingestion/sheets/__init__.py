"""Sheet model and sheet sources (file I/O only, no DB)."""

from masterdata_ingestion.sheets.base import SheetSource
from masterdata_ingestion.sheets.csv_source import CsvSheetSource
from masterdata_ingestion.sheets.dispatch import SuffixSheetSource
from masterdata_ingestion.sheets.memory_source import InMemorySheetSource
from masterdata_ingestion.sheets.model import Sheet, SheetLayout
from masterdata_ingestion.sheets.xlsx_source import XlsxSheetSource

__all__ = [
    "Sheet",
    "SheetLayout",
    "SheetSource",
    "CsvSheetSource",
    "SuffixSheetSource",
    "InMemorySheetSource",
    "XlsxSheetSource",
]
