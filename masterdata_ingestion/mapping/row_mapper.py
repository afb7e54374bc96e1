"""
RowMapper: sheet -> ordered RecordCollection.

Visits every row from the layout's first data row up to the sheet's extent
in the key column, binds each row with the FieldBinder and appends the record
in row order. Trailing rows with an empty key column are never visited, so
they do not produce empty records. A bad cell only costs its field; issues
are collected and returned alongside the records.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from masterdata_ingestion.mapping.binder import FieldBinder, resolve_columns
from masterdata_ingestion.sheets.base import SheetSource
from masterdata_ingestion.sheets.model import Sheet, SheetLayout
from masterdata_kernel.domain.dtos import FieldIssue
from masterdata_kernel.domain.records import RecordCollection
from masterdata_kernel.domain.schema import RecordSchema
from masterdata_kernel.logging_config import get_logger

logger = get_logger("ingestion.row_mapper")


@dataclass(frozen=True)
class RowMappingResult:
    """Records mapped from one sheet plus every field issue met on the way."""

    records: RecordCollection
    issues: tuple[FieldIssue, ...] = ()

    @property
    def rows_visited(self) -> int:
        return len(self.records)

    @property
    def issue_rows(self) -> tuple[int, ...]:
        """Sorted distinct row indexes that produced at least one issue."""
        return tuple(sorted({i.row for i in self.issues if i.row is not None}))


class RowMapper:
    """Maps the data rows of a sheet into records of one schema."""

    def __init__(self, binder: FieldBinder | None = None) -> None:
        self.binder = binder or FieldBinder()

    def row_range(self, sheet: Sheet, layout: SheetLayout) -> range:
        """Data rows to visit: first data row up to the key column's extent."""
        return range(layout.first_data_row, sheet.column_extent(layout.key_column))

    def map_rows(
        self,
        schema: RecordSchema,
        sheet: Sheet,
        layout: SheetLayout | None = None,
    ) -> RowMappingResult:
        """
        Bind every data row of ``sheet``.

        Raises:
            UnsupportedFieldTypeError: the schema declares a field type with
                no coercion rule (propagates from the binder).
        """
        layout = layout or SheetLayout()
        header_row = sheet.row_cells(layout.header_row)
        columns = resolve_columns(schema, header_row)

        records = RecordCollection(schema)
        issues: list[FieldIssue] = []
        for r in self.row_range(sheet, layout):
            result = self.binder.bind(
                schema, header_row, sheet.row_cells(r), row_index=r, columns=columns
            )
            records.append(result.record)
            issues.extend(result.issues)

        missing = [name for name, index in columns.items() if index is None]
        logger.info(
            "rows_mapped",
            extra={
                "schema_name": schema.name,
                "sheet": sheet.name,
                "record_count": len(records),
                "issue_count": len(issues),
                "unmapped_fields": missing,
            },
        )
        return RowMappingResult(records=records, issues=tuple(issues))

    def map_source(
        self,
        schema: RecordSchema,
        source: SheetSource,
        source_path: Path | str,
        sheet_name: str,
        layout: SheetLayout | None = None,
    ) -> RowMappingResult:
        """
        Load ``sheet_name`` from ``source`` and map it.

        Raises:
            SourceUnavailableError: the source cannot be opened or lacks the
                sheet; no collection is produced.
        """
        sheet = source.load_sheet(source_path, sheet_name)
        return self.map_rows(schema, sheet, layout)
