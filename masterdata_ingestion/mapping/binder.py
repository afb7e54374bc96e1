"""
FieldBinder: one data row -> one record, driven by a RecordSchema.

For each declared field (declaration order) the binder finds the column whose
header text equals the field name, coerces that column's cell and stages the
value in a RecordBuilder. Fields without a column keep their default silently
so older sheets keep working after a field is added. Fields whose cell is
blank or unparsable keep their default and produce a FieldIssue; binding
always continues and always returns a record.
"""

from __future__ import annotations

from typing import Sequence

from masterdata_ingestion.mapping.coercion import coerce
from masterdata_ingestion.sheets.model import Cell
from masterdata_kernel.domain.dtos import BLANK_VALUE, BindResult, FieldIssue
from masterdata_kernel.domain.schema import RecordSchema
from masterdata_kernel.logging_config import get_logger

logger = get_logger("ingestion.binder")

ColumnMap = dict[str, int | None]


def find_column(header_row: Sequence[Cell], name: str) -> int | None:
    """Index of the first header cell equal to ``name``, or None."""
    for index, text in enumerate(header_row):
        if text == name:
            return index
    return None


def resolve_columns(schema: RecordSchema, header_row: Sequence[Cell]) -> ColumnMap:
    """Column index per schema field (None when the header lacks the field)."""
    return {f.name: find_column(header_row, f.name) for f in schema.fields}


class FieldBinder:
    """Binds data rows to records of one schema."""

    def bind(
        self,
        schema: RecordSchema,
        header_row: Sequence[Cell],
        data_row: Sequence[Cell],
        row_index: int | None = None,
        columns: ColumnMap | None = None,
    ) -> BindResult:
        """
        Build one record from ``data_row``.

        Args:
            schema: Target record schema.
            header_row: Cells holding field names.
            data_row: Cells of the row to bind.
            row_index: Sheet row index, attached to issues and log lines.
            columns: Precomputed ``resolve_columns`` result for ``header_row``.

        Raises:
            UnsupportedFieldTypeError: a present column belongs to a field
                whose type has no coercion rule.
        """
        if columns is None:
            columns = resolve_columns(schema, header_row)

        builder = schema.builder()
        issues: list[FieldIssue] = []

        for spec in schema.fields:
            index = columns.get(spec.name)
            if index is None:
                continue

            raw = data_row[index] if index < len(data_row) else None
            result = coerce(spec.field_type, raw, spec.name)
            if result.success:
                builder.set(spec.name, result.value)
                continue

            issue = result.error
            if row_index is not None:
                issue = issue.at_row(row_index)
            issues.append(issue)
            logger.warning(
                "field_skipped" if issue.code == BLANK_VALUE else "field_invalid",
                extra={
                    "schema_name": schema.name,
                    "field": spec.name,
                    "row": row_index,
                    "issue_code": issue.code,
                    "detail": issue.message,
                },
            )

        return BindResult(record=builder.build(), issues=tuple(issues))
