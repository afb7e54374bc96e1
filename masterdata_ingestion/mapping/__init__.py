"""Binding engine: type coercion, field binding and row mapping."""

from masterdata_ingestion.mapping.binder import FieldBinder, find_column, resolve_columns
from masterdata_ingestion.mapping.coercion import coerce, resolve_parser
from masterdata_ingestion.mapping.row_mapper import RowMapper, RowMappingResult

__all__ = [
    "coerce",
    "resolve_parser",
    "FieldBinder",
    "find_column",
    "resolve_columns",
    "RowMapper",
    "RowMappingResult",
]
