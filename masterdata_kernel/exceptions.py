"""
Typed exception hierarchy for the master-data exporter.

Every exception carries a class-level machine-readable ``code`` and keeps its
context as attributes, so callers catch by type and log structured data
instead of parsing messages.

    MasterDataError (base)
    |
    +-- SchemaError
    |   +-- SchemaDefinitionError
    |   +-- SchemaNotFoundError
    |   +-- SchemaAlreadyRegisteredError
    |
    +-- CoercionError
    |   +-- UnsupportedFieldTypeError
    |
    +-- SourceError
    |   +-- SourceUnavailableError
    |
    +-- ExportError
        +-- JobAlreadyRegisteredError
        +-- JobNotFoundError

Code                      | When raised
--------------------------|----------------------------------------------------
SCHEMA_DEFINITION_INVALID | Duplicate field names, unknown key field
SCHEMA_NOT_FOUND          | No schema registered under a name
SCHEMA_ALREADY_REGISTERED | Second registration of a schema name
UNSUPPORTED_FIELD_TYPE    | A field declares a type with no coercion rule
SOURCE_UNAVAILABLE        | Sheet file missing/unreadable or sheet not present
JOB_ALREADY_REGISTERED    | Second registration of a job id
JOB_NOT_FOUND             | No export job registered under an id

Field-level failures (blank cell, unparsable text) are NOT exceptions; they
are reported as ``FieldIssue`` values and never escalate past the field.
"""

from typing import Any


class MasterDataError(Exception):
    """Base exception for all master-data export errors."""

    code: str = "MASTERDATA_ERROR"


# Schema errors


class SchemaError(MasterDataError):
    """Base exception for record schema errors."""

    code: str = "SCHEMA_ERROR"


class SchemaDefinitionError(SchemaError):
    """A record schema is internally inconsistent."""

    code: str = "SCHEMA_DEFINITION_INVALID"

    def __init__(self, schema_name: str, reason: str):
        self.schema_name = schema_name
        self.reason = reason
        super().__init__(f"Invalid schema {schema_name!r}: {reason}")


class SchemaNotFoundError(SchemaError):
    """No schema registered under the given name."""

    code: str = "SCHEMA_NOT_FOUND"

    def __init__(self, schema_name: str):
        self.schema_name = schema_name
        super().__init__(f"No schema registered: {schema_name}")


class SchemaAlreadyRegisteredError(SchemaError):
    """A schema with the same name is already registered."""

    code: str = "SCHEMA_ALREADY_REGISTERED"

    def __init__(self, schema_name: str):
        self.schema_name = schema_name
        super().__init__(f"Schema already registered: {schema_name}")


# Coercion errors


class CoercionError(MasterDataError):
    """Base exception for coercion errors that cannot be skipped."""

    code: str = "COERCION_ERROR"


class UnsupportedFieldTypeError(CoercionError):
    """
    A field declares a target type the coercer has no rule for.

    This is an authoring defect in the schema, not bad sheet data, so it
    stops the current export job instead of defaulting the field.
    """

    code: str = "UNSUPPORTED_FIELD_TYPE"

    def __init__(self, field_type: Any, field_name: str = ""):
        self.field_type = _type_name(field_type)
        self.field_name = field_name
        msg = f"{self.field_type} is unsupported to parse"
        if field_name:
            msg += f" (field {field_name!r})"
        super().__init__(msg)


# Source errors


class SourceError(MasterDataError):
    """Base exception for sheet source errors."""

    code: str = "SOURCE_ERROR"


class SourceUnavailableError(SourceError):
    """The sheet source could not be located or opened."""

    code: str = "SOURCE_UNAVAILABLE"

    def __init__(self, source_path: str, sheet_name: str | None = None, reason: str = ""):
        self.source_path = str(source_path)
        self.sheet_name = sheet_name
        self.reason = reason
        msg = f"Source unavailable: {self.source_path}"
        if sheet_name is not None:
            msg += f" (sheet {sheet_name!r})"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


# Export errors


class ExportError(MasterDataError):
    """Base exception for export job errors."""

    code: str = "EXPORT_ERROR"


class JobAlreadyRegisteredError(ExportError):
    """An export job with the same id is already registered."""

    code: str = "JOB_ALREADY_REGISTERED"

    def __init__(self, job_id: str):
        self.job_id = job_id
        super().__init__(f"Export job already registered: {job_id}")


class JobNotFoundError(ExportError):
    """No export job registered under the given id."""

    code: str = "JOB_NOT_FOUND"

    def __init__(self, job_id: str, available: tuple[str, ...] = ()):
        self.job_id = job_id
        self.available = available
        super().__init__(
            f"No export job registered: {job_id}. Available: {list(available)}"
        )


def _type_name(field_type: Any) -> str:
    if isinstance(field_type, type):
        return f"{field_type.__module__}.{field_type.__qualname__}"
    return repr(field_type)
