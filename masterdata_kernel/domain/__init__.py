"""
Pure domain layer.

Schema descriptors, record collections and binding DTOs with NO
dependencies on SQLAlchemy, files or the clock.
"""

from masterdata_kernel.domain.dtos import (
    BLANK_VALUE,
    INVALID_VALUE,
    BindResult,
    CoercionResult,
    FieldIssue,
)
from masterdata_kernel.domain.records import RecordCollection
from masterdata_kernel.domain.schema import (
    NO_DEFAULT,
    FieldSpec,
    RecordBuilder,
    RecordSchema,
    SchemaRegistry,
)
from masterdata_kernel.domain.types import (
    INTEGER_BOUNDS,
    FieldType,
    is_enum_type,
    is_supported_type,
    type_default,
)

__all__ = [
    "BLANK_VALUE",
    "INVALID_VALUE",
    "BindResult",
    "CoercionResult",
    "FieldIssue",
    "RecordCollection",
    "NO_DEFAULT",
    "FieldSpec",
    "RecordBuilder",
    "RecordSchema",
    "SchemaRegistry",
    "INTEGER_BOUNDS",
    "FieldType",
    "is_enum_type",
    "is_supported_type",
    "type_default",
]
