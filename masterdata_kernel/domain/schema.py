"""
Record schema descriptors.

A record type is described by an explicit, ordered list of ``FieldSpec``
entries built once per type, instead of being introspected at runtime.
Each entry names the column to bind, the target type to coerce into, and
the constructor keyword that receives the value.

This is part of the functional core - no I/O.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from masterdata_kernel.domain.types import FieldType, type_default
from masterdata_kernel.exceptions import (
    SchemaAlreadyRegisteredError,
    SchemaDefinitionError,
    SchemaNotFoundError,
)
from masterdata_kernel.logging_config import get_logger

logger = get_logger("domain.schema")


class _NoDefault:
    def __repr__(self) -> str:
        return "NO_DEFAULT"


NO_DEFAULT: Any = _NoDefault()


@dataclass(frozen=True)
class FieldSpec:
    """
    One bindable field of a record type.

    ``name`` is both the header text matched in the sheet and the keyword
    passed to the record constructor. ``field_type`` is a ``FieldType`` or an
    integer-valued ``Enum`` subclass; anything else is accepted here and
    rejected by the coercer when a cell is actually bound.
    """

    name: str
    field_type: FieldType | type | Any
    default: Any = NO_DEFAULT
    description: str | None = None

    @property
    def default_value(self) -> Any:
        if self.default is NO_DEFAULT:
            return type_default(self.field_type)
        return self.default


@dataclass(frozen=True)
class RecordSchema:
    """
    Typed field layout of one record type.

    Immutable; fields keep declaration order, which is also binding order.
    """

    name: str
    record_type: Callable[..., Any]
    fields: tuple[FieldSpec, ...]
    key_field: str | None = None
    description: str = ""

    def __post_init__(self) -> None:
        if not self.name:
            raise SchemaDefinitionError("<unnamed>", "name is required")
        seen: set[str] = set()
        for f in self.fields:
            if not f.name:
                raise SchemaDefinitionError(self.name, "field names must be non-empty")
            if f.name in seen:
                raise SchemaDefinitionError(self.name, f"duplicate field {f.name!r}")
            seen.add(f.name)
        if self.key_field is not None and self.key_field not in seen:
            raise SchemaDefinitionError(
                self.name, f"key field {self.key_field!r} is not a declared field"
            )

    def field_names(self) -> tuple[str, ...]:
        return tuple(f.name for f in self.fields)

    def get_field(self, name: str) -> FieldSpec | None:
        for f in self.fields:
            if f.name == name:
                return f
        return None

    def default_values(self) -> dict[str, Any]:
        """Fresh dict of every field's default, in declaration order."""
        return {f.name: f.default_value for f in self.fields}

    def key_of(self, record: Any) -> Any:
        """Key-field value of a record built from this schema (None if keyless)."""
        if self.key_field is None:
            return None
        return getattr(record, self.key_field)

    def builder(self) -> RecordBuilder:
        return RecordBuilder(self)


class RecordBuilder:
    """
    Staging area for one record.

    Starts with every field at its default; ``set`` overwrites resolved
    fields and ``build`` constructs the record exactly once from the staged
    values.
    """

    def __init__(self, schema: RecordSchema):
        self._schema = schema
        self._values = schema.default_values()
        self._assigned: list[str] = []

    def set(self, name: str, value: Any) -> RecordBuilder:
        if name not in self._values:
            raise KeyError(f"{self._schema.name} has no field {name!r}")
        self._values[name] = value
        if name not in self._assigned:
            self._assigned.append(name)
        return self

    @property
    def assigned(self) -> tuple[str, ...]:
        """Names of fields set explicitly, in assignment order."""
        return tuple(self._assigned)

    @property
    def values(self) -> dict[str, Any]:
        return dict(self._values)

    def build(self) -> Any:
        return self._schema.record_type(**self._values)


class SchemaRegistry:
    """Explicit registration table of record schemas, keyed by schema name.

    Contract:
        - ``register()`` adds a schema; raises SchemaAlreadyRegisteredError on duplicate.
        - ``get()`` retrieves by name; raises SchemaNotFoundError if missing.
        - ``list_schemas()`` returns all registered names, sorted.
    """

    def __init__(self, schemas: tuple[RecordSchema, ...] = ()) -> None:
        self._schemas: dict[str, RecordSchema] = {}
        for schema in schemas:
            self.register(schema)

    def register(self, schema: RecordSchema) -> None:
        if schema.name in self._schemas:
            logger.warning("schema_already_registered", extra={"schema_name": schema.name})
            raise SchemaAlreadyRegisteredError(schema.name)
        self._schemas[schema.name] = schema
        logger.debug(
            "schema_registered",
            extra={"schema_name": schema.name, "field_count": len(schema.fields)},
        )

    def get(self, name: str) -> RecordSchema:
        try:
            return self._schemas[name]
        except KeyError:
            raise SchemaNotFoundError(name) from None

    def list_schemas(self) -> tuple[str, ...]:
        return tuple(sorted(self._schemas))

    def __len__(self) -> int:
        return len(self._schemas)

    def __contains__(self, name: str) -> bool:
        return name in self._schemas
