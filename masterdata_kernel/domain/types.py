"""
Primitive field types for record schemas.

This is part of the functional core - no I/O.
"""

from enum import Enum
from typing import Any


class FieldType(str, Enum):
    """Primitive target types a sheet cell can be coerced into."""

    INT8 = "int8"
    INT16 = "int16"
    INT32 = "int32"
    INT64 = "int64"
    UINT8 = "uint8"
    UINT16 = "uint16"
    UINT32 = "uint32"
    UINT64 = "uint64"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    BOOLEAN = "boolean"
    CHAR = "char"  # Exactly one character
    STRING = "string"

    @property
    def is_integer(self) -> bool:
        return self in INTEGER_BOUNDS

    @property
    def is_float(self) -> bool:
        return self in (FieldType.FLOAT32, FieldType.FLOAT64)


# Inclusive (min, max) per integer width
INTEGER_BOUNDS: dict[FieldType, tuple[int, int]] = {
    FieldType.INT8: (-(2**7), 2**7 - 1),
    FieldType.INT16: (-(2**15), 2**15 - 1),
    FieldType.INT32: (-(2**31), 2**31 - 1),
    FieldType.INT64: (-(2**63), 2**63 - 1),
    FieldType.UINT8: (0, 2**8 - 1),
    FieldType.UINT16: (0, 2**16 - 1),
    FieldType.UINT32: (0, 2**32 - 1),
    FieldType.UINT64: (0, 2**64 - 1),
}

# Underlying representation used for enumeration fields
ENUM_UNDERLYING_TYPE = FieldType.INT32

_PRIMITIVE_DEFAULTS: dict[FieldType, Any] = {
    **{t: 0 for t in INTEGER_BOUNDS},
    FieldType.FLOAT32: 0.0,
    FieldType.FLOAT64: 0.0,
    FieldType.BOOLEAN: False,
    FieldType.CHAR: "\0",
    FieldType.STRING: "",
}


def is_enum_type(target: Any) -> bool:
    """True if target is an Enum subclass whose members all have int values."""
    if not (isinstance(target, type) and issubclass(target, Enum)):
        return False
    members = list(target)
    return bool(members) and all(
        isinstance(m.value, int) and not isinstance(m.value, bool) for m in members
    )


def is_supported_type(target: Any) -> bool:
    """True if the coercer has a rule for target."""
    return isinstance(target, FieldType) or is_enum_type(target)


def type_default(target: Any) -> Any:
    """
    Default value of a target type.

    Enumerations default to the member whose value is 0, falling back to the
    first declared member. Unsupported targets default to None.
    """
    if isinstance(target, FieldType):
        return _PRIMITIVE_DEFAULTS[target]
    if is_enum_type(target):
        for member in target:
            if member.value == 0:
                return member
        return next(iter(target))
    return None


def type_label(target: Any) -> str:
    """Short human-readable name of a target type, for messages."""
    if isinstance(target, FieldType):
        return target.value
    if isinstance(target, type):
        return target.__name__
    return repr(target)
