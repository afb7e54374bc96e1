"""
Coercion: cell text -> typed value. Pure functions, ZERO I/O.

Every supported target has one parser. A parser never raises for bad text;
it returns a failed CoercionResult carrying the target's default and a
FieldIssue. Only a target with no parser raises (UnsupportedFieldTypeError),
because that is a schema authoring defect rather than bad data.
"""

from __future__ import annotations

import re
import struct
from enum import Enum
from typing import Any, Callable

from masterdata_kernel.domain.dtos import (
    BLANK_VALUE,
    INVALID_VALUE,
    CoercionResult,
    FieldIssue,
)
from masterdata_kernel.domain.types import (
    ENUM_UNDERLYING_TYPE,
    INTEGER_BOUNDS,
    FieldType,
    is_enum_type,
    is_supported_type,
    type_default,
    type_label,
)
from masterdata_kernel.exceptions import UnsupportedFieldTypeError
from masterdata_kernel.logging_config import get_logger

logger = get_logger("ingestion.coercion")

_INTEGER_RE = re.compile(r"\s*[+-]?[0-9]+\s*", re.ASCII)
_BOOLEAN_WORDS = {"true": True, "false": False}

# A parser returns (ok, value); value is ignored when ok is False.
Parser = Callable[[str], tuple[bool, Any]]


# -----------------------------------------------------------------------------
# Parsers (pure)
# -----------------------------------------------------------------------------


def _integer_parser(field_type: FieldType) -> Parser:
    low, high = INTEGER_BOUNDS[field_type]

    def parse(s: str) -> tuple[bool, Any]:
        if not _INTEGER_RE.fullmatch(s):
            return False, None
        value = int(s)
        if value < low or value > high:
            return False, None
        return True, value

    return parse


def _parse_float64(s: str) -> tuple[bool, Any]:
    if "_" in s:
        return False, None
    try:
        return True, float(s)
    except ValueError:
        return False, None


def _parse_float32(s: str) -> tuple[bool, Any]:
    """Nearest single-precision value, held as a Python float."""
    ok, value = _parse_float64(s)
    if not ok:
        return False, None
    try:
        return True, struct.unpack("<f", struct.pack("<f", value))[0]
    except OverflowError:
        return False, None


def _parse_boolean(s: str) -> tuple[bool, Any]:
    word = s.strip().lower()
    if word in _BOOLEAN_WORDS:
        return True, _BOOLEAN_WORDS[word]
    return False, None


def _parse_char(s: str) -> tuple[bool, Any]:
    if len(s) == 1:
        return True, s
    return False, None


def _parse_string(s: str) -> tuple[bool, Any]:
    return True, s


_PARSERS: dict[FieldType, Parser] = {
    **{t: _integer_parser(t) for t in INTEGER_BOUNDS},
    FieldType.FLOAT32: _parse_float32,
    FieldType.FLOAT64: _parse_float64,
    FieldType.BOOLEAN: _parse_boolean,
    FieldType.CHAR: _parse_char,
    FieldType.STRING: _parse_string,
}


def _enum_parser(enum_type: type[Enum]) -> Parser:
    parse_underlying = _PARSERS[ENUM_UNDERLYING_TYPE]

    def parse(s: str) -> tuple[bool, Any]:
        ok, number = parse_underlying(s)
        if not ok:
            return False, None
        try:
            return True, enum_type(number)
        except ValueError:
            return False, None

    return parse


def resolve_parser(target: Any, field_name: str = "") -> Parser:
    """
    Parser for a target type.

    Raises:
        UnsupportedFieldTypeError: target is neither a FieldType nor an
            integer-valued Enum subclass.
    """
    if not is_supported_type(target):
        logger.error(
            "unsupported_field_type",
            extra={"field": field_name, "field_type": repr(target)},
        )
        raise UnsupportedFieldTypeError(target, field_name)
    if is_enum_type(target):
        return _enum_parser(target)
    return _PARSERS[target]


# -----------------------------------------------------------------------------
# Coercion
# -----------------------------------------------------------------------------


def coerce(target: Any, raw_text: str | None, field_name: str = "") -> CoercionResult:
    """
    Coerce one cell's text to ``target``. Pure function.

    - Blank text (None or "") fails for every target except STRING, which
      yields "".
    - Text that does not lexically represent the target fails with
      INVALID_VALUE; the result still carries the target's default.
    - Enumerations are parsed through their integer value, never by name.

    Raises:
        UnsupportedFieldTypeError: no coercion rule exists for ``target``.
    """
    parse = resolve_parser(target, field_name)
    default = type_default(target)

    if raw_text is None or raw_text == "":
        if target == FieldType.STRING:
            return CoercionResult(success=True, value="")
        return CoercionResult(
            success=False,
            value=default,
            error=FieldIssue(
                code=BLANK_VALUE,
                message=f"Skipped blank value for {type_label(target)} field {field_name!r}",
                field=field_name,
            ),
        )

    ok, value = parse(raw_text)
    if ok:
        return CoercionResult(success=True, value=value)
    return CoercionResult(
        success=False,
        value=default,
        error=FieldIssue(
            code=INVALID_VALUE,
            message=f"Cannot coerce {raw_text!r} to {type_label(target)} for field {field_name!r}",
            field=field_name,
            details={"field_type": type_label(target), "raw_value": raw_text},
        ),
    )
