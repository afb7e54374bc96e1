"""
Value objects passed between the binding stages.

All frozen; none of them raise -- they ARE the error representation for
field-level failures.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

# Field issue codes
BLANK_VALUE = "BLANK_VALUE"
INVALID_VALUE = "INVALID_VALUE"


@dataclass(frozen=True)
class FieldIssue:
    """
    A single field that could not be bound.

    ``row`` is the 0-based sheet row index once the issue has passed through
    the row mapper; coercion and binding alone leave it None.
    """

    code: str
    message: str
    field: str = ""
    row: int | None = None
    details: dict[str, Any] | None = None

    def at_row(self, row: int) -> FieldIssue:
        return replace(self, row=row)


@dataclass(frozen=True)
class CoercionResult:
    """Result of coercing one cell's text to a target type.

    On failure ``value`` is the target type's default.
    """

    success: bool
    value: Any = None
    error: FieldIssue | None = None

    def __iter__(self):
        # Allows ``value, ok = coerce(...)``
        yield self.value
        yield self.success


@dataclass(frozen=True)
class BindResult:
    """A bound record plus the issues met while binding it."""

    record: Any
    issues: tuple[FieldIssue, ...] = ()

    @property
    def clean(self) -> bool:
        return not self.issues
