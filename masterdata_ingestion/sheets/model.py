"""
Sheet model: raw cell text addressed by (row, column).

Sheets are produced by a ``SheetSource`` and consumed by the row mapper.
Cells hold text or None; no typing happens here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Sequence

Cell = str | None


def _cell_text(value: Any) -> Cell:
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


@dataclass(frozen=True)
class Sheet:
    """Immutable grid of cell text. Rows may have different lengths."""

    name: str
    rows: tuple[tuple[Cell, ...], ...] = field(default=())

    @classmethod
    def from_rows(cls, name: str, rows: Iterable[Sequence[Any]]) -> Sheet:
        return cls(name=name, rows=tuple(tuple(_cell_text(v) for v in row) for row in rows))

    @property
    def row_count(self) -> int:
        return len(self.rows)

    def row_cells(self, row: int) -> tuple[Cell, ...]:
        """Cells of one row; rows past the end are empty."""
        if 0 <= row < len(self.rows):
            return self.rows[row]
        return ()

    def cell(self, row: int, column: int) -> Cell:
        cells = self.row_cells(row)
        if 0 <= column < len(cells):
            return cells[column]
        return None

    def column_extent(self, column: int) -> int:
        """Index of the last populated cell in ``column`` plus one (0 if none)."""
        for r in range(len(self.rows) - 1, -1, -1):
            if self.cell(r, column) not in (None, ""):
                return r + 1
        return 0


@dataclass(frozen=True)
class SheetLayout:
    """
    Where the metadata rows and the key column of a sheet live.

    Default layout: row 0 holds field names, row 1 holds type annotations,
    data starts at row 2, and column 0 is the key column whose extent bounds
    the data rows.
    """

    header_row: int = 0
    first_data_row: int = 2
    key_column: int = 0

    def __post_init__(self) -> None:
        if self.header_row < 0 or self.first_data_row < 0 or self.key_column < 0:
            raise ValueError("SheetLayout indexes must be non-negative")
        if self.first_data_row <= self.header_row:
            raise ValueError(
                f"first_data_row ({self.first_data_row}) must come after "
                f"header_row ({self.header_row})"
            )
