"""
Record collections.

A ``RecordCollection`` is the ordered set of records exported from one sheet
for one schema. Each export refreshes it completely: ``replace()`` clears the
collection in place and repopulates it. Records whose key disappeared from
the sheet are dropped without notice, and duplicate keys are kept as-is.
"""

from __future__ import annotations

from typing import Any, Iterable, Iterator

from masterdata_kernel.domain.schema import RecordSchema


class RecordCollection:
    """Ordered, mutable sequence of records belonging to one schema."""

    def __init__(self, schema: RecordSchema, records: Iterable[Any] = ()) -> None:
        self.schema = schema
        self._records: list[Any] = list(records)

    def append(self, record: Any) -> None:
        self._records.append(record)

    def extend(self, records: Iterable[Any]) -> None:
        self._records.extend(records)

    def clear(self) -> None:
        self._records.clear()

    def replace(self, records: Iterable[Any]) -> None:
        """Full refresh: drop every current record, then add ``records`` in order."""
        staged = list(records)
        self._records.clear()
        self._records.extend(staged)

    def keys(self) -> tuple[Any, ...]:
        """Key-field value of every record, in order (duplicates included)."""
        return tuple(self.schema.key_of(r) for r in self._records)

    def find(self, key: Any) -> Any | None:
        """First record whose key equals ``key``, or None."""
        if self.schema.key_field is None:
            return None
        for record in self._records:
            if self.schema.key_of(record) == key:
                return record
        return None

    def to_list(self) -> list[Any]:
        return list(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._records)

    def __getitem__(self, index: int) -> Any:
        return self._records[index]

    def __bool__(self) -> bool:
        return bool(self._records)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RecordCollection):
            return NotImplemented
        return self.schema.name == other.schema.name and self._records == other._records

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"RecordCollection(schema={self.schema.name!r}, records={len(self._records)})"
