"""
ORM models for persisted record collections.

Contract:
    ExportedCollectionModel is one destination (unique path) and remembers
    which schema built it. ExportedRecordModel rows hold the records of a
    collection in order (position) as JSON payloads keyed by field name.

Architecture: masterdata_export/models. Imports from masterdata_kernel.db.base only.
"""

from __future__ import annotations

from typing import Any
from uuid import UUID

from sqlalchemy import JSON, ForeignKey, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from masterdata_kernel.db.base import TrackedBase, UUIDString


class ExportedCollectionModel(TrackedBase):
    """One persisted destination."""

    __tablename__ = "exported_collections"

    path: Mapped[str] = mapped_column(String(1000), nullable=False, unique=True)
    schema_name: Mapped[str] = mapped_column(String(200), nullable=False)
    record_count: Mapped[int] = mapped_column(default=0, nullable=False)

    records: Mapped[list["ExportedRecordModel"]] = relationship(
        "ExportedRecordModel",
        back_populates="collection",
        order_by="ExportedRecordModel.position",
        cascade="all, delete-orphan",
    )


class ExportedRecordModel(TrackedBase):
    """One record of a persisted collection."""

    __tablename__ = "exported_records"

    collection_id: Mapped[UUID] = mapped_column(
        UUIDString(), ForeignKey("exported_collections.id"), nullable=False
    )
    position: Mapped[int] = mapped_column(nullable=False)
    record_key: Mapped[str | None] = mapped_column(String(500), nullable=True)
    payload: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)

    collection: Mapped[ExportedCollectionModel] = relationship(
        "ExportedCollectionModel", back_populates="records"
    )

    __table_args__ = (
        UniqueConstraint("collection_id", "position", name="uq_exported_record_position"),
        Index("idx_exported_record_key", "collection_id", "record_key"),
    )
