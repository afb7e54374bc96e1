"""
Record stores: where exported collections live between export passes.

Contract (RecordStore):
    load(destination)          -> existing RecordCollection or None (None also
                                  when the stored schema is not registered)
    create(destination, schema)-> new empty RecordCollection registered there
    mark_dirty(destination)    -> destination changed and needs saving

The coordinator only ever mutates collections it obtained from the store, so
a store that hands out the same object on every ``load`` sees in-place
refreshes directly. Saving is the host's decision (``save``).
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Protocol, runtime_checkable

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from masterdata_export.models import ExportedCollectionModel, ExportedRecordModel
from masterdata_export.types import DestinationLocator
from masterdata_kernel.domain.records import RecordCollection
from masterdata_kernel.domain.schema import RecordSchema, SchemaRegistry
from masterdata_kernel.domain.types import is_enum_type
from masterdata_kernel.logging_config import get_logger

logger = get_logger("export.stores")


@runtime_checkable
class RecordStore(Protocol):
    """Persistence collaborator for exported record collections."""

    def load(self, destination: DestinationLocator) -> RecordCollection | None: ...

    def create(self, destination: DestinationLocator, schema: RecordSchema) -> RecordCollection: ...

    def mark_dirty(self, destination: DestinationLocator) -> None: ...


# -----------------------------------------------------------------------------
# Payload conversion (pure)
# -----------------------------------------------------------------------------


def record_to_payload(schema: RecordSchema, record: Any) -> dict[str, Any]:
    """JSON-safe dict of a record's schema fields (enums by integer value)."""
    payload: dict[str, Any] = {}
    for spec in schema.fields:
        value = getattr(record, spec.name)
        payload[spec.name] = value.value if isinstance(value, Enum) else value
    return payload


def payload_to_record(schema: RecordSchema, payload: dict[str, Any]) -> Any:
    """Rebuild a record from ``record_to_payload`` output; unknown keys are ignored."""
    builder = schema.builder()
    for spec in schema.fields:
        if spec.name not in payload:
            continue
        value = payload[spec.name]
        if is_enum_type(spec.field_type) and value is not None:
            value = spec.field_type(value)
        builder.set(spec.name, value)
    return builder.build()


# -----------------------------------------------------------------------------
# In-memory store
# -----------------------------------------------------------------------------


class InMemoryRecordStore:
    """Collections held in a dict keyed by destination path."""

    def __init__(self) -> None:
        self._collections: dict[str, RecordCollection] = {}
        self._dirty: set[str] = set()

    def load(self, destination: DestinationLocator) -> RecordCollection | None:
        return self._collections.get(destination.path)

    def create(self, destination: DestinationLocator, schema: RecordSchema) -> RecordCollection:
        collection = RecordCollection(schema)
        self._collections[destination.path] = collection
        logger.info("collection_created", extra={"path": destination.path, "schema_name": schema.name})
        return collection

    def mark_dirty(self, destination: DestinationLocator) -> None:
        self._dirty.add(destination.path)

    def is_dirty(self, destination: DestinationLocator) -> bool:
        return destination.path in self._dirty

    @property
    def dirty_paths(self) -> tuple[str, ...]:
        return tuple(sorted(self._dirty))

    def save(self) -> tuple[str, ...]:
        """Nothing to write in memory; forget the dirty marks and return them."""
        saved = self.dirty_paths
        self._dirty.clear()
        return saved


# -----------------------------------------------------------------------------
# SQLAlchemy store
# -----------------------------------------------------------------------------


class SqlRecordStore:
    """
    Collections persisted through SQLAlchemy.

    Loaded and created collections are cached for the lifetime of the store,
    so repeated exports of one destination refresh the same object. Nothing
    reaches the database until ``save`` writes the dirty collections; the
    caller owns the transaction (commit/rollback).
    """

    def __init__(self, session: Session, schemas: SchemaRegistry) -> None:
        self._session = session
        self._schemas = schemas
        self._collections: dict[str, RecordCollection] = {}
        self._dirty: set[str] = set()

    def _get_model(self, path: str) -> ExportedCollectionModel | None:
        return self._session.execute(
            select(ExportedCollectionModel)
            .where(ExportedCollectionModel.path == path)
            .options(selectinload(ExportedCollectionModel.records))
        ).scalar_one_or_none()

    def load(self, destination: DestinationLocator) -> RecordCollection | None:
        path = destination.path
        if path in self._collections:
            return self._collections[path]

        model = self._get_model(path)
        if model is None:
            return None

        if model.schema_name not in self._schemas:
            # Unreadable here; the next save of this path overwrites it
            logger.warning(
                "collection_schema_unregistered",
                extra={"path": path, "schema_name": model.schema_name},
            )
            return None

        schema = self._schemas.get(model.schema_name)
        collection = RecordCollection(
            schema, (payload_to_record(schema, r.payload) for r in model.records)
        )
        self._collections[path] = collection
        logger.debug("collection_loaded", extra={"path": path, "record_count": len(collection)})
        return collection

    def create(self, destination: DestinationLocator, schema: RecordSchema) -> RecordCollection:
        collection = RecordCollection(schema)
        self._collections[destination.path] = collection
        logger.info("collection_created", extra={"path": destination.path, "schema_name": schema.name})
        return collection

    def mark_dirty(self, destination: DestinationLocator) -> None:
        self._dirty.add(destination.path)

    @property
    def dirty_paths(self) -> tuple[str, ...]:
        return tuple(sorted(self._dirty))

    def save(self) -> tuple[str, ...]:
        """Write every dirty collection, replacing its stored records. Flushes, never commits."""
        saved: list[str] = []
        for path in sorted(self._dirty):
            collection = self._collections[path]
            schema = collection.schema

            model = self._get_model(path)
            if model is None:
                model = ExportedCollectionModel(path=path, schema_name=schema.name)
                self._session.add(model)
            else:
                model.schema_name = schema.name
                model.records.clear()
                # Old rows must be gone before new positions are inserted
                self._session.flush()

            for position, record in enumerate(collection):
                key = schema.key_of(record)
                if isinstance(key, Enum):
                    key = key.value
                model.records.append(
                    ExportedRecordModel(
                        position=position,
                        record_key=None if key is None else str(key),
                        payload=record_to_payload(schema, record),
                    )
                )
            model.record_count = len(collection)
            saved.append(path)

        self._session.flush()
        self._dirty.clear()
        if saved:
            logger.info("collections_saved", extra={"paths": saved})
        return tuple(saved)
