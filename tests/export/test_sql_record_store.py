"""Tests for masterdata_export.stores (payload conversion, in-memory and SQLAlchemy stores)."""

from sqlalchemy import select

from masterdata_export.coordinator import ExportCoordinator
from masterdata_export.models import ExportedCollectionModel, ExportedRecordModel
from masterdata_export.stores import (
    InMemoryRecordStore,
    RecordStore,
    SqlRecordStore,
    payload_to_record,
    record_to_payload,
)
from masterdata_export.types import DestinationLocator
from masterdata_kernel.domain.schema import SchemaRegistry

from masterdata_samples import (
    ITEM_SCHEMA,
    WEAPON_ROWS,
    WEAPON_SCHEMA,
    Item,
    Rank,
    Rarity,
    Weapon,
    make_registry,
)

DEST = DestinationLocator("Assets/MasterData", "Items", "Weapons")


class TestPayloads:
    def test_enums_stored_by_value(self):
        payload = record_to_payload(ITEM_SCHEMA, Item(1, "sword", Rank.HIGH))
        assert payload == {"id": 1, "label": "sword", "rank": 2}

    def test_payload_to_record(self):
        weapon = Weapon(3, "bow", 1.5, True, "B", Rarity.RARE)
        payload = record_to_payload(WEAPON_SCHEMA, weapon)
        assert payload["rarity"] == 5
        assert payload_to_record(WEAPON_SCHEMA, payload) == weapon

    def test_missing_keys_default_and_unknown_ignored(self):
        assert payload_to_record(ITEM_SCHEMA, {"id": 4, "price": 10}) == Item(id=4)


class TestInMemoryRecordStore:
    def test_create_load_dirty_save(self):
        store = InMemoryRecordStore()
        assert store.load(DEST) is None

        collection = store.create(DEST, ITEM_SCHEMA)
        assert store.load(DEST) is collection
        assert not store.is_dirty(DEST)

        store.mark_dirty(DEST)
        assert store.dirty_paths == (DEST.path,)
        assert store.save() == (DEST.path,)
        assert store.dirty_paths == ()

    def test_satisfies_protocol(self, session):
        assert isinstance(InMemoryRecordStore(), RecordStore)
        assert isinstance(SqlRecordStore(session, make_registry()), RecordStore)


class TestSqlRecordStore:
    def _stored_rows(self, session) -> list[ExportedRecordModel]:
        return list(
            session.execute(
                select(ExportedRecordModel).order_by(ExportedRecordModel.position)
            ).scalars()
        )

    def test_save_writes_dirty_collections(self, session):
        store = SqlRecordStore(session, make_registry())
        collection = store.create(DEST, ITEM_SCHEMA)
        collection.replace([Item(2, "shield", Rank.MID), Item(1, "sword", Rank.HIGH)])
        store.mark_dirty(DEST)

        assert store.save() == (DEST.path,)

        model = session.execute(select(ExportedCollectionModel)).scalar_one()
        assert model.path == "Assets/MasterData/Items/Weapons"
        assert model.schema_name == "items"
        assert model.record_count == 2
        rows = self._stored_rows(session)
        assert [(r.position, r.record_key) for r in rows] == [(0, "2"), (1, "1")]
        assert rows[1].payload == {"id": 1, "label": "sword", "rank": 2}

    def test_clean_collections_not_written(self, session):
        store = SqlRecordStore(session, make_registry())
        store.create(DEST, ITEM_SCHEMA).append(Item(1))

        assert store.save() == ()
        assert session.execute(select(ExportedCollectionModel)).first() is None

    def test_load_from_database(self, session):
        store = SqlRecordStore(session, make_registry())
        store.create(DEST, ITEM_SCHEMA).extend([Item(1, "a", Rank.LOW), Item(2, "b", Rank.HIGH)])
        store.mark_dirty(DEST)
        store.save()
        session.commit()
        session.expunge_all()

        fresh = SqlRecordStore(session, make_registry())
        loaded = fresh.load(DEST)
        assert loaded.to_list() == [Item(1, "a", Rank.LOW), Item(2, "b", Rank.HIGH)]
        assert loaded.schema is ITEM_SCHEMA
        assert fresh.load(DEST) is loaded

    def test_load_missing(self, session):
        assert SqlRecordStore(session, make_registry()).load(DEST) is None

    def test_resave_replaces_rows(self, session):
        store = SqlRecordStore(session, make_registry())
        collection = store.create(DEST, ITEM_SCHEMA)
        collection.replace([Item(1), Item(2), Item(3)])
        store.mark_dirty(DEST)
        store.save()

        collection.replace([Item(9, "only")])
        store.mark_dirty(DEST)
        store.save()

        rows = self._stored_rows(session)
        assert [(r.position, r.record_key) for r in rows] == [(0, "9")]
        assert session.execute(select(ExportedCollectionModel)).scalar_one().record_count == 1

    def test_unregistered_schema_loads_as_absent(self, session, captured_logs):
        store = SqlRecordStore(session, make_registry())
        store.create(DEST, ITEM_SCHEMA).append(Item(1))
        store.mark_dirty(DEST)
        store.save()
        session.commit()
        session.expunge_all()

        assert SqlRecordStore(session, SchemaRegistry()).load(DEST) is None
        warning = next(
            r for r in captured_logs() if r["message"] == "collection_schema_unregistered"
        )
        assert warning["level"] == "WARNING"
        assert warning["schema_name"] == "items"

    def test_unregistered_schema_destination_can_be_refreshed(self, session, sheet_source):
        store = SqlRecordStore(session, make_registry())
        store.create(DEST, ITEM_SCHEMA).append(Item(1))
        store.mark_dirty(DEST)
        store.save()
        session.commit()
        session.expunge_all()

        sheet_source.add_sheet("Gear.xlsx", "Weapons", WEAPON_ROWS)
        fresh = SqlRecordStore(session, SchemaRegistry((WEAPON_SCHEMA,)))
        ExportCoordinator(sheet_source, fresh).export_one(WEAPON_SCHEMA, "Gear.xlsx", DEST)

        assert fresh.save() == (DEST.path,)
        model = session.execute(select(ExportedCollectionModel)).scalar_one()
        assert model.schema_name == "weapons"
        assert [r.payload["name"] for r in self._stored_rows(session)] == ["axe"]

    def test_schema_change_at_destination(self, session, sheet_source):
        sheet_source.add_sheet("Gear.xlsx", "Weapons", WEAPON_ROWS)
        store = SqlRecordStore(session, make_registry())
        coordinator = ExportCoordinator(sheet_source, store)

        coordinator.export_one(ITEM_SCHEMA, "Items.xlsx", DEST)
        store.save()
        coordinator.export_one(WEAPON_SCHEMA, "Gear.xlsx", DEST)

        assert store.save() == (DEST.path,)
        assert store.load(DEST).schema is WEAPON_SCHEMA
        model = session.execute(select(ExportedCollectionModel)).scalar_one()
        assert model.schema_name == "weapons"
        assert model.record_count == 1
        assert self._stored_rows(session)[0].payload == {
            "id": 1,
            "name": "axe",
            "power": 2.5,
            "stackable": True,
            "grade": "A",
            "rarity": 5,
        }

    def test_export_then_save(self, session, sheet_source):
        store = SqlRecordStore(session, make_registry())
        coordinator = ExportCoordinator(sheet_source, store)

        coordinator.export_one(ITEM_SCHEMA, "Items.xlsx", DEST)
        coordinator.export_one(ITEM_SCHEMA, "Items.xlsx", DEST)
        store.save()

        rows = self._stored_rows(session)
        assert [r.record_key for r in rows] == ["1", "2", "3"]

    def test_unavailable_source_keeps_saved_rows(self, session, sheet_source, captured_logs):
        store = SqlRecordStore(session, make_registry())
        coordinator = ExportCoordinator(sheet_source, store)
        coordinator.export_one(ITEM_SCHEMA, "Items.xlsx", DEST)
        store.save()
        session.commit()
        session.expunge_all()

        sheet_source.remove_source("Items.xlsx")
        fresh = SqlRecordStore(session, make_registry())
        ExportCoordinator(sheet_source, fresh).export_one(ITEM_SCHEMA, "Items.xlsx", DEST)

        assert fresh.save() == ()
        assert [r.record_key for r in self._stored_rows(session)] == ["1", "2", "3"]
        assert any(r["message"] == "collections_saved" for r in captured_logs())
