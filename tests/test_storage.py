"""Tests for key-value storage backends."""

from pathlib import Path

import pytest
from sqlalchemy import create_engine, select
from sqlalchemy.orm import Session, sessionmaker

from cardledger.db.storage import InMemoryStorage, SqlKeyValueStorage
from cardledger.models.db import Base, KeyValueEntryDB
from cardledger.services.collection_store import CollectionStore


@pytest.fixture
def session_factory(tmp_path: Path):
    """Session factory over a fresh SQLite file."""
    engine = create_engine(f"sqlite:///{tmp_path / 'test.db'}")
    Base.metadata.create_all(engine)
    yield sessionmaker(engine, class_=Session, expire_on_commit=False)
    engine.dispose()


@pytest.fixture
def sql_storage(session_factory) -> SqlKeyValueStorage:
    return SqlKeyValueStorage(session_factory)


class TestInMemoryStorage:
    def test_get_missing(self) -> None:
        assert InMemoryStorage().get("nope") is None

    def test_set_get_remove(self) -> None:
        storage = InMemoryStorage()

        storage.set("k", "v")
        assert storage.get("k") == "v"

        storage.remove("k")
        assert storage.get("k") is None

    def test_remove_missing_is_noop(self) -> None:
        InMemoryStorage().remove("nope")

    def test_initial_contents_are_copied(self) -> None:
        initial = {"k": "v"}
        storage = InMemoryStorage(initial)

        storage.set("other", "x")

        assert initial == {"k": "v"}
        assert sorted(storage.keys()) == ["k", "other"]


class TestSqlKeyValueStorage:
    def test_get_missing(self, sql_storage: SqlKeyValueStorage) -> None:
        assert sql_storage.get("nope") is None

    def test_set_inserts_then_updates(
        self, sql_storage: SqlKeyValueStorage, session_factory
    ) -> None:
        sql_storage.set("k", "one")
        sql_storage.set("k", "two")

        assert sql_storage.get("k") == "two"
        with session_factory() as session:
            rows = session.scalars(select(KeyValueEntryDB)).all()
        assert [(row.key, row.value) for row in rows] == [("k", "two")]

    def test_remove(self, sql_storage: SqlKeyValueStorage) -> None:
        sql_storage.set("k", "v")

        sql_storage.remove("k")
        sql_storage.remove("k")

        assert sql_storage.get("k") is None

    def test_survives_new_storage_instance(self, session_factory) -> None:
        """Values are durable once set returns."""
        SqlKeyValueStorage(session_factory).set("k", "v")

        assert SqlKeyValueStorage(session_factory).get("k") == "v"

    def test_collection_store_round_trip(self, session_factory) -> None:
        """The collection store persists through the SQL backend."""
        store = CollectionStore(SqlKeyValueStorage(session_factory))
        store.set_quantities("a", 2, 1)
        store.toggle_wanted("b")

        reloaded = CollectionStore(SqlKeyValueStorage(session_factory))

        assert reloaded.get_normal_qty("a") == 2
        assert reloaded.get_foil_qty("a") == 1
        assert reloaded.is_wanted("b")
