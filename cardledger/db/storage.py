"""
Key-value storage backends.

The collection store and preferences only need three string slots, so
persistence is reduced to get/set/remove on opaque string values.
"""

import logging
from functools import lru_cache
from typing import Protocol

from sqlalchemy import delete
from sqlalchemy.orm import Session, sessionmaker

from cardledger.models.db import KeyValueEntryDB

logger = logging.getLogger(__name__)


class KeyValueStorage(Protocol):
    """Durable string slots addressed by key."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class InMemoryStorage:
    """Dict-backed storage. Contents are lost with the instance."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._data)


class SqlKeyValueStorage:
    """
    Storage backed by the `kv_entries` table.

    Each call runs in its own transaction, so a successful `set`
    is durable when it returns.
    """

    def __init__(self, factory: sessionmaker[Session]) -> None:
        self._factory = factory

    def get(self, key: str) -> str | None:
        with self._factory() as session:
            entry = session.get(KeyValueEntryDB, key)
            return entry.value if entry is not None else None

    def set(self, key: str, value: str) -> None:
        with self._factory() as session, session.begin():
            entry = session.get(KeyValueEntryDB, key)
            if entry is None:
                session.add(KeyValueEntryDB(key=key, value=value))
            else:
                entry.value = value
        logger.debug("Stored %d bytes under %s", len(value), key)

    def remove(self, key: str) -> None:
        with self._factory() as session, session.begin():
            session.execute(delete(KeyValueEntryDB).where(KeyValueEntryDB.key == key))


@lru_cache(maxsize=1)
def get_storage() -> KeyValueStorage:
    """
    Get the application-wide storage.

    Cached after first call. Tables are created on first use.
    """
    from cardledger.db.database import init_db, session_factory

    init_db()
    return SqlKeyValueStorage(session_factory)
