from cardledger.db.database import init_db
from cardledger.db.storage import (
    InMemoryStorage,
    KeyValueStorage,
    SqlKeyValueStorage,
    get_storage,
)

__all__ = [
    "InMemoryStorage",
    "KeyValueStorage",
    "SqlKeyValueStorage",
    "get_storage",
    "init_db",
]
