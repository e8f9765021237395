"""
Shared FastAPI dependencies.

Each dependency is a process-wide singleton; tests swap them out through
`app.dependency_overrides`.
"""

from functools import lru_cache

from cardledger.db.storage import KeyValueStorage, get_storage
from cardledger.services.catalog import CatalogCache, ScryfallCatalogProvider
from cardledger.services.collection_store import CollectionStore
from cardledger.services.preferences import PreferenceStore


def get_kv_storage() -> KeyValueStorage:
    return get_storage()


@lru_cache(maxsize=1)
def get_collection_store() -> CollectionStore:
    return CollectionStore(get_storage())


@lru_cache(maxsize=1)
def get_preference_store() -> PreferenceStore:
    return PreferenceStore(get_storage())


@lru_cache(maxsize=1)
def get_catalog_cache() -> CatalogCache:
    return CatalogCache(ScryfallCatalogProvider())
