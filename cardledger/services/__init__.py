"""
cardledger services.

Business logic for the collection ledger, catalog loading, preferences
and backups.
"""

from cardledger.services.backup import (
    export_collection,
    export_to_file,
    import_collection,
    import_from_file,
)
from cardledger.services.catalog import (
    CatalogCache,
    CatalogProvider,
    ScryfallCatalogProvider,
    build_search_params,
)
from cardledger.services.collection_store import CollectionStore, LedgerSnapshot
from cardledger.services.preferences import PreferenceStore

__all__ = [
    "CatalogCache",
    "CatalogProvider",
    "CollectionStore",
    "LedgerSnapshot",
    "PreferenceStore",
    "ScryfallCatalogProvider",
    "build_search_params",
    "export_collection",
    "export_to_file",
    "import_collection",
    "import_from_file",
]
