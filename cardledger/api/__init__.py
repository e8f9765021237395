from cardledger.api.catalog import router as catalog_router
from cardledger.api.collection import router as collection_router
from cardledger.api.health import router as health_router
from cardledger.api.preferences import router as preferences_router

__all__ = [
    "catalog_router",
    "collection_router",
    "health_router",
    "preferences_router",
]
