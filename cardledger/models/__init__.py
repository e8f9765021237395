from cardledger.models.failure import (
    ApiResponse,
    CatalogLoadError,
    FailureDetail,
    FailureKind,
    ImportValidationError,
    KnownError,
    OutcomeType,
    RecordNotFoundError,
)
from cardledger.models.item import Item, Rarity, cardmarket_url
from cardledger.models.ownership import OwnershipRecord, OwnershipStatus
from cardledger.models.preferences import (
    DEFAULT_CATALOG_VARIANT,
    DEFAULT_LANGUAGE,
    CatalogVariant,
    Language,
)

__all__ = [
    "ApiResponse",
    "CatalogLoadError",
    "CatalogVariant",
    "DEFAULT_CATALOG_VARIANT",
    "DEFAULT_LANGUAGE",
    "FailureDetail",
    "FailureKind",
    "ImportValidationError",
    "Item",
    "KnownError",
    "Language",
    "OutcomeType",
    "OwnershipRecord",
    "OwnershipStatus",
    "Rarity",
    "RecordNotFoundError",
    "cardmarket_url",
]
