"""
Catalog API endpoints.

Serves a set's items joined with the user's ledger, filtered and sorted,
together with collection statistics. Handlers stay `async def` so store
access is serialized on the event loop.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from cardledger.analysis.statistics import CollectionStats, summarize
from cardledger.api.deps import get_catalog_cache, get_collection_store, get_preference_store
from cardledger.config import settings
from cardledger.filtering.filters import (
    FilterCriteria,
    OwnershipFilter,
    PrintFilter,
    RarityFilter,
    filter_items,
)
from cardledger.filtering.sorting import SortKey, sort_items
from cardledger.models.item import Item, Rarity, cardmarket_url
from cardledger.models.ownership import OwnershipRecord, OwnershipStatus
from cardledger.models.preferences import CatalogVariant
from cardledger.services.catalog import CatalogCache
from cardledger.services.collection_store import CollectionStore
from cardledger.services.preferences import PreferenceStore

router = APIRouter(prefix="/catalog", tags=["catalog"])


class CatalogItemModel(BaseModel):
    """A catalog item with the user's ownership of it."""

    id: str
    name: str
    collector_number: str
    rarity: Rarity
    has_non_foil: bool
    has_foil: bool
    price_non_foil: float | None = None
    price_foil: float | None = None
    image_url: str = ""
    cardmarket_url: str
    normal_qty: int = 0
    foil_qty: int = 0
    wanted: bool = False

    @classmethod
    def from_item(cls, item: Item, record: OwnershipRecord | None) -> "CatalogItemModel":
        return cls(
            id=item.id,
            name=item.name,
            collector_number=item.collector_number,
            rarity=item.rarity,
            has_non_foil=item.has_non_foil,
            has_foil=item.has_foil,
            price_non_foil=item.price_non_foil,
            price_foil=item.price_foil,
            image_url=item.image_url,
            cardmarket_url=cardmarket_url(item),
            normal_qty=record.normal_qty if record else 0,
            foil_qty=record.foil_qty if record else 0,
            wanted=record.wanted if record else False,
        )


class StatsResponse(BaseModel):
    """Overall, per-rarity and filtered statistics."""

    overall: CollectionStats
    by_rarity: dict[Rarity, CollectionStats] = Field(default_factory=dict)
    filtered: CollectionStats


class CatalogResponse(BaseModel):
    """Response model for a catalog view."""

    set_code: str
    variant: CatalogVariant
    total_items: int
    items: list[CatalogItemModel] = Field(default_factory=list)
    stats: StatsResponse


class RefreshResponse(BaseModel):
    """Response model for a catalog reload."""

    set_code: str
    variant: CatalogVariant
    total_items: int


def _resolve_variant(
    variant: CatalogVariant | None, preferences: PreferenceStore
) -> CatalogVariant:
    return variant if variant is not None else preferences.get_catalog_variant()


@router.get("", response_model=CatalogResponse)
async def get_catalog(
    catalog: Annotated[CatalogCache, Depends(get_catalog_cache)],
    store: Annotated[CollectionStore, Depends(get_collection_store)],
    preferences: Annotated[PreferenceStore, Depends(get_preference_store)],
    set_code: str | None = None,
    variant: CatalogVariant | None = None,
    search: str = "",
    rarity: RarityFilter = RarityFilter.ALL,
    ownership: OwnershipFilter = OwnershipFilter.ALL,
    print_type: PrintFilter = PrintFilter.ALL,
    sort: SortKey = SortKey.COLLECTOR_NUMBER_ASC,
) -> CatalogResponse:
    """
    Get a filtered, sorted view of a set.

    The set is fetched from Scryfall on first use and cached. Filtering
    and statistics read one ledger snapshot, so counts and rows agree.
    """
    code = set_code or settings.default_set_code
    mode = _resolve_variant(variant, preferences)
    items = await catalog.load(code, mode)

    ledger = store.snapshot()
    criteria = FilterCriteria(
        search_term=search,
        rarity=rarity,
        ownership=ownership,
        print_type=print_type,
    )

    filtered = filter_items(
        items, criteria, lambda item_id: OwnershipStatus.from_record(ledger.get(item_id))
    )
    ordered = sort_items(filtered, sort)
    summary = summarize(items, filtered, ledger, ownership)

    return CatalogResponse(
        set_code=code,
        variant=mode,
        total_items=len(items),
        items=[CatalogItemModel.from_item(item, ledger.get(item.id)) for item in ordered],
        stats=StatsResponse(
            overall=summary.overall,
            by_rarity=summary.by_rarity,
            filtered=summary.filtered,
        ),
    )


@router.post("/refresh", response_model=RefreshResponse)
async def refresh_catalog(
    catalog: Annotated[CatalogCache, Depends(get_catalog_cache)],
    preferences: Annotated[PreferenceStore, Depends(get_preference_store)],
    set_code: str | None = None,
    variant: CatalogVariant | None = None,
) -> RefreshResponse:
    """
    Fetch a set from Scryfall again.

    On failure the previously loaded items stay cached.
    """
    code = set_code or settings.default_set_code
    mode = _resolve_variant(variant, preferences)
    items = await catalog.refresh(code, mode)
    return RefreshResponse(set_code=code, variant=mode, total_items=len(items))
