from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

from cardledger.api.deps import (
    get_catalog_cache,
    get_collection_store,
    get_kv_storage,
    get_preference_store,
)
from cardledger.db.storage import InMemoryStorage
from cardledger.main import app
from cardledger.models.failure import CatalogLoadError
from cardledger.models.item import Item, Rarity
from cardledger.models.preferences import CatalogVariant
from cardledger.services.catalog import CatalogCache
from cardledger.services.collection_store import CollectionStore
from cardledger.services.preferences import PreferenceStore


def make_item(
    item_id: str,
    name: str | None = None,
    collector_number: str = "1",
    rarity: Rarity = Rarity.COMMON,
    has_non_foil: bool = True,
    has_foil: bool = True,
    price_non_foil: float | None = None,
    price_foil: float | None = None,
) -> Item:
    """Build a catalog item with sensible defaults."""
    return Item(
        id=item_id,
        name=name or f"Card {item_id}",
        collector_number=collector_number,
        rarity=rarity,
        has_non_foil=has_non_foil,
        has_foil=has_foil,
        price_non_foil=price_non_foil,
        price_foil=price_foil,
    )


class FakeProvider:
    """Catalog provider returning canned items, or failing on demand."""

    def __init__(self, items: list[Item]) -> None:
        self.items = items
        self.fail = False
        self.calls: list[tuple[str, CatalogVariant]] = []

    async def fetch_set_items(
        self, set_code: str, variant: CatalogVariant = CatalogVariant.DEFAULT
    ) -> list[Item]:
        self.calls.append((set_code, variant))
        if self.fail:
            raise CatalogLoadError(f"Failed to load catalog for {set_code}", detail="HTTP 503")
        return list(self.items)


@pytest.fixture
def storage() -> InMemoryStorage:
    """Empty in-memory key-value storage."""
    return InMemoryStorage()


@pytest.fixture
def store(storage: InMemoryStorage) -> CollectionStore:
    """Collection store over in-memory storage."""
    return CollectionStore(storage)


@pytest.fixture
def preference_store(storage: InMemoryStorage) -> PreferenceStore:
    return PreferenceStore(storage)


@pytest.fixture
def sample_items() -> list[Item]:
    """A small set covering every rarity and printing combination."""
    return [
        make_item(
            "cloud",
            name="Cloud, Ex-SOLDIER",
            collector_number="10",
            rarity=Rarity.MYTHIC,
            price_non_foil=12.0,
            price_foil=30.0,
        ),
        make_item(
            "tifa",
            name="Tifa Lockhart",
            collector_number="2",
            rarity=Rarity.RARE,
            price_non_foil=4.5,
            price_foil=None,
            has_foil=False,
        ),
        make_item(
            "moogle",
            name="Moogle",
            collector_number="10a",
            rarity=Rarity.COMMON,
            price_non_foil=0.1,
            price_foil=0.5,
        ),
        make_item(
            "chocobo",
            name="Chocobo Racer",
            collector_number="1a",
            rarity=Rarity.UNCOMMON,
            price_non_foil=None,
            price_foil=2.0,
            has_non_foil=False,
        ),
    ]


@pytest.fixture
def provider(sample_items: list[Item]) -> FakeProvider:
    return FakeProvider(sample_items)


@pytest.fixture
async def client(
    storage: InMemoryStorage,
    store: CollectionStore,
    preference_store: PreferenceStore,
    provider: FakeProvider,
) -> AsyncGenerator[AsyncClient, None]:
    """Async test client with in-memory storage and a fake catalog."""
    catalog = CatalogCache(provider)

    app.dependency_overrides[get_kv_storage] = lambda: storage
    app.dependency_overrides[get_collection_store] = lambda: store
    app.dependency_overrides[get_preference_store] = lambda: preference_store
    app.dependency_overrides[get_catalog_cache] = lambda: catalog

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
