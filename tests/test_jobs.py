"""Tests for command-line jobs."""

import pytest

from cardledger.jobs.refresh_catalog import run_refresh
from cardledger.models.failure import CatalogLoadError
from cardledger.models.preferences import CatalogVariant
from cardledger.services.collection_store import CollectionStore
from conftest import FakeProvider


class TestRunRefresh:
    @pytest.mark.asyncio
    async def test_reports_stats(self, provider: FakeProvider, store: CollectionStore) -> None:
        store.set_quantities("cloud", 2, 0)
        store.set_quantities("tifa", 1, 0)

        stats = await run_refresh(provider, store, "fin", CatalogVariant.DEFAULT)

        assert stats.total_cards == 4
        assert stats.owned_cards == 2
        assert stats.repeated_cards == 1
        assert stats.collection_value == 28.5
        assert provider.calls == [("fin", CatalogVariant.DEFAULT)]

    @pytest.mark.asyncio
    async def test_propagates_load_failure(
        self, provider: FakeProvider, store: CollectionStore
    ) -> None:
        provider.fail = True

        with pytest.raises(CatalogLoadError):
            await run_refresh(provider, store, "fin", CatalogVariant.DEFAULT)
