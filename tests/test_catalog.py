"""Tests for Scryfall catalog loading."""

import httpx
import pytest
import respx

from cardledger.models.failure import CatalogLoadError
from cardledger.models.preferences import CatalogVariant
from cardledger.services.catalog import (
    CatalogCache,
    ScryfallCatalogProvider,
    build_search_params,
)
from conftest import FakeProvider, make_item

BASE_URL = "https://scryfall.test"
SEARCH_URL = f"{BASE_URL}/cards/search"


def _card(card_id: str, collector_number: str = "1") -> dict:
    return {
        "id": card_id,
        "name": f"Card {card_id}",
        "collector_number": collector_number,
        "rarity": "common",
        "nonfoil": True,
        "foil": False,
        "prices": {"eur": "0.10", "eur_foil": None},
    }


def _page(cards: list[dict], next_page: str | None = None) -> dict:
    page: dict = {"object": "list", "has_more": next_page is not None, "data": cards}
    if next_page:
        page["next_page"] = next_page
    return page


@pytest.fixture
def provider() -> ScryfallCatalogProvider:
    return ScryfallCatalogProvider(base_url=BASE_URL, page_delay=0, max_pages=3)


class TestBuildSearchParams:
    def test_default_variant(self) -> None:
        assert build_search_params("FIN", CatalogVariant.DEFAULT) == {"q": "set:fin"}

    def test_all_prints(self) -> None:
        assert build_search_params("fin", CatalogVariant.ALL_PRINTS) == {
            "q": "set:fin",
            "unique": "prints",
        }


class TestScryfallCatalogProvider:
    """Tests for fetching a set from Scryfall."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_single_page(self, provider: ScryfallCatalogProvider) -> None:
        route = respx.get(SEARCH_URL).mock(
            return_value=httpx.Response(200, json=_page([_card("a"), _card("b")]))
        )

        items = await provider.fetch_set_items("FIN")

        assert [item.id for item in items] == ["a", "b"]
        assert route.calls.last.request.url.params["q"] == "set:fin"

    @pytest.mark.asyncio
    @respx.mock
    async def test_follows_pagination(self, provider: ScryfallCatalogProvider) -> None:
        """Every page is fetched and concatenated in order."""
        route = respx.get(SEARCH_URL).mock(
            side_effect=[
                httpx.Response(200, json=_page([_card("a")], f"{SEARCH_URL}?page=2&q=set%3Afin")),
                httpx.Response(200, json=_page([_card("b")], f"{SEARCH_URL}?page=3&q=set%3Afin")),
                httpx.Response(200, json=_page([_card("c")])),
            ]
        )

        items = await provider.fetch_set_items("fin")

        assert [item.id for item in items] == ["a", "b", "c"]
        assert route.call_count == 3
        assert route.calls[1].request.url.params["page"] == "2"

    @pytest.mark.asyncio
    @respx.mock
    async def test_all_prints_query(self, provider: ScryfallCatalogProvider) -> None:
        route = respx.get(SEARCH_URL).mock(return_value=httpx.Response(200, json=_page([])))

        await provider.fetch_set_items("fin", CatalogVariant.ALL_PRINTS)

        assert route.calls.last.request.url.params["unique"] == "prints"

    @pytest.mark.asyncio
    @respx.mock
    async def test_http_error_raises(self, provider: ScryfallCatalogProvider) -> None:
        respx.get(SEARCH_URL).mock(return_value=httpx.Response(404))

        with pytest.raises(CatalogLoadError, match="Failed to load catalog") as exc_info:
            await provider.fetch_set_items("nope")

        assert exc_info.value.detail == "HTTP 404"
        assert exc_info.value.status_code == 502

    @pytest.mark.asyncio
    @respx.mock
    async def test_failure_on_later_page_returns_nothing(
        self, provider: ScryfallCatalogProvider
    ) -> None:
        """A failed page discards the pages already fetched."""
        respx.get(SEARCH_URL).mock(
            side_effect=[
                httpx.Response(200, json=_page([_card("a")], f"{SEARCH_URL}?page=2")),
                httpx.Response(500),
            ]
        )

        with pytest.raises(CatalogLoadError):
            await provider.fetch_set_items("fin")

    @pytest.mark.asyncio
    @respx.mock
    async def test_network_error_raises(self, provider: ScryfallCatalogProvider) -> None:
        respx.get(SEARCH_URL).mock(side_effect=httpx.ConnectError("connection refused"))

        with pytest.raises(CatalogLoadError):
            await provider.fetch_set_items("fin")

    @pytest.mark.asyncio
    @respx.mock
    async def test_invalid_json_raises(self, provider: ScryfallCatalogProvider) -> None:
        respx.get(SEARCH_URL).mock(return_value=httpx.Response(200, content=b"<html>"))

        with pytest.raises(CatalogLoadError) as exc_info:
            await provider.fetch_set_items("fin")

        assert exc_info.value.detail == "Response was not valid JSON"

    @pytest.mark.asyncio
    @respx.mock
    async def test_next_page_query_is_sent(self, provider: ScryfallCatalogProvider) -> None:
        """Follow-up requests keep the query string from next_page."""

        def respond(request: httpx.Request) -> httpx.Response:
            if request.url.params.get("page") == "2":
                return httpx.Response(200, json=_page([_card("b")]))
            return httpx.Response(200, json=_page([_card("a")], f"{SEARCH_URL}?page=2&q=set%3Afin"))

        route = respx.get(SEARCH_URL).mock(side_effect=respond)

        items = await provider.fetch_set_items("fin")

        assert [item.id for item in items] == ["a", "b"]
        assert route.call_count == 2
        assert route.calls[1].request.url.params["q"] == "set:fin"

    @pytest.mark.asyncio
    @respx.mock
    @pytest.mark.parametrize(
        "body",
        [[], {"data": None, "has_more": False}, {"object": "error", "status": 400}, "text"],
    )
    async def test_unexpected_page_shape_raises(
        self, provider: ScryfallCatalogProvider, body
    ) -> None:
        respx.get(SEARCH_URL).mock(return_value=httpx.Response(200, json=body))

        with pytest.raises(CatalogLoadError) as exc_info:
            await provider.fetch_set_items("fin")

        assert exc_info.value.detail == "Unexpected page shape"

    @pytest.mark.asyncio
    @respx.mock
    async def test_malformed_card_raises(self, provider: ScryfallCatalogProvider) -> None:
        respx.get(SEARCH_URL).mock(
            return_value=httpx.Response(200, json=_page([{"name": "No id"}]))
        )

        with pytest.raises(CatalogLoadError, match="Failed to load catalog"):
            await provider.fetch_set_items("fin")

    @pytest.mark.asyncio
    @respx.mock
    async def test_page_limit(self, provider: ScryfallCatalogProvider) -> None:
        """A next_page chain longer than max_pages is an error."""
        route = respx.get(SEARCH_URL).mock(
            return_value=httpx.Response(200, json=_page([_card("a")], f"{SEARCH_URL}?page=2"))
        )

        with pytest.raises(CatalogLoadError) as exc_info:
            await provider.fetch_set_items("fin")

        assert route.call_count == 3
        assert "3 pages" in (exc_info.value.detail or "")


class TestCatalogCache:
    """Tests for the last-good catalog cache."""

    @pytest.mark.asyncio
    async def test_load_fetches_once(self) -> None:
        provider = FakeProvider([make_item("a")])
        cache = CatalogCache(provider)

        await cache.load("fin", CatalogVariant.DEFAULT)
        await cache.load("FIN", CatalogVariant.DEFAULT)

        assert len(provider.calls) == 1

    @pytest.mark.asyncio
    async def test_items_sorted_by_collector_number(self) -> None:
        provider = FakeProvider(
            [
                make_item("x", collector_number="10"),
                make_item("y", collector_number="2"),
                make_item("z", collector_number="1a"),
            ]
        )
        cache = CatalogCache(provider)

        items = await cache.refresh("fin", CatalogVariant.DEFAULT)

        assert [item.id for item in items] == ["z", "y", "x"]

    @pytest.mark.asyncio
    async def test_failed_refresh_keeps_previous_items(self) -> None:
        """A failed reload never replaces a good catalog."""
        provider = FakeProvider([make_item("a")])
        cache = CatalogCache(provider)
        await cache.refresh("fin", CatalogVariant.DEFAULT)

        provider.fail = True
        with pytest.raises(CatalogLoadError):
            await cache.refresh("fin", CatalogVariant.DEFAULT)

        assert [item.id for item in cache.get("fin", CatalogVariant.DEFAULT) or []] == ["a"]

    @pytest.mark.asyncio
    async def test_failed_first_load_leaves_cache_empty(self) -> None:
        provider = FakeProvider([])
        provider.fail = True
        cache = CatalogCache(provider)

        with pytest.raises(CatalogLoadError):
            await cache.load("fin", CatalogVariant.DEFAULT)

        assert cache.get("fin", CatalogVariant.DEFAULT) is None

    @pytest.mark.asyncio
    async def test_variants_cached_separately(self) -> None:
        provider = FakeProvider([make_item("a")])
        cache = CatalogCache(provider)

        await cache.load("fin", CatalogVariant.DEFAULT)
        await cache.load("fin", CatalogVariant.ALL_PRINTS)

        assert len(provider.calls) == 2
