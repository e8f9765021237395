"""
Catalog provider backed by the Scryfall search API.

Fetches every card of a set, following Scryfall's cursor pagination
until the last page. Respects Scryfall rate limits (10 requests/second).

Pages are accumulated locally and only handed out once the last page
has arrived, so callers never see a partial catalog.
"""

import asyncio
import logging
from typing import Any, Protocol

import httpx

from cardledger.config import settings
from cardledger.filtering.sorting import SortKey, sort_items
from cardledger.models.failure import CatalogLoadError
from cardledger.models.item import Item
from cardledger.models.preferences import CatalogVariant
from cardledger.parsers.scryfall import ScryfallPage, parse_cards

logger = logging.getLogger(__name__)


class CatalogProvider(Protocol):
    """Anything that can list the items of a set."""

    async def fetch_set_items(
        self, set_code: str, variant: CatalogVariant = CatalogVariant.DEFAULT
    ) -> list[Item]: ...


def build_search_params(set_code: str, variant: CatalogVariant) -> dict[str, str]:
    """Query parameters for the first page of a set search."""
    params = {"q": f"set:{set_code.lower()}"}
    if variant == CatalogVariant.ALL_PRINTS:
        params["unique"] = "prints"
    return params


class ScryfallCatalogProvider:
    """
    Fetches set contents from Scryfall.

    Args:
        base_url: API root. Defaults to settings.scryfall_api_url
        timeout: Per-request timeout in seconds
        page_delay: Pause between page requests in seconds
        max_pages: Upper bound on pages followed for one set
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        page_delay: float | None = None,
        max_pages: int | None = None,
    ) -> None:
        self.base_url = (base_url or settings.scryfall_api_url).rstrip("/")
        self.timeout = settings.request_timeout if timeout is None else timeout
        self.page_delay = settings.catalog_page_delay if page_delay is None else page_delay
        self.max_pages = settings.catalog_max_pages if max_pages is None else max_pages

    async def fetch_set_items(
        self, set_code: str, variant: CatalogVariant = CatalogVariant.DEFAULT
    ) -> list[Item]:
        """
        Fetch all items for a set.

        Args:
            set_code: MTG set code (e.g., "FIN")
            variant: Query mode

        Returns:
            Items in the order Scryfall returned them

        Raises:
            CatalogLoadError: If any page fails, cannot be parsed, or the
                page limit is reached
        """
        raw_cards = await self._fetch_all_pages(set_code, variant)

        try:
            items = parse_cards(raw_cards)
        except (KeyError, TypeError, AttributeError) as e:
            raise CatalogLoadError(
                f"Failed to load catalog for {set_code}",
                detail=f"Malformed card data: {e!r}",
            ) from e

        logger.info("Loaded %d items for set %s (%s)", len(items), set_code, variant.value)
        return items

    async def _fetch_all_pages(
        self, set_code: str, variant: CatalogVariant
    ) -> list[dict[str, Any]]:
        cards: list[dict[str, Any]] = []
        url = f"{self.base_url}/cards/search"
        params: dict[str, str] | None = build_search_params(set_code, variant)
        pages = 0

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                headers={"User-Agent": settings.user_agent, "Accept": "application/json"},
            ) as client:
                while True:
                    if pages >= self.max_pages:
                        raise CatalogLoadError(
                            f"Failed to load catalog for {set_code}",
                            detail=f"Gave up after {self.max_pages} pages",
                        )

                    response = await client.get(url, params=params)
                    response.raise_for_status()
                    page: ScryfallPage = response.json()
                    pages += 1

                    if not isinstance(page, dict) or not isinstance(page.get("data"), list):
                        raise CatalogLoadError(
                            f"Failed to load catalog for {set_code}",
                            detail="Unexpected page shape",
                        )

                    cards.extend(page["data"])
                    logger.debug("Fetched page %d for %s (%d cards so far)", pages, set_code, len(cards))

                    next_page = page.get("next_page")
                    if not page.get("has_more") or not next_page:
                        break

                    url = next_page
                    params = None  # next_page already carries the query
                    await asyncio.sleep(self.page_delay)
        except httpx.HTTPStatusError as e:
            raise CatalogLoadError(
                f"Failed to load catalog for {set_code}",
                detail=f"HTTP {e.response.status_code}",
            ) from e
        except httpx.RequestError as e:
            raise CatalogLoadError(
                f"Failed to load catalog for {set_code}",
                detail=str(e) or type(e).__name__,
            ) from e
        except ValueError as e:
            raise CatalogLoadError(
                f"Failed to load catalog for {set_code}",
                detail="Response was not valid JSON",
            ) from e

        return cards


class CatalogCache:
    """
    Last successfully loaded catalog per (set, variant).

    A failed refresh leaves the previously loaded items in place.
    """

    def __init__(self, provider: CatalogProvider) -> None:
        self._provider = provider
        self._items: dict[tuple[str, CatalogVariant], tuple[Item, ...]] = {}

    def get(self, set_code: str, variant: CatalogVariant) -> list[Item] | None:
        """Cached items, or None if the set was never loaded."""
        items = self._items.get((set_code.lower(), variant))
        return list(items) if items is not None else None

    async def load(self, set_code: str, variant: CatalogVariant) -> list[Item]:
        """Cached items, fetching them on first use."""
        cached = self.get(set_code, variant)
        if cached is not None:
            return cached
        return await self.refresh(set_code, variant)

    async def refresh(self, set_code: str, variant: CatalogVariant) -> list[Item]:
        """
        Fetch the set again and replace the cached copy.

        Items are stored in collector number order.

        Raises:
            CatalogLoadError: If the fetch fails. The cache is unchanged.
        """
        try:
            items = await self._provider.fetch_set_items(set_code, variant)
        except CatalogLoadError:
            logger.warning(
                "Catalog refresh failed for %s, keeping %s",
                set_code,
                "previous items" if self.get(set_code, variant) is not None else "empty catalog",
            )
            raise

        ordered = tuple(sort_items(items, SortKey.COLLECTOR_NUMBER_ASC))
        self._items[(set_code.lower(), variant)] = ordered
        return list(ordered)
