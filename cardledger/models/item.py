from dataclasses import dataclass
from enum import Enum
from urllib.parse import quote

CARDMARKET_SEARCH_URL = "https://www.cardmarket.com/en/Magic/Products/Search?searchString="


class Rarity(str, Enum):
    """Rarity tiers a catalog item can belong to."""

    COMMON = "common"
    UNCOMMON = "uncommon"
    RARE = "rare"
    MYTHIC = "mythic"


@dataclass(frozen=True, slots=True)
class Item:
    """
    A catalog entry as supplied by the catalog provider.

    Attributes:
        id: Opaque unique key (Scryfall card id)
        name: Card name
        collector_number: Collector number within the set (e.g. "042", "42a")
        rarity: Rarity tier
        has_non_foil: Whether a non-foil printing exists
        has_foil: Whether a foil printing exists
        price_non_foil: Market price of the non-foil printing, None when unknown
        price_foil: Market price of the foil printing, None when unknown
        image_url: Card image, empty when the provider has none
    """

    id: str
    name: str
    collector_number: str
    rarity: Rarity
    has_non_foil: bool = True
    has_foil: bool = False
    price_non_foil: float | None = None
    price_foil: float | None = None
    image_url: str = ""


def cardmarket_url(item: Item) -> str:
    """Cardmarket search URL for an item's name."""
    return CARDMARKET_SEARCH_URL + quote(item.name, safe="")
