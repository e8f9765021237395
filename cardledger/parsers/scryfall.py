"""
Scryfall card parser.

Maps card objects from the Scryfall search API to catalog Items.

API docs: https://scryfall.com/docs/api/cards
"""

import math
from typing import Any, TypedDict

from cardledger.models.item import Item, Rarity

VALID_RARITIES = frozenset(r.value for r in Rarity)


class ScryfallPage(TypedDict, total=False):
    """One page of a Scryfall list response."""

    object: str
    total_cards: int
    has_more: bool
    next_page: str
    data: list[dict[str, Any]]


def _normalize_rarity(rarity: str | None) -> Rarity:
    """Normalize rarity to one of: common, uncommon, rare, mythic."""
    return Rarity(rarity) if rarity in VALID_RARITIES else Rarity.COMMON


def _parse_price(value: Any) -> float | None:
    """
    Parse a Scryfall price string.

    Scryfall sends prices as strings ("1.23") or null. Anything that does
    not parse to a non-negative number is treated as no price.
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        price = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(price) or price < 0:
        return None
    return price


def _extract_image_url(card: dict[str, Any]) -> str:
    """Normal-size image, falling back to the first face for double-faced cards."""
    image_uris = card.get("image_uris") or {}
    if image_uris.get("normal"):
        return str(image_uris["normal"])

    faces = card.get("card_faces") or []
    if faces:
        face_uris = faces[0].get("image_uris") or {}
        if face_uris.get("normal"):
            return str(face_uris["normal"])

    return ""


def parse_card(card: dict[str, Any]) -> Item:
    """
    Convert a Scryfall card object to an Item.

    Prices are the Cardmarket euro prices (`eur` / `eur_foil`).

    Raises:
        KeyError: If the card has no id or name
    """
    prices = card.get("prices") or {}

    return Item(
        id=str(card["id"]),
        name=str(card["name"]),
        collector_number=str(card.get("collector_number", "")),
        rarity=_normalize_rarity(card.get("rarity")),
        has_non_foil=bool(card.get("nonfoil", False)),
        has_foil=bool(card.get("foil", False)),
        price_non_foil=_parse_price(prices.get("eur")),
        price_foil=_parse_price(prices.get("eur_foil")),
        image_url=_extract_image_url(card),
    )


def parse_cards(cards: list[dict[str, Any]]) -> list[Item]:
    """Convert a list of Scryfall card objects, preserving order."""
    return [parse_card(card) for card in cards]
