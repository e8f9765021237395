"""
Collection statistics.

Derives completion counts and monetary value from the join of catalog
items and a ledger snapshot. All functions are pure: they read the
snapshot passed in and never touch the store.

Value policy for filtered views:
- Filter "all" or "owned": value is what the user's copies are worth
- Filter "missing", "foil_owned" or "wanted": value is the market cost of
  one copy of each filtered item at its pricier printing. Owned value is
  zero or meaningless for those views, so the acquisition estimate is
  shown instead.
"""

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum

from cardledger.filtering.filters import OwnershipFilter
from cardledger.models.item import Item, Rarity
from cardledger.models.ownership import OwnershipRecord

# Ledger snapshot keyed by item id
Ledger = Mapping[str, OwnershipRecord]

MARKET_VALUE_FILTERS = frozenset(
    {OwnershipFilter.MISSING, OwnershipFilter.FOIL_OWNED, OwnershipFilter.WANTED}
)


class ValueKind(str, Enum):
    """What a stats value figure measures."""

    OWNED = "owned"
    MARKET = "market"


@dataclass(frozen=True)
class CollectionStats:
    """Summary numbers for a set of items."""

    total_cards: int = 0
    owned_cards: int = 0
    repeated_cards: int = 0
    completion_percentage: float = 0.0
    collection_value: float = 0.0
    value_kind: ValueKind = ValueKind.OWNED


@dataclass(frozen=True)
class CollectionSummary:
    """Everything a catalog view shows about the collection."""

    overall: CollectionStats
    by_rarity: dict[Rarity, CollectionStats] = field(default_factory=dict)
    filtered: CollectionStats = field(default_factory=CollectionStats)


def _quantities(item: Item, ledger: Ledger) -> tuple[int, int]:
    record = ledger.get(item.id)
    if record is None:
        return 0, 0
    return record.normal_qty, record.foil_qty


def owned_value(items: Iterable[Item], ledger: Ledger) -> float:
    """Value of owned copies; items without a price count as 0."""
    total = 0.0
    for item in items:
        normal, foil = _quantities(item, ledger)
        total += normal * (item.price_non_foil or 0.0) + foil * (item.price_foil or 0.0)
    return round(total, 2)


def market_value(items: Iterable[Item]) -> float:
    """Cost of one copy of each item at its higher-priced printing."""
    total = sum(max(item.price_non_foil or 0.0, item.price_foil or 0.0) for item in items)
    return round(total, 2)


def compute_stats(items: Sequence[Item], ledger: Ledger) -> CollectionStats:
    """
    Compute counts and owned value for a list of items.

    - owned: items with at least one copy of either printing
    - repeated: every copy beyond the first of each item
    - completion: owned / total * 100, 0 for an empty list
    """
    total = len(items)
    owned = 0
    repeated = 0

    for item in items:
        normal, foil = _quantities(item, ledger)
        copies = normal + foil
        if copies > 0:
            owned += 1
        repeated += max(0, copies - 1)

    return CollectionStats(
        total_cards=total,
        owned_cards=owned,
        repeated_cards=repeated,
        completion_percentage=(owned / total * 100) if total else 0.0,
        collection_value=owned_value(items, ledger),
        value_kind=ValueKind.OWNED,
    )


def compute_rarity_breakdown(
    items: Sequence[Item], ledger: Ledger
) -> dict[Rarity, CollectionStats]:
    """Stats per rarity tier. Every tier is present, empty ones included."""
    return {
        rarity: compute_stats([item for item in items if item.rarity == rarity], ledger)
        for rarity in Rarity
    }


def compute_filtered_stats(
    filtered_items: Sequence[Item],
    ledger: Ledger,
    ownership: OwnershipFilter,
) -> CollectionStats:
    """
    Stats for an already-filtered list of items.

    Counts are computed as usual. The value switches to market value for
    the ownership filters in MARKET_VALUE_FILTERS.
    """
    stats = compute_stats(filtered_items, ledger)
    if ownership not in MARKET_VALUE_FILTERS:
        return stats

    return CollectionStats(
        total_cards=stats.total_cards,
        owned_cards=stats.owned_cards,
        repeated_cards=stats.repeated_cards,
        completion_percentage=stats.completion_percentage,
        collection_value=market_value(filtered_items),
        value_kind=ValueKind.MARKET,
    )


def summarize(
    items: Sequence[Item],
    filtered_items: Sequence[Item],
    ledger: Ledger,
    ownership: OwnershipFilter,
) -> CollectionSummary:
    """Overall, per-rarity and filtered stats from one ledger snapshot."""
    return CollectionSummary(
        overall=compute_stats(items, ledger),
        by_rarity=compute_rarity_breakdown(items, ledger),
        filtered=compute_filtered_stats(filtered_items, ledger, ownership),
    )
