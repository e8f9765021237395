"""
Filter engine for catalog views.

Narrows a list of catalog items by four independent stages:
1. Name search
2. Rarity
3. Ownership (owned / missing / foil owned / wanted)
4. Print type availability (has foil / has non-foil)

INVARIANTS:
- Stages are ANDed together; each only removes items, never adds
- No stage depends on another's output, so any stage order gives the
  same result
- Each stage's ALL value is a passthrough
- Input order is preserved
"""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum

from cardledger.models.item import Item
from cardledger.models.ownership import OwnershipStatus

logger = logging.getLogger(__name__)

# Ownership flags of one item, usually CollectionStore.ownership_status
OwnershipLookup = Callable[[str], OwnershipStatus]


class _AliasedEnum(str, Enum):
    """Enum that also accepts the camelCase spellings used by older clients."""

    @classmethod
    def _missing_(cls, value: object) -> "_AliasedEnum | None":
        if isinstance(value, str):
            snake = "".join(f"_{c.lower()}" if c.isupper() else c for c in value)
            for member in cls:
                if member.value == snake:
                    return member
        return None


class RarityFilter(_AliasedEnum):
    ALL = "all"
    COMMON = "common"
    UNCOMMON = "uncommon"
    RARE = "rare"
    MYTHIC = "mythic"


class OwnershipFilter(_AliasedEnum):
    ALL = "all"
    OWNED = "owned"
    MISSING = "missing"
    FOIL_OWNED = "foil_owned"
    WANTED = "wanted"


class PrintFilter(_AliasedEnum):
    ALL = "all"
    HAS_FOIL = "has_foil"
    HAS_NON_FOIL = "has_non_foil"


@dataclass(frozen=True)
class FilterCriteria:
    """Active filter settings. The defaults match everything."""

    search_term: str = ""
    rarity: RarityFilter = RarityFilter.ALL
    ownership: OwnershipFilter = OwnershipFilter.ALL
    print_type: PrintFilter = PrintFilter.ALL

    @property
    def is_passthrough(self) -> bool:
        return (
            not self.search_term.strip()
            and self.rarity == RarityFilter.ALL
            and self.ownership == OwnershipFilter.ALL
            and self.print_type == PrintFilter.ALL
        )


FilterStage = Callable[[list[Item], FilterCriteria, OwnershipLookup], list[Item]]


def _filter_by_search(
    items: list[Item],
    criteria: FilterCriteria,
    lookup: OwnershipLookup,  # noqa: ARG001
) -> list[Item]:
    """Case-insensitive substring match on the item name."""
    term = criteria.search_term.strip().casefold()
    if not term:
        return items

    return [item for item in items if term in item.name.casefold()]


def _filter_by_rarity(
    items: list[Item],
    criteria: FilterCriteria,
    lookup: OwnershipLookup,  # noqa: ARG001
) -> list[Item]:
    if criteria.rarity == RarityFilter.ALL:
        return items

    return [item for item in items if item.rarity.value == criteria.rarity.value]


def _matches_ownership(status: OwnershipStatus, ownership: OwnershipFilter) -> bool:
    if ownership == OwnershipFilter.OWNED:
        return status.is_owned
    if ownership == OwnershipFilter.MISSING:
        return not status.is_owned
    if ownership == OwnershipFilter.FOIL_OWNED:
        return status.is_foil_owned
    if ownership == OwnershipFilter.WANTED:
        return status.is_wanted
    return True


def _filter_by_ownership(
    items: list[Item],
    criteria: FilterCriteria,
    lookup: OwnershipLookup,
) -> list[Item]:
    """
    Filter by what the user owns or wants.

    Consults the ledger through `lookup`, one call per item.
    """
    if criteria.ownership == OwnershipFilter.ALL:
        return items

    return [item for item in items if _matches_ownership(lookup(item.id), criteria.ownership)]


def _filter_by_print(
    items: list[Item],
    criteria: FilterCriteria,
    lookup: OwnershipLookup,  # noqa: ARG001
) -> list[Item]:
    """
    Filter by printings the catalog offers.

    This is catalog availability, not what the user owns.
    """
    if criteria.print_type == PrintFilter.HAS_FOIL:
        return [item for item in items if item.has_foil]
    if criteria.print_type == PrintFilter.HAS_NON_FOIL:
        return [item for item in items if item.has_non_foil]
    return items


# Authoritative order. Cheap stages first; the ownership stage hits the ledger.
DEFAULT_STAGES: tuple[FilterStage, ...] = (
    _filter_by_search,
    _filter_by_rarity,
    _filter_by_ownership,
    _filter_by_print,
)


def filter_items(
    items: Sequence[Item],
    criteria: FilterCriteria,
    lookup: OwnershipLookup,
    stages: Sequence[FilterStage] = DEFAULT_STAGES,
) -> list[Item]:
    """
    Apply every filter stage to a list of items.

    Args:
        items: Catalog items, in display order
        criteria: Active filter settings
        lookup: Ownership flags per item id
        stages: Stage order; any permutation of DEFAULT_STAGES gives the
            same result

    Returns:
        New list of the items passing all stages, in input order
    """
    result = list(items)
    if criteria.is_passthrough:
        return result

    for stage in stages:
        result = stage(result, criteria, lookup)

    logger.debug(
        "items_filtered",
        extra={
            "total": len(items),
            "final": len(result),
            "rarity": criteria.rarity.value,
            "ownership": criteria.ownership.value,
            "print_type": criteria.print_type.value,
        },
    )
    return result
