"""
Filter and sort engines for catalog views.

Both operate on plain item lists and never mutate their input.
"""

from cardledger.filtering.filters import (
    DEFAULT_STAGES,
    FilterCriteria,
    FilterStage,
    OwnershipFilter,
    OwnershipLookup,
    PrintFilter,
    RarityFilter,
    filter_items,
)
from cardledger.filtering.sorting import SortKey, collector_number_key, sort_items

__all__ = [
    "DEFAULT_STAGES",
    "FilterCriteria",
    "FilterStage",
    "OwnershipFilter",
    "OwnershipLookup",
    "PrintFilter",
    "RarityFilter",
    "SortKey",
    "collector_number_key",
    "filter_items",
    "sort_items",
]
