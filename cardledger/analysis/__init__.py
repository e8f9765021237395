from cardledger.analysis.statistics import (
    MARKET_VALUE_FILTERS,
    CollectionStats,
    CollectionSummary,
    ValueKind,
    compute_filtered_stats,
    compute_rarity_breakdown,
    compute_stats,
    market_value,
    owned_value,
    summarize,
)

__all__ = [
    "MARKET_VALUE_FILTERS",
    "CollectionStats",
    "CollectionSummary",
    "ValueKind",
    "compute_filtered_stats",
    "compute_rarity_breakdown",
    "compute_stats",
    "market_value",
    "owned_value",
    "summarize",
]
