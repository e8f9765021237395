"""
Fetch a set from Scryfall and report collection progress for it.

Run this job to check that the catalog is reachable and see how complete
the stored collection is.
"""

import argparse
import asyncio
import logging

from cardledger.analysis.statistics import CollectionStats, compute_rarity_breakdown, compute_stats
from cardledger.config import settings
from cardledger.db.storage import get_storage
from cardledger.models.failure import CatalogLoadError
from cardledger.models.preferences import CatalogVariant
from cardledger.services.catalog import CatalogProvider, ScryfallCatalogProvider
from cardledger.services.collection_store import CollectionStore
from cardledger.services.preferences import PreferenceStore

logger = logging.getLogger(__name__)


async def run_refresh(
    provider: CatalogProvider,
    store: CollectionStore,
    set_code: str,
    variant: CatalogVariant,
) -> CollectionStats:
    """Fetch the set and compute stats against the stored collection."""
    logger.info("Fetching set %s (%s)...", set_code, variant.value)

    try:
        items = await provider.fetch_set_items(set_code, variant)
    except CatalogLoadError as e:
        logger.error("Failed to fetch set %s: %s", set_code, e.detail)
        raise

    ledger = store.snapshot()
    stats = compute_stats(items, ledger)
    for rarity, tier in compute_rarity_breakdown(items, ledger).items():
        logger.info(
            "%s: %d/%d owned (%.1f%%), value %.2f",
            rarity.value,
            tier.owned_cards,
            tier.total_cards,
            tier.completion_percentage,
            tier.collection_value,
        )

    logger.info(
        "Set %s: %d/%d owned (%.1f%%), %d repeated, value %.2f",
        set_code,
        stats.owned_cards,
        stats.total_cards,
        stats.completion_percentage,
        stats.repeated_cards,
        stats.collection_value,
    )
    return stats


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    parser = argparse.ArgumentParser(description="Fetch a set and report collection progress")
    parser.add_argument(
        "--set",
        dest="set_code",
        default=settings.default_set_code,
        help="Set code (default: %(default)s)",
    )
    parser.add_argument(
        "--variant",
        type=CatalogVariant,
        choices=list(CatalogVariant),
        help="Catalog variant (default: stored preference)",
    )
    args = parser.parse_args(argv)

    storage = get_storage()
    variant = args.variant or PreferenceStore(storage).get_catalog_variant()
    asyncio.run(
        run_refresh(ScryfallCatalogProvider(), CollectionStore(storage), args.set_code, variant)
    )


if __name__ == "__main__":
    main()
