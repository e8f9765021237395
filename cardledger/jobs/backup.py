"""
Export or import the collection ledger.

Usage:
    python -m cardledger.jobs.backup export [--output PATH]
    python -m cardledger.jobs.backup import PATH
"""

import argparse
import logging
from pathlib import Path

from cardledger.db.storage import get_storage
from cardledger.models.failure import ImportValidationError
from cardledger.services.backup import export_to_file, import_from_file
from cardledger.services.collection_store import CollectionStore

logger = logging.getLogger(__name__)


def run_export(store: CollectionStore, output: Path | None) -> Path:
    """Write the ledger to a backup file."""
    return export_to_file(store, output)


def run_import(store: CollectionStore, source: Path) -> int:
    """
    Replace the ledger with a backup file.

    Returns:
        Number of records imported

    Raises:
        FileNotFoundError: If the file doesn't exist
        ImportValidationError: If the file is not UTF-8 text or not a JSON array
    """
    try:
        return import_from_file(store, source)
    except ImportValidationError as e:
        logger.error("Import rejected, collection unchanged: %s (%s)", e.message, e.detail)
        raise


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Back up or restore the card collection")
    commands = parser.add_subparsers(dest="command", required=True)

    export_cmd = commands.add_parser("export", help="Write the collection to a JSON file")
    export_cmd.add_argument(
        "--output",
        type=Path,
        help="Target file or directory (default: ./cardledger-collection.json)",
    )

    import_cmd = commands.add_parser("import", help="Replace the collection from a JSON file")
    import_cmd.add_argument(
        "path",
        type=Path,
        help="Backup file produced by export",
    )

    return parser


def main(argv: list[str] | None = None, store: CollectionStore | None = None) -> int:
    """CLI entry point. Returns the process exit code."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    args = build_parser().parse_args(argv)
    if store is None:
        store = CollectionStore(get_storage())

    if args.command == "export":
        path = run_export(store, args.output)
        print(f"Exported {len(store.get_all())} records to {path}")
        return 0

    if not args.path.exists():
        print(f"Error: Backup file not found: {args.path}")
        return 1

    try:
        count = run_import(store, args.path)
    except ImportValidationError as e:
        print(f"Error: {e.message}")
        return 1

    print(f"Imported {count} records from {args.path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
