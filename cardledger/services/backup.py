"""
Collection backup and restore.

Export writes the ledger as pretty-printed JSON. Import reads a JSON
array, sanitizes each entry and replaces the ledger in one step. A file
that is not valid JSON or not an array is rejected without touching the
current ledger.
"""

import logging
from pathlib import Path

from cardledger.config import EXPORT_FILENAME
from cardledger.models.failure import ImportValidationError
from cardledger.parsers.collection_json import dump_collection_json, parse_collection_json
from cardledger.services.collection_store import CollectionStore

logger = logging.getLogger(__name__)


def export_collection(store: CollectionStore) -> str:
    """Serialize the current ledger to backup JSON text."""
    return dump_collection_json(store.get_all())


def import_collection(store: CollectionStore, text: str) -> int:
    """
    Replace the ledger with the contents of backup JSON text.

    Returns:
        Number of records kept after sanitization

    Raises:
        ImportValidationError: If text is not a JSON array
    """
    entries = parse_collection_json(text)
    return store.replace_all(entries)


def export_to_file(store: CollectionStore, path: Path | None = None) -> Path:
    """
    Write the ledger to a backup file.

    Args:
        store: Collection to export
        path: Target file or directory. Defaults to EXPORT_FILENAME in
            the current directory

    Returns:
        Path of the written file
    """
    if path is None:
        path = Path(EXPORT_FILENAME)
    elif path.is_dir():
        path = path / EXPORT_FILENAME

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(export_collection(store), encoding="utf-8")

    logger.info("Exported collection to %s", path)
    return path


def import_from_file(store: CollectionStore, path: Path) -> int:
    """
    Replace the ledger with a backup file's contents.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ImportValidationError: If the file is not UTF-8 text or not a JSON array
    """
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise ImportValidationError(
            "Imported file is not valid UTF-8 text.",
            detail=str(e),
        ) from e
    count = import_collection(store, text)

    logger.info("Imported %d records from %s", count, path)
    return count
