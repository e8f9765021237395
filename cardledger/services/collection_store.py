"""
Collection state store.

Owns the ownership ledger: one OwnershipRecord per item the user has
copies of or wants. The ledger is cached in memory as an immutable
snapshot and written through to key-value storage on every mutation.

INVARIANT: A record with no copies and wanted=False never exists,
neither in the cache nor in storage. It is pruned the moment it
reaches that state.
"""

import json
import logging
from collections.abc import Mapping
from dataclasses import replace
from types import MappingProxyType
from typing import Any

from cardledger.config import settings
from cardledger.db.storage import KeyValueStorage
from cardledger.models.failure import ImportValidationError
from cardledger.models.ownership import OwnershipRecord, OwnershipStatus
from cardledger.parsers.collection_json import (
    RecordAccepted,
    coerce_quantity,
    ensure_record_list,
    validate_record,
)

logger = logging.getLogger(__name__)

# Read-only view of the ledger keyed by item id
LedgerSnapshot = Mapping[str, OwnershipRecord]


def _sanitize(entries: list[Any]) -> dict[str, OwnershipRecord]:
    """Keep accepted entries; a later entry for the same item wins."""
    ledger: dict[str, OwnershipRecord] = {}
    rejected = 0

    for raw in entries:
        result = validate_record(raw)
        if isinstance(result, RecordAccepted):
            ledger[result.record.item_id] = result.record
        else:
            rejected += 1
            logger.debug("Dropping ledger entry: %s", result.reason)

    if rejected:
        logger.info(
            "ledger_entries_dropped",
            extra={"dropped_count": rejected, "kept_count": len(ledger)},
        )

    return ledger


class CollectionStore:
    """
    Ownership ledger with write-through persistence.

    Single writer: mutations are synchronous and each one is durable
    when it returns. Readers always get a consistent snapshot.
    """

    def __init__(self, storage: KeyValueStorage, storage_key: str | None = None) -> None:
        self._storage = storage
        self._key = storage_key or settings.collection_storage_key
        self._snapshot: LedgerSnapshot | None = None

    # --- Loading and saving ---

    def _load(self) -> LedgerSnapshot:
        if self._snapshot is not None:
            return self._snapshot

        raw = self._storage.get(self._key)
        ledger: dict[str, OwnershipRecord] = {}

        if raw:
            try:
                ledger = _sanitize(ensure_record_list(json.loads(raw)))
            except (json.JSONDecodeError, ImportValidationError) as e:
                logger.warning("Stored collection is unreadable, starting empty: %s", e)

        self._snapshot = MappingProxyType(ledger)
        return self._snapshot

    def _save(self, ledger: dict[str, OwnershipRecord]) -> None:
        """Persist first, then swap the cache, so both always match."""
        payload = json.dumps([r.to_dict() for r in ledger.values()])
        self._storage.set(self._key, payload)
        self._snapshot = MappingProxyType(ledger)

    # --- Reads ---

    def snapshot(self) -> LedgerSnapshot:
        """Read-only view of the current ledger keyed by item id."""
        return self._load()

    def get_all(self) -> list[OwnershipRecord]:
        """All records, in no particular order."""
        return list(self._load().values())

    def get_record(self, item_id: str) -> OwnershipRecord | None:
        return self._load().get(item_id)

    def get_normal_qty(self, item_id: str) -> int:
        record = self.get_record(item_id)
        return record.normal_qty if record else 0

    def get_foil_qty(self, item_id: str) -> int:
        record = self.get_record(item_id)
        return record.foil_qty if record else 0

    def is_wanted(self, item_id: str) -> bool:
        record = self.get_record(item_id)
        return record.wanted if record else False

    def ownership_status(self, item_id: str) -> OwnershipStatus:
        """Ownership flags for one item, used as the filter lookup."""
        return OwnershipStatus.from_record(self.get_record(item_id))

    # --- Mutations ---

    def set_quantities(self, item_id: str, normal: Any, foil: Any) -> OwnershipRecord | None:
        """
        Set both owned quantities of an item.

        Inputs are coerced to non-negative integers. An existing record is
        updated and pruned if it ends up empty. A missing record is only
        created when at least one quantity is positive.

        Returns:
            The resulting record, or None if the item has no record
        """
        normal_qty = coerce_quantity(normal)
        foil_qty = coerce_quantity(foil)
        current = self._load()
        existing = current.get(item_id)

        if existing is None:
            if normal_qty == 0 and foil_qty == 0:
                return None
            record = OwnershipRecord(item_id=item_id, normal_qty=normal_qty, foil_qty=foil_qty)
        else:
            record = replace(existing, normal_qty=normal_qty, foil_qty=foil_qty)

        return self._put(current, record)

    def set_normal_qty(self, item_id: str, qty: Any) -> OwnershipRecord | None:
        """Set the non-foil quantity, keeping the foil quantity."""
        return self.set_quantities(item_id, qty, self.get_foil_qty(item_id))

    def set_foil_qty(self, item_id: str, qty: Any) -> OwnershipRecord | None:
        """Set the foil quantity, keeping the non-foil quantity."""
        return self.set_quantities(item_id, self.get_normal_qty(item_id), qty)

    def toggle_wanted(self, item_id: str) -> OwnershipRecord | None:
        """
        Flip the wishlist flag of an item.

        Creates a wanted record with no copies if none exists. Prunes the
        record if the flag goes off and no copies are owned.

        Returns:
            The resulting record, or None if it was pruned
        """
        current = self._load()
        existing = current.get(item_id)

        if existing is None:
            record = OwnershipRecord(item_id=item_id, wanted=True)
        else:
            record = replace(existing, wanted=not existing.wanted)

        return self._put(current, record)

    def replace_all(self, records: Any) -> int:
        """
        Replace the whole ledger with imported data.

        Each entry is validated on its own; malformed or empty entries are
        dropped. The replacement is all-or-nothing: if the container is not
        a list, nothing changes.

        Args:
            records: Decoded JSON, expected to be a list of objects

        Returns:
            Number of records in the new ledger

        Raises:
            ImportValidationError: If records is not a list
        """
        entries = ensure_record_list(records)
        ledger = _sanitize(entries)
        self._save(ledger)

        logger.info("Replaced collection with %d records (%d submitted)", len(ledger), len(entries))
        return len(ledger)

    def clear(self) -> None:
        """Remove every record and the storage slot itself."""
        self._storage.remove(self._key)
        self._snapshot = MappingProxyType({})

    def _put(self, current: LedgerSnapshot, record: OwnershipRecord) -> OwnershipRecord | None:
        ledger = dict(current)
        if record.is_empty:
            ledger.pop(record.item_id, None)
            result = None
        else:
            ledger[record.item_id] = record
            result = record

        self._save(ledger)
        return result
