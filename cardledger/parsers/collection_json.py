"""
Parser for the collection backup format.

The backup is a JSON array of ledger entries:

    [{"itemId": "...", "normalQty": 2, "foilQty": 0, "wanted": false}, ...]

The container is validated strictly: anything but an array is an
ImportValidationError. Entries are validated leniently: each one is either
accepted (quantities coerced) or rejected with a reason, and rejected
entries are simply left out.
"""

import json
import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from cardledger.models.failure import ImportValidationError
from cardledger.models.ownership import OwnershipRecord


@dataclass(frozen=True, slots=True)
class RecordAccepted:
    """An entry that passed validation."""

    record: OwnershipRecord


@dataclass(frozen=True, slots=True)
class RecordRejected:
    """An entry that was dropped, and why."""

    reason: str
    raw: Any = None


RecordValidation = RecordAccepted | RecordRejected


def coerce_quantity(value: Any) -> int:
    """
    Coerce arbitrary input to a non-negative integer quantity.

    Numbers are truncated toward zero, numeric strings are parsed, and
    everything else (None, booleans, NaN, infinities, junk) becomes 0.
    Negative results clamp to 0.
    """
    if isinstance(value, bool) or value is None:
        return 0

    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0
        try:
            value = float(text)
        except ValueError:
            return 0

    if isinstance(value, int):
        return max(0, value)

    if isinstance(value, float):
        if not math.isfinite(value):
            return 0
        return max(0, int(value))

    return 0


def validate_record(raw: Any) -> RecordValidation:
    """
    Validate one imported ledger entry.

    Args:
        raw: A decoded JSON value, or an existing OwnershipRecord

    Returns:
        RecordAccepted with a clean OwnershipRecord, or RecordRejected
        when the entry has no string itemId or carries nothing to keep.
    """
    if isinstance(raw, OwnershipRecord):
        raw = raw.to_dict()

    if not isinstance(raw, Mapping):
        return RecordRejected("entry is not an object", raw)

    item_id = raw.get("itemId")
    if not isinstance(item_id, str) or not item_id:
        return RecordRejected("missing or non-string itemId", raw)

    record = OwnershipRecord(
        item_id=item_id,
        normal_qty=coerce_quantity(raw.get("normalQty")),
        foil_qty=coerce_quantity(raw.get("foilQty")),
        wanted=bool(raw.get("wanted", False)),
    )
    if record.is_empty:
        return RecordRejected("no copies and not wanted", raw)

    return RecordAccepted(record)


def ensure_record_list(data: Any) -> list[Any]:
    """
    Check the top-level shape of imported data.

    Raises:
        ImportValidationError: If data is not a JSON array
    """
    if not isinstance(data, (list, tuple)):
        raise ImportValidationError(
            "Imported collection must be a JSON array.",
            detail=f"Got {type(data).__name__}",
        )
    return list(data)


def parse_collection_json(text: str) -> list[Any]:
    """
    Decode backup text and check it is an array.

    Entries are returned undecoded; sanitizing them is the store's job.

    Raises:
        ImportValidationError: If text is not valid JSON or not an array
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ImportValidationError(
            "Imported file is not valid JSON.",
            detail=f"line {e.lineno}, column {e.colno}: {e.msg}",
        ) from e

    return ensure_record_list(data)


def dump_collection_json(records: Iterable[OwnershipRecord]) -> str:
    """Serialize records as pretty-printed JSON, ordered by item id."""
    ordered = sorted(records, key=lambda r: r.item_id)
    return json.dumps([r.to_dict() for r in ordered], indent=2, ensure_ascii=False)
