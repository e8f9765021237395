from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class OwnershipRecord:
    """
    Ledger entry for one catalog item.

    Records with no copies and no wishlist flag are never kept;
    see `is_empty`.
    """

    item_id: str
    normal_qty: int = 0
    foil_qty: int = 0
    wanted: bool = False

    @property
    def is_owned(self) -> bool:
        return self.normal_qty > 0 or self.foil_qty > 0

    @property
    def is_empty(self) -> bool:
        """True when the record carries nothing worth persisting."""
        return not self.is_owned and not self.wanted

    def to_dict(self) -> dict[str, Any]:
        """Serialize with the camelCase keys used on disk."""
        return {
            "itemId": self.item_id,
            "normalQty": self.normal_qty,
            "foilQty": self.foil_qty,
            "wanted": self.wanted,
        }


@dataclass(frozen=True, slots=True)
class OwnershipStatus:
    """Ownership flags the filter engine needs for one item."""

    is_owned: bool = False
    is_foil_owned: bool = False
    is_wanted: bool = False

    @classmethod
    def from_record(cls, record: OwnershipRecord | None) -> "OwnershipStatus":
        if record is None:
            return cls()
        return cls(
            is_owned=record.is_owned,
            is_foil_owned=record.foil_qty > 0,
            is_wanted=record.wanted,
        )
