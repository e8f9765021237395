"""
Sort engine for catalog views.

Every sort is a full re-sort with Python's stable sort, so items with
equal keys keep their relative input order.
"""

import re
import unicodedata
from collections.abc import Callable, Sequence
from enum import Enum
from typing import Any

from cardledger.models.item import Item

# Splits "10a" into ["", "10", "a"]
_DIGIT_RUNS = re.compile(r"(\d+)")


class SortKey(str, Enum):
    COLLECTOR_NUMBER_ASC = "collector_number_asc"
    COLLECTOR_NUMBER_DESC = "collector_number_desc"
    NAME_ASC = "name_asc"
    NAME_DESC = "name_desc"
    PRICE_ASC = "price_asc"
    PRICE_DESC = "price_desc"


def _text_key(text: str) -> tuple[str, str]:
    """Case- and accent-insensitive ordering, raw text as tiebreak."""
    folded = unicodedata.normalize("NFKD", text).casefold()
    stripped = "".join(c for c in folded if not unicodedata.combining(c))
    return (stripped, text)


def collector_number_key(collector_number: str) -> tuple[Any, ...]:
    """
    Natural sort key for collector numbers.

    Digit runs compare as integers and text runs compare as text, so
    "9" < "10" < "10a" and "1a" < "2".
    """
    parts: list[tuple[int, Any]] = []
    for index, run in enumerate(_DIGIT_RUNS.split(collector_number)):
        if index % 2:
            parts.append((0, int(run)))
        elif run:
            parts.append((1, _text_key(run)))
    return tuple(parts)


def _price_key(item: Item) -> float:
    return item.price_non_foil or 0.0


_KEY_FUNCTIONS: dict[SortKey, tuple[Callable[[Item], Any], bool]] = {
    SortKey.COLLECTOR_NUMBER_ASC: (lambda i: collector_number_key(i.collector_number), False),
    SortKey.COLLECTOR_NUMBER_DESC: (lambda i: collector_number_key(i.collector_number), True),
    SortKey.NAME_ASC: (lambda i: _text_key(i.name), False),
    SortKey.NAME_DESC: (lambda i: _text_key(i.name), True),
    SortKey.PRICE_ASC: (_price_key, False),
    SortKey.PRICE_DESC: (_price_key, True),
}


def sort_items(items: Sequence[Item], key: SortKey) -> list[Item]:
    """Return a new list of items in the order given by `key`."""
    key_func, reverse = _KEY_FUNCTIONS[key]
    return sorted(items, key=key_func, reverse=reverse)
