from cardledger.parsers.collection_json import (
    RecordAccepted,
    RecordRejected,
    RecordValidation,
    coerce_quantity,
    dump_collection_json,
    ensure_record_list,
    parse_collection_json,
    validate_record,
)
from cardledger.parsers.scryfall import ScryfallPage, parse_card, parse_cards

__all__ = [
    "RecordAccepted",
    "RecordRejected",
    "RecordValidation",
    "ScryfallPage",
    "coerce_quantity",
    "dump_collection_json",
    "ensure_record_list",
    "parse_card",
    "parse_cards",
    "parse_collection_json",
    "validate_record",
]
