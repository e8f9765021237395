from enum import Enum


class Language(str, Enum):
    """Interface languages a user can pick."""

    ES = "es"
    EN = "en"


class CatalogVariant(str, Enum):
    """
    Query mode used when fetching a set from Scryfall.

    DEFAULT returns one entry per card, ALL_PRINTS returns every printing.
    """

    DEFAULT = "default"
    ALL_PRINTS = "all_prints"


DEFAULT_LANGUAGE = Language.ES
DEFAULT_CATALOG_VARIANT = CatalogVariant.DEFAULT
