"""
User preferences persisted next to the collection.

Two independent slots: interface language and catalog variant. Unknown
stored values fall back to the defaults rather than failing.
"""

import logging

from cardledger.config import settings
from cardledger.db.storage import KeyValueStorage
from cardledger.models.preferences import (
    DEFAULT_CATALOG_VARIANT,
    DEFAULT_LANGUAGE,
    CatalogVariant,
    Language,
)

logger = logging.getLogger(__name__)


class PreferenceStore:
    """Reads and writes the language and catalog variant slots."""

    def __init__(
        self,
        storage: KeyValueStorage,
        language_key: str | None = None,
        variant_key: str | None = None,
    ) -> None:
        self._storage = storage
        self._language_key = language_key or settings.language_storage_key
        self._variant_key = variant_key or settings.catalog_variant_storage_key

    def get_language(self) -> Language:
        raw = self._storage.get(self._language_key)
        if raw is None:
            return DEFAULT_LANGUAGE
        try:
            return Language(raw)
        except ValueError:
            logger.warning("Ignoring unknown stored language %r", raw)
            return DEFAULT_LANGUAGE

    def set_language(self, language: Language) -> None:
        self._storage.set(self._language_key, Language(language).value)

    def get_catalog_variant(self) -> CatalogVariant:
        raw = self._storage.get(self._variant_key)
        if raw is None:
            return DEFAULT_CATALOG_VARIANT
        try:
            return CatalogVariant(raw)
        except ValueError:
            logger.warning("Ignoring unknown stored catalog variant %r", raw)
            return DEFAULT_CATALOG_VARIANT

    def set_catalog_variant(self, variant: CatalogVariant) -> None:
        self._storage.set(self._variant_key, CatalogVariant(variant).value)
