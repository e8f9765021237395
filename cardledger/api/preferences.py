"""
Preference API endpoints.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from cardledger.api.deps import get_preference_store
from cardledger.models.preferences import CatalogVariant, Language
from cardledger.services.preferences import PreferenceStore

router = APIRouter(prefix="/preferences", tags=["preferences"])

PreferencesDep = Annotated[PreferenceStore, Depends(get_preference_store)]


class PreferencesResponse(BaseModel):
    language: Language
    catalog_variant: CatalogVariant


class PreferencesUpdateRequest(BaseModel):
    """Fields left out keep their stored value."""

    language: Language | None = None
    catalog_variant: CatalogVariant | None = None


def _current(preferences: PreferenceStore) -> PreferencesResponse:
    return PreferencesResponse(
        language=preferences.get_language(),
        catalog_variant=preferences.get_catalog_variant(),
    )


@router.get("", response_model=PreferencesResponse)
async def get_preferences(preferences: PreferencesDep) -> PreferencesResponse:
    return _current(preferences)


@router.put("", response_model=PreferencesResponse)
async def update_preferences(
    request: PreferencesUpdateRequest,
    preferences: PreferencesDep,
) -> PreferencesResponse:
    if request.language is not None:
        preferences.set_language(request.language)
    if request.catalog_variant is not None:
        preferences.set_catalog_variant(request.catalog_variant)
    return _current(preferences)
