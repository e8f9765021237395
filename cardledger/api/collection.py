"""
Collection API endpoints.

Reads and mutates the ownership ledger, plus JSON backup and restore.

Handlers stay `async def` so store mutations run one at a time on the
event loop. The store is not locked.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, Response
from pydantic import BaseModel, Field

from cardledger.api.deps import get_collection_store
from cardledger.config import EXPORT_FILENAME
from cardledger.models.failure import RecordNotFoundError
from cardledger.models.ownership import OwnershipRecord
from cardledger.services.backup import export_collection
from cardledger.services.collection_store import CollectionStore

router = APIRouter(prefix="/collection", tags=["collection"])

StoreDep = Annotated[CollectionStore, Depends(get_collection_store)]


class RecordModel(BaseModel):
    """One ledger entry."""

    item_id: str
    normal_qty: int = 0
    foil_qty: int = 0
    wanted: bool = False

    @classmethod
    def from_record(cls, record: OwnershipRecord) -> "RecordModel":
        return cls(
            item_id=record.item_id,
            normal_qty=record.normal_qty,
            foil_qty=record.foil_qty,
            wanted=record.wanted,
        )


class CollectionResponse(BaseModel):
    """Response model for the full ledger."""

    records: list[RecordModel] = Field(default_factory=list)
    total_records: int = 0


class RecordResponse(BaseModel):
    """Response model for a single-item mutation."""

    item_id: str
    record: RecordModel | None = Field(
        default=None,
        description="Resulting entry, null when the entry was pruned or never created",
    )


class QuantityUpdateRequest(BaseModel):
    """
    Request model for setting quantities.

    Values are coerced, so negative or non-numeric input becomes 0
    instead of failing validation.
    """

    normal_qty: Any = Field(default=0, examples=[2])
    foil_qty: Any = Field(default=0, examples=[1])


class ImportResponse(BaseModel):
    """Response model for collection import."""

    records_imported: int
    records_submitted: int


class DeleteResponse(BaseModel):
    """Response model for clearing the collection."""

    deleted: bool
    message: str = ""


def _record_response(item_id: str, record: OwnershipRecord | None) -> RecordResponse:
    return RecordResponse(
        item_id=item_id,
        record=RecordModel.from_record(record) if record is not None else None,
    )


@router.get("", response_model=CollectionResponse)
async def get_collection(store: StoreDep) -> CollectionResponse:
    """Get every ledger entry, ordered by item id."""
    records = sorted(store.get_all(), key=lambda r: r.item_id)
    return CollectionResponse(
        records=[RecordModel.from_record(r) for r in records],
        total_records=len(records),
    )


@router.get("/export")
async def export_user_collection(store: StoreDep) -> Response:
    """Download the ledger as a pretty-printed JSON backup."""
    return Response(
        content=export_collection(store),
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{EXPORT_FILENAME}"'},
    )


@router.post("/import", response_model=ImportResponse)
async def import_user_collection(
    store: StoreDep,
    data: Annotated[Any, Body(description="JSON array of ledger entries")],
) -> ImportResponse:
    """
    Replace the ledger with a JSON backup.

    Malformed entries are dropped. A body that is not an array is rejected
    and the current ledger is kept.
    """
    count = store.replace_all(data)
    return ImportResponse(records_imported=count, records_submitted=len(data))


@router.delete("", response_model=DeleteResponse)
async def clear_collection(store: StoreDep) -> DeleteResponse:
    """Remove every ledger entry."""
    had_records = bool(store.get_all())
    store.clear()
    return DeleteResponse(
        deleted=had_records,
        message="Collection cleared." if had_records else "Collection was already empty.",
    )


@router.get("/{item_id}", response_model=RecordModel)
async def get_collection_record(item_id: str, store: StoreDep) -> RecordModel:
    """Get the ledger entry for one item."""
    record = store.get_record(item_id)
    if record is None:
        raise RecordNotFoundError(item_id)
    return RecordModel.from_record(record)


@router.put("/{item_id}", response_model=RecordResponse)
async def set_record_quantities(
    item_id: str,
    request: QuantityUpdateRequest,
    store: StoreDep,
) -> RecordResponse:
    """Set owned quantities for one item."""
    record = store.set_quantities(item_id, request.normal_qty, request.foil_qty)
    return _record_response(item_id, record)


@router.post("/{item_id}/wanted", response_model=RecordResponse)
async def toggle_record_wanted(item_id: str, store: StoreDep) -> RecordResponse:
    """Toggle the wishlist flag for one item."""
    record = store.toggle_wanted(item_id)
    return _record_response(item_id, record)
