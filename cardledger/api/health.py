"""
Health check endpoints.

Provides liveness and readiness probes with a storage connectivity check.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError

from cardledger.api.deps import get_kv_storage
from cardledger.config import settings
from cardledger.db.storage import KeyValueStorage

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    storage: str | None = None


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """
    Liveness probe.

    Returns healthy if the service is running.
    Does not check dependencies.
    """
    return HealthResponse(status="healthy")


@router.get(
    "/ready",
    response_model=HealthResponse,
    responses={503: {"model": HealthResponse}},
)
async def ready(
    response: Response,
    storage: Annotated[KeyValueStorage, Depends(get_kv_storage)],
) -> HealthResponse:
    """
    Readiness probe.

    Returns ready if the service can handle requests.
    Reads a storage slot. Returns 503 if storage is unavailable.
    """
    try:
        storage.get(settings.language_storage_key)
        return HealthResponse(status="ready", storage="connected")
    except SQLAlchemyError:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return HealthResponse(status="not ready", storage="disconnected")
