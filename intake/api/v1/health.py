"""Health check endpoint with storage availability check."""

from typing import Annotated

from fastapi import APIRouter, Depends

from intake.core.config import Settings
from intake.core.dependencies import check_storage_available, get_app_settings, get_storage
from intake.schemas.health import HealthResponse
from intake.storage import Storage

router = APIRouter()


@router.get("/", response_model=HealthResponse)
async def get_health(
    storage: Annotated[Storage, Depends(get_storage)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> HealthResponse:
    """
    Return service health status and storage availability.
    Used by load balancers and monitoring.
    """
    available = await check_storage_available(storage)
    return HealthResponse(
        status="ok",
        environment=settings.APP_ENV,
        storage_backend=storage.backend,
        storage="available" if available else "unavailable",
    )
