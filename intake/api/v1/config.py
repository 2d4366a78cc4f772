"""Public channel configuration endpoint (no auth)."""

from typing import Annotated

from fastapi import APIRouter, Depends

from intake.core.config import Settings
from intake.core.dependencies import get_app_settings, get_storage
from intake.schemas.channel import ChannelConfigResponse
from intake.services.channel import get_channel_config
from intake.storage import Storage

router = APIRouter()


@router.get("", response_model=ChannelConfigResponse)
async def get_config(
    storage: Annotated[Storage, Depends(get_storage)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> ChannelConfigResponse:
    """Return the stored channel configuration, or the default channel when none is set."""
    return await get_channel_config(storage, settings.DEFAULT_CHANNEL_URL)
