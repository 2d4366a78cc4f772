"""Public channel configuration with a built-in default."""

from intake.schemas.channel import ChannelConfigResponse
from intake.services.ids import utc_now_iso
from intake.storage import Storage


async def get_channel_config(storage: Storage, default_channel_url: str) -> ChannelConfigResponse:
    """First stored config record, or the default channel with no featured video."""
    configs = await storage.config.read_all()
    if configs:
        return ChannelConfigResponse.model_validate(configs[0].model_dump())
    return ChannelConfigResponse(
        channel_url=default_channel_url,
        featured_video_id="",
        last_updated=utc_now_iso(),
    )
