"""Response schema for the public channel configuration."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ChannelConfigResponse(BaseModel):
    """Channel URL and featured video shown on the landing page."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str | None = None
    channel_url: str
    featured_video_id: str = ""
    last_updated: str
