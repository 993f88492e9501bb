"""Pydantic schemas for share image generation."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ShareRequest(BaseModel):
    """Body of a share image request. Presence is checked by the service."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    itinerary_id: str | None = None
    style: str | None = None
    format: str | None = None


class ShareTemplateData(BaseModel):
    """Values rendered into a share template. Zero counts are left out."""

    title: str
    destination: str | None = None
    cover_photo_url: str | None = None
    day_count: int | None = None
    activity_count: int | None = None


class ShareImage(BaseModel):
    content: bytes
    filename: str
    media_type: str = "image/png"
