"""Background Image Schemas — slideshow entries."""

from datetime import datetime

from pydantic import Field

from event_site.schemas.common import ApiModel, StrictApiModel


class BackgroundImageUpdate(StrictApiModel):
    active: bool | None = None
    position: int | None = Field(None, ge=0)


class BackgroundReorder(StrictApiModel):
    order: list[int]


class BackgroundImageResponse(ApiModel):
    id: int
    filename: str
    path: str
    active: bool
    position: int
    created_at: datetime
    updated_at: datetime


class BackgroundUploadResponse(ApiModel):
    message: str = "Upload completed"
    image: BackgroundImageResponse
