"""Content Schemas — section text blocks."""

from datetime import datetime

from event_site.schemas.common import ApiModel, StrictApiModel


class ContentResponse(ApiModel):
    id: int
    section: str
    content: str
    created_at: datetime
    updated_at: datetime


class ContentUpdate(StrictApiModel):
    content: str
