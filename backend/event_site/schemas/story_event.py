"""Story Event Schemas — timeline entries."""

from datetime import datetime

from pydantic import Field, field_validator

from event_site.schemas.common import ApiModel, StrictApiModel


class StoryEventWrite(StrictApiModel):
    """Body for both create and update; date, title and text are required."""
    date: str = Field(min_length=1, max_length=100)
    title: str = Field(min_length=1, max_length=200)
    text: str = Field(min_length=1)
    image: str | None = Field(None, max_length=500)
    position: int | None = Field(None, ge=0)

    @field_validator("date", "title", "text")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("date, title and text are required")
        return v


class StoryEventResponse(ApiModel):
    id: int
    date: str
    title: str
    text: str
    image: str | None
    position: int
    created_at: datetime
    updated_at: datetime
