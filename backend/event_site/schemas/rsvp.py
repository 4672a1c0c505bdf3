"""RSVP Schemas — public confirmation form and admin listing."""

from datetime import datetime

from pydantic import Field, field_validator

from event_site.schemas.common import ApiModel, StrictApiModel


class RsvpCreate(StrictApiModel):
    name: str = Field(min_length=1, max_length=200)
    companions: int = Field(0, ge=0, le=50)
    email: str | None = Field(None, max_length=320)
    phone: str | None = Field(None, max_length=50)
    message: str | None = Field(None, max_length=5000)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty or whitespace")
        return v


class RsvpResponse(ApiModel):
    id: int
    name: str
    companions: int
    email: str | None
    phone: str | None
    message: str | None
    confirmed: bool
    created_at: datetime
