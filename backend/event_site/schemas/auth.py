"""Auth Schemas — admin login."""

from pydantic import Field

from event_site.schemas.common import ApiModel, StrictApiModel


class LoginRequest(StrictApiModel):
    email: str = Field(min_length=3, max_length=320)
    password: str = Field(min_length=1, max_length=200)


class UserResponse(ApiModel):
    id: int
    name: str
    email: str


class LoginResponse(ApiModel):
    token: str
    user: UserResponse
