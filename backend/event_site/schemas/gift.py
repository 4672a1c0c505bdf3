"""Gift Schemas — registry item contracts.

Invariants:
    - price >= 0 with at most 2 decimal places
    - stock_count >= 0
    - GiftUpdate is partial: only fields present in the body are applied
"""

from datetime import datetime
from decimal import Decimal

from pydantic import Field, field_validator

from event_site.schemas.common import ApiModel, StrictApiModel


def _strip_required(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("name cannot be empty or whitespace")
    return v


class GiftCreate(StrictApiModel):
    name: str = Field(min_length=1, max_length=200)
    description: str | None = Field(None, max_length=5000)
    price: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    image: str | None = Field(None, max_length=500)
    stock_count: int = Field(1, ge=0)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return _strip_required(v)


class GiftUpdate(StrictApiModel):
    name: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = Field(None, max_length=5000)
    price: Decimal | None = Field(None, ge=0, max_digits=10, decimal_places=2)
    image: str | None = Field(None, max_length=500)
    stock_count: int | None = Field(None, ge=0)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str | None) -> str | None:
        return _strip_required(v) if v is not None else v


class GiftResponse(ApiModel):
    id: int
    name: str
    description: str | None
    price: Decimal
    image: str | None
    stock_count: int
    created_at: datetime
    updated_at: datetime
