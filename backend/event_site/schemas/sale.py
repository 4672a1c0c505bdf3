"""Sale Schemas — ledger entries and the admin status edit."""

from datetime import datetime
from decimal import Decimal

from pydantic import Field

from event_site.schemas.common import ApiModel, StrictApiModel
from event_site.schemas.gift import GiftResponse


class SaleResponse(ApiModel):
    id: int
    gift_id: int
    order_id: int | None
    customer_name: str
    customer_email: str | None
    amount: Decimal
    payment_method: str
    payment_ref: str | None
    status: str
    notes: str | None
    created_at: datetime
    updated_at: datetime
    gift: GiftResponse | None = None


class SaleStatusUpdate(StrictApiModel):
    status: str = Field(min_length=1, max_length=30)
    notes: str | None = Field(None, max_length=5000)
