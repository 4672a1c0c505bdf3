"""Order Schemas — purchase intent, payment notification and order lookup.

Invariants:
    - PurchaseIntentCreate rejects unknown fields and blank customer names
    - PaymentNotification.data.id is always a string (gateways send ints or strings)
    - A "payment" notification must carry data.id

Design Decisions:
    - PaymentNotification tolerates extra gateway fields (action, api_version, ...);
      only type and data.id drive reconciliation
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from event_site.core.domain_types import NotificationType
from event_site.schemas.common import ApiModel, StrictApiModel
from event_site.schemas.gift import GiftResponse


class PurchaseIntentCreate(StrictApiModel):
    """POST /purchase-intents body."""
    gift_id: int = Field(gt=0)
    customer_name: str = Field(min_length=1, max_length=200)
    customer_email: str | None = Field(
        None, max_length=320, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$",
    )

    @field_validator("customer_name")
    @classmethod
    def strip_customer_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("customer_name cannot be empty or whitespace")
        return v

    @field_validator("customer_email", mode="before")
    @classmethod
    def blank_email_is_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v.strip() if isinstance(v, str) else v


class PurchaseIntentResponse(ApiModel):
    preference_id: str
    checkout_url: str
    sandbox_checkout_url: str | None
    order_id: int


class NotificationData(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v):
        if isinstance(v, bool) or v is None:
            raise ValueError("data.id must be a string or integer")
        if isinstance(v, int):
            return str(v)
        return v


class PaymentNotification(BaseModel):
    """Gateway webhook body — parsed only after signature verification."""
    model_config = ConfigDict(extra="allow")

    type: str
    data: NotificationData | None = None

    @model_validator(mode="after")
    def payment_requires_id(self):
        if self.type == NotificationType.PAYMENT.value and self.data is None:
            raise ValueError("payment notification requires data.id")
        return self


class OrderResponse(ApiModel):
    id: int
    gift_id: int
    customer_name: str
    customer_email: str | None
    status: str
    payment_ref: str | None
    settled_at: datetime | None
    created_at: datetime
    updated_at: datetime
    gift: GiftResponse
