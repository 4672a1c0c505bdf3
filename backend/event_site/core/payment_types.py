"""Payment Types — value objects exchanged with the payment gateway adapter.

Invariants:
    - GatewayCredentials are built per call from the site config row, never cached
    - PreferenceRequest carries exactly one item (one gift per order)
    - Payment.payment_id and Preference.preference_id are strings regardless of
      what JSON type the provider used

Design Decisions:
    - Frozen dataclasses: the adapter translates them to the provider's dict shape,
      so the lifecycle manager never builds provider JSON itself
"""

from dataclasses import dataclass, field
from decimal import Decimal

from event_site.core.domain_types import PaymentRef


@dataclass(frozen=True)
class GatewayCredentials:
    access_token: str
    public_key: str | None = None
    notification_url: str | None = None

    def __repr__(self) -> str:
        # access_token must never reach logs
        return (
            f"GatewayCredentials(public_key={self.public_key!r}, "
            f"notification_url={self.notification_url!r})"
        )


@dataclass(frozen=True)
class PreferenceItem:
    item_id: str
    title: str
    description: str
    unit_price: Decimal
    currency_id: str = "BRL"
    quantity: int = 1


@dataclass(frozen=True)
class PreferenceRequest:
    item: PreferenceItem
    payer_name: str
    payer_email: str | None
    external_reference: str
    back_urls: dict[str, str] = field(default_factory=dict)
    notification_url: str | None = None
    statement_descriptor: str | None = None
    auto_return: str = "approved"


@dataclass(frozen=True)
class Preference:
    preference_id: str
    checkout_url: str
    sandbox_checkout_url: str | None = None


@dataclass(frozen=True)
class Payment:
    payment_id: PaymentRef
    external_reference: str | None
    status: str
