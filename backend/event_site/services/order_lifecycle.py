"""Order Lifecycle Manager — purchase intent, payment reconciliation, order lookup.

Invariants:
    - create_purchase_intent writes nothing when the gift is missing, out of stock,
      or the gateway has no credentials
    - An order is committed as "pending" BEFORE the gateway is called; a gateway
      failure leaves it pending without payment_ref (orphan, swept by no one)
    - payment_ref is written with a conditional update (only while NULL)
    - Settlement side effects (stock decrement + sale insert) run only for the
      reconciliation that flips settled_at from NULL; replays are no-ops
    - Stock decrement is conditional on stock_count > 0 (floor at zero)
    - Gateway status is read from the gateway, never from the notification body

Design Decisions:
    - Admission gate as a conditional UPDATE: atomic per row in the database, so
      concurrent duplicate deliveries serialize on the order row without app locks
    - sales.order_id UNIQUE as a second guard: a racing insert fails the whole
      settlement transaction instead of double-recording
    - Pure pieces (reference codec, status mapping) live in core/order_reference.py
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from urllib.parse import urlencode

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from event_site.config import Settings
from event_site.core.domain_types import (
    GiftId, OrderId, OrderStatus, PaymentMethod, PaymentRef, ReconcileOutcome,
    SaleStatus,
)
from event_site.core.errors import (
    ErrorContext, GiftUnavailableError, ResourceNotFoundError, UpstreamFailureError,
)
from event_site.core.order_reference import (
    format_external_reference, map_payment_status, parse_external_reference,
)
from event_site.core.payment_types import PreferenceItem, PreferenceRequest
from event_site.core.repository_protocols import PaymentGateway
from event_site.models.gift import Gift
from event_site.models.order import Order
from event_site.models.sale import Sale
from event_site.services.site_config import ensure_single_config, gateway_credentials

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PurchaseIntent:
    preference_id: str
    checkout_url: str
    sandbox_checkout_url: str | None
    order_id: OrderId


class OrderLifecycle:
    """Drives a gift purchase from intent to settlement."""

    def __init__(self, db: AsyncSession, gateway: PaymentGateway, settings: Settings):
        self.db = db
        self.gateway = gateway
        self.settings = settings

    # ─── Purchase intent ────────────────────────────────────────

    async def create_purchase_intent(
        self, gift_id: GiftId, customer_name: str, customer_email: str | None = None,
    ) -> PurchaseIntent:
        gift = await self.db.get(Gift, gift_id)
        if gift is None:
            raise ResourceNotFoundError("Gift", str(gift_id))
        if gift.stock_count <= 0:
            raise GiftUnavailableError(gift_id)

        config = await ensure_single_config(self.db)
        credentials = gateway_credentials(config, self.settings)
        site_title = config.site_title or "Casamento"

        order = Order(
            gift_id=gift.id,
            customer_name=customer_name,
            customer_email=customer_email or None,
            status=OrderStatus.PENDING.value,
        )
        self.db.add(order)
        await self.db.commit()
        await self.db.refresh(order)
        logger.info(
            f"Order {order.id} created for gift {gift.id}",
            extra={"order_id": order.id, "gift_id": gift.id},
        )

        request = PreferenceRequest(
            item=PreferenceItem(
                item_id=f"gift-{gift.id}",
                title=gift.name,
                description=gift.description or f"Presente para {site_title}",
                unit_price=gift.price,
                currency_id=self.settings.payment_currency,
            ),
            payer_name=customer_name,
            payer_email=customer_email or None,
            external_reference=format_external_reference(order.id),
            back_urls=self._back_urls(order.id),
            notification_url=credentials.notification_url,
            statement_descriptor=site_title,
        )
        try:
            preference = await self.gateway.create_preference(credentials, request)
        except UpstreamFailureError as e:
            e.context.order_id = order.id
            logger.error(
                f"Preference creation failed; order {order.id} left pending",
                extra={"order_id": order.id, "error_code": e.code},
            )
            raise

        await self.db.execute(
            update(Order)
            .where(Order.id == order.id, Order.payment_ref.is_(None))
            .values(payment_ref=preference.preference_id),
        )
        await self.db.commit()

        return PurchaseIntent(
            preference_id=preference.preference_id,
            checkout_url=preference.checkout_url,
            sandbox_checkout_url=preference.sandbox_checkout_url,
            order_id=OrderId(order.id),
        )

    def _back_urls(self, order_id: OrderId) -> dict[str, str]:
        base = self.settings.public_site_url.rstrip("/")
        url = (
            f"{base}{self.settings.checkout_return_path}?"
            f"{urlencode({'order_id': order_id})}"
        )
        return {"success": url, "failure": url, "pending": url}

    # ─── Reconciliation ─────────────────────────────────────────

    async def reconcile_payment(self, payment_id: PaymentRef) -> ReconcileOutcome:
        """Apply the gateway's authoritative payment state to its order."""
        config = await ensure_single_config(self.db)
        credentials = gateway_credentials(config, self.settings)
        payment = await self.gateway.get_payment(credentials, payment_id)

        order_id = parse_external_reference(payment.external_reference)
        if order_id is None:
            logger.warning(
                f"Payment {payment.payment_id} has unrecognized external reference "
                f"{payment.external_reference!r}",
                extra={"payment_id": payment.payment_id},
            )
            return ReconcileOutcome.IGNORED

        order = await self.db.get(Order, order_id)
        if order is None:
            logger.warning(
                f"Payment {payment.payment_id} references unknown order {order_id}",
                extra={"payment_id": payment.payment_id, "order_id": order_id},
            )
            return ReconcileOutcome.IGNORED

        status = map_payment_status(payment.status)
        if status != OrderStatus.PAID.value:
            await self.db.execute(
                update(Order).where(Order.id == order_id).values(status=status),
            )
            await self.db.commit()
            logger.info(
                f"Order {order_id} status set to {status}",
                extra={"order_id": order_id, "payment_id": payment.payment_id},
            )
            return ReconcileOutcome.STATUS_UPDATED

        return await self._settle(order, payment.payment_id)

    async def _settle(self, order: Order, payment_id: PaymentRef) -> ReconcileOutcome:
        admitted = await self.db.execute(
            update(Order)
            .where(Order.id == order.id, Order.settled_at.is_(None))
            .values(
                status=OrderStatus.PAID.value,
                settled_at=datetime.now(timezone.utc),
            ),
        )
        if admitted.rowcount != 1:
            await self.db.execute(
                update(Order)
                .where(Order.id == order.id)
                .values(status=OrderStatus.PAID.value),
            )
            await self.db.commit()
            logger.info(
                f"Order {order.id} already settled; notification ignored",
                extra={"order_id": order.id, "payment_id": payment_id},
            )
            return ReconcileOutcome.ALREADY_SETTLED

        gift = order.gift
        await self.db.execute(
            update(Gift)
            .where(Gift.id == order.gift_id, Gift.stock_count > 0)
            .values(stock_count=Gift.stock_count - 1),
        )
        self.db.add(Sale(
            gift_id=order.gift_id,
            order_id=order.id,
            customer_name=order.customer_name,
            customer_email=order.customer_email,
            amount=gift.price,
            payment_method=PaymentMethod.MERCADOPAGO.value,
            payment_ref=payment_id,
            status=SaleStatus.PAID.value,
            notes=f"Payment approved via Mercado Pago. Order id: {order.id}",
        ))
        await self.db.commit()
        logger.info(
            f"Order {order.id} settled: stock decremented and sale recorded",
            extra={
                "order_id": order.id, "gift_id": order.gift_id,
                "payment_id": payment_id, "outcome": ReconcileOutcome.SETTLED.value,
            },
        )
        return ReconcileOutcome.SETTLED

    # ─── Lookup ─────────────────────────────────────────────────

    async def get_order(self, order_id: OrderId) -> Order:
        order = await self.db.get(Order, order_id)
        if order is None:
            raise ResourceNotFoundError(
                "Order", str(order_id), ErrorContext(order_id=order_id),
            )
        return order
