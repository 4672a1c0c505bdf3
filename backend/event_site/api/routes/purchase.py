"""Purchase Routes — purchase intents, payment webhook and order lookup.

Invariants:
    - POST /purchase-intents is public; returns 201 with checkout URLs and order id
    - POST /payment-webhook verifies the HMAC signature over the RAW body before
      parsing JSON or touching the database
    - Webhook answers "OK" (200) for every processed outcome, including no-ops
    - GET /orders/{id} is public and returns the order with its gift snapshot

Design Decisions:
    - Webhook takes Request instead of a body model: FastAPI must not parse JSON
      before the signature check
    - The injected AsyncSession is lazy: no connection is checked out and no
      query runs until the signature check has passed
"""

import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import PlainTextResponse
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from event_site.api.dependencies import get_payment_gateway
from event_site.config import Settings, get_settings
from event_site.core.domain_types import GiftId, NotificationType, OrderId, PaymentRef
from event_site.core.errors import InvalidSignatureError, RequestValidationFailedError
from event_site.core.repository_protocols import PaymentGateway
from event_site.core.webhook_signature import verify_signature
from event_site.infrastructure.database import get_db
from event_site.schemas.order import (
    OrderResponse, PaymentNotification, PurchaseIntentCreate, PurchaseIntentResponse,
)
from event_site.services.order_lifecycle import OrderLifecycle

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1", tags=["purchases"])

SIGNATURE_HEADER = "x-signature"


@router.post(
    "/purchase-intents", response_model=PurchaseIntentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_purchase_intent(
    body: PurchaseIntentCreate,
    db: AsyncSession = Depends(get_db),
    gateway: PaymentGateway = Depends(get_payment_gateway),
    settings: Settings = Depends(get_settings),
):
    """Create a pending order and a checkout preference for one gift."""
    lifecycle = OrderLifecycle(db, gateway, settings)
    intent = await lifecycle.create_purchase_intent(
        GiftId(body.gift_id), body.customer_name, body.customer_email,
    )
    return PurchaseIntentResponse(
        preference_id=intent.preference_id,
        checkout_url=intent.checkout_url,
        sandbox_checkout_url=intent.sandbox_checkout_url,
        order_id=intent.order_id,
    )


@router.post("/payment-webhook", response_class=PlainTextResponse)
async def payment_webhook(
    request: Request,
    db: AsyncSession = Depends(get_db),
    gateway: PaymentGateway = Depends(get_payment_gateway),
    settings: Settings = Depends(get_settings),
):
    """Gateway callback: verify, then reconcile the referenced payment."""
    raw_body = await request.body()
    if not verify_signature(
        settings.webhook_secret, raw_body, request.headers.get(SIGNATURE_HEADER),
    ):
        raise InvalidSignatureError()

    try:
        notification = PaymentNotification.model_validate_json(raw_body)
    except ValidationError as e:
        raise RequestValidationFailedError(
            f"Malformed notification body ({e.error_count()} error(s))", "body",
        )

    if notification.type != NotificationType.PAYMENT.value:
        logger.info(f"Ignoring webhook notification of type {notification.type!r}")
        return PlainTextResponse("OK")

    lifecycle = OrderLifecycle(db, gateway, settings)
    outcome = await lifecycle.reconcile_payment(PaymentRef(notification.data.id))
    logger.info(
        f"Webhook for payment {notification.data.id} processed: {outcome.value}",
        extra={"payment_id": notification.data.id, "outcome": outcome.value},
    )
    return PlainTextResponse("OK")


@router.get("/orders/{order_id}", response_model=OrderResponse)
async def get_order(
    order_id: int,
    db: AsyncSession = Depends(get_db),
    gateway: PaymentGateway = Depends(get_payment_gateway),
    settings: Settings = Depends(get_settings),
):
    """Order status with the gift it was created for."""
    lifecycle = OrderLifecycle(db, gateway, settings)
    return await lifecycle.get_order(OrderId(order_id))
