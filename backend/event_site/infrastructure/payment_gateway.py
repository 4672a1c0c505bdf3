"""Mercado Pago Gateway — adapter over the official SDK for checkout and payment lookup.

Invariants:
    - A fresh SDK client per call, built from credentials read per call
    - Non-2xx responses, transport errors and malformed bodies all map to
      UpstreamFailureError (core/errors.py)
    - The access token never appears in error messages or log records
    - No retry loop here: a failed call surfaces to the caller immediately

Design Decisions:
    - SDK is synchronous (requests): calls run in a worker thread via
      asyncio.to_thread so the event loop is never blocked
    - sdk_factory injectable: tests swap the SDK without monkeypatching imports
"""

import asyncio
import logging
from typing import Any, Callable

import mercadopago
import requests

from event_site.core.domain_types import PaymentRef
from event_site.core.errors import ErrorContext, UpstreamFailureError
from event_site.core.payment_types import (
    GatewayCredentials, Payment, Preference, PreferenceRequest,
)

logger = logging.getLogger(__name__)

_OK_STATUSES = (200, 201)


def build_preference_payload(request: PreferenceRequest) -> dict[str, Any]:
    """Translate a PreferenceRequest into the provider's preference JSON."""
    item = request.item
    payer: dict[str, Any] = {"name": request.payer_name}
    if request.payer_email:
        payer["email"] = request.payer_email
    payload: dict[str, Any] = {
        "items": [
            {
                "id": item.item_id,
                "title": item.title,
                "description": item.description,
                "quantity": item.quantity,
                "currency_id": item.currency_id,
                "unit_price": float(item.unit_price),
            },
        ],
        "payer": payer,
        "external_reference": request.external_reference,
        "back_urls": dict(request.back_urls),
        "auto_return": request.auto_return,
    }
    if request.notification_url:
        payload["notification_url"] = request.notification_url
    if request.statement_descriptor:
        payload["statement_descriptor"] = request.statement_descriptor
    return payload


class MercadoPagoGateway:
    """PaymentGateway implementation backed by the mercadopago SDK."""

    def __init__(self, sdk_factory: Callable[[str], Any] = mercadopago.SDK):
        self._sdk_factory = sdk_factory

    async def create_preference(
        self, credentials: GatewayCredentials, request: PreferenceRequest,
    ) -> Preference:
        payload = build_preference_payload(request)
        result = await self._call(
            "create_preference",
            lambda sdk: sdk.preference().create(payload),
            credentials,
        )
        body = result.get("response") or {}
        preference_id = body.get("id")
        checkout_url = body.get("init_point")
        if not preference_id or not checkout_url:
            raise UpstreamFailureError(
                "Preference response missing id or checkout URL",
                "create_preference",
            )
        return Preference(
            preference_id=str(preference_id),
            checkout_url=checkout_url,
            sandbox_checkout_url=body.get("sandbox_init_point"),
        )

    async def get_payment(
        self, credentials: GatewayCredentials, payment_id: PaymentRef,
    ) -> Payment:
        result = await self._call(
            "get_payment",
            lambda sdk: sdk.payment().get(payment_id),
            credentials,
            ErrorContext(payment_id=payment_id),
        )
        body = result.get("response") or {}
        if body.get("id") is None or not body.get("status"):
            raise UpstreamFailureError(
                "Payment response missing id or status", "get_payment",
                ErrorContext(payment_id=payment_id),
            )
        return Payment(
            payment_id=PaymentRef(str(body["id"])),
            external_reference=body.get("external_reference"),
            status=str(body["status"]),
        )

    async def _call(
        self,
        operation: str,
        invoke: Callable[[Any], dict],
        credentials: GatewayCredentials,
        context: ErrorContext | None = None,
    ) -> dict:
        """Run one SDK call off the event loop and check the HTTP status."""
        def _run() -> dict:
            sdk = self._sdk_factory(credentials.access_token)
            return invoke(sdk)

        try:
            result = await asyncio.to_thread(_run)
        except requests.RequestException as e:
            logger.error(
                f"Payment gateway transport error on {operation}: {type(e).__name__}",
            )
            raise UpstreamFailureError(
                "Could not reach the payment gateway", operation, context,
            )
        except (ValueError, TypeError) as e:
            logger.error(f"Payment gateway rejected {operation} input: {e}")
            raise UpstreamFailureError(
                "Payment gateway request was rejected", operation, context,
            )

        if not isinstance(result, dict):
            raise UpstreamFailureError(
                "Unexpected payment gateway response", operation, context,
            )
        status = result.get("status")
        if status not in _OK_STATUSES:
            body = result.get("response") or {}
            detail = body.get("message") if isinstance(body, dict) else None
            logger.error(
                f"Payment gateway {operation} returned HTTP {status}: {detail}",
                extra={"payment_id": context.payment_id if context else None},
            )
            raise UpstreamFailureError(
                detail or f"Gateway responded with status {status}",
                operation, context,
            )
        return result
