"""Purchase Intents — POST /api/v1/purchase-intents.

Invariants:
    - Success creates exactly one pending Order and one gateway preference
    - The preference carries "order-<id>", the back URLs and the gift price
    - Sold-out, missing gift and missing credentials write no Order
    - A gateway failure leaves the Order pending without payment_ref
"""

from decimal import Decimal

from sqlalchemy import func, select

from event_site.models.order import Order


async def _order_count(test_session_factory) -> int:
    async with test_session_factory() as session:
        return (await session.execute(select(func.count(Order.id)))).scalar_one()


async def test_creates_pending_order_and_checkout(
    client, gift, site_config, gateway, read_fresh,
):
    res = await client.post("/api/v1/purchase-intents", json={
        "giftId": gift.id, "customerName": "Ana", "customerEmail": "ana@example.com",
    })

    assert res.status_code == 201
    body = res.json()
    assert body["preferenceId"] == "pref-1"
    assert body["checkoutUrl"] == "https://checkout.test/pref-1"
    assert body["sandboxCheckoutUrl"] == "https://sandbox.checkout.test/pref-1"

    order = await read_fresh(Order, body["orderId"])
    assert order.status == "pending"
    assert order.customer_name == "Ana"
    assert order.customer_email == "ana@example.com"
    assert order.payment_ref == "pref-1"
    assert order.settled_at is None


async def test_preference_request_contents(client, gift, site_config, gateway):
    res = await client.post("/api/v1/purchase-intents", json={
        "giftId": gift.id, "customerName": "Ana",
    })
    order_id = res.json()["orderId"]

    credentials, request = gateway.preference_calls[0]
    assert credentials.access_token == "TEST-access-token"
    assert request.external_reference == f"order-{order_id}"
    assert request.item.item_id == f"gift-{gift.id}"
    assert request.item.title == gift.name
    assert request.item.unit_price == Decimal("450.00")
    assert request.item.quantity == 1
    assert request.payer_email is None
    assert request.back_urls["success"] == (
        f"https://casamento.test/presentes/confirmacao?order_id={order_id}"
    )
    assert set(request.back_urls) == {"success", "failure", "pending"}
    assert request.statement_descriptor == "Casamento Ana & Bob"


async def test_sold_out_gift_is_unavailable_and_writes_nothing(
    client, sold_out_gift, site_config, gateway, test_session_factory,
):
    res = await client.post("/api/v1/purchase-intents", json={
        "giftId": sold_out_gift.id, "customerName": "Bob",
    })

    assert res.status_code == 400
    assert res.json()["message"] == "This gift is no longer available"
    assert res.json()["error"]["code"] == "GIFT_UNAVAILABLE"
    assert await _order_count(test_session_factory) == 0
    assert gateway.preference_calls == []


async def test_unknown_gift_is_not_found(client, site_config, test_session_factory):
    res = await client.post("/api/v1/purchase-intents", json={
        "giftId": 999, "customerName": "Ana",
    })

    assert res.status_code == 404
    assert await _order_count(test_session_factory) == 0


async def test_missing_credentials_fail_before_any_order(
    client, gift, gateway, test_session_factory,
):
    res = await client.post("/api/v1/purchase-intents", json={
        "giftId": gift.id, "customerName": "Ana",
    })

    assert res.status_code == 500
    assert res.json()["error"]["code"] == "UPSTREAM_FAILURE"
    assert await _order_count(test_session_factory) == 0
    assert gateway.preference_calls == []


async def test_gateway_failure_leaves_pending_order(
    client, gift, site_config, gateway, test_session_factory,
):
    gateway.fail_preference = True

    res = await client.post("/api/v1/purchase-intents", json={
        "giftId": gift.id, "customerName": "Ana",
    })

    assert res.status_code == 500
    assert res.json()["error"]["context"]["order_id"] is not None
    async with test_session_factory() as session:
        orders = (await session.execute(select(Order))).scalars().all()
    assert len(orders) == 1
    assert orders[0].status == "pending"
    assert orders[0].payment_ref is None


async def test_blank_customer_name_is_rejected(client, gift, site_config):
    res = await client.post("/api/v1/purchase-intents", json={
        "giftId": gift.id, "customerName": "   ",
    })

    assert res.status_code == 400
    assert res.json()["message"] == "Invalid request data"


async def test_invalid_gift_id_is_rejected(client, site_config):
    res = await client.post("/api/v1/purchase-intents", json={
        "giftId": "abc", "customerName": "Ana",
    })
    assert res.status_code == 400


async def test_get_order_returns_status_and_gift(client, gift, site_config):
    created = await client.post("/api/v1/purchase-intents", json={
        "giftId": gift.id, "customerName": "Ana",
    })
    order_id = created.json()["orderId"]

    res = await client.get(f"/api/v1/orders/{order_id}")

    assert res.status_code == 200
    body = res.json()
    assert body["id"] == order_id
    assert body["status"] == "pending"
    assert body["gift"]["id"] == gift.id
    assert body["gift"]["name"] == gift.name


async def test_get_unknown_order_is_not_found(client):
    res = await client.get("/api/v1/orders/12345")
    assert res.status_code == 404
