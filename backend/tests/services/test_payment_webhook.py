"""Payment Webhook — POST /api/v1/payment-webhook reconciliation.

Invariants:
    - Unsigned or wrongly signed bodies get 401 and change nothing
    - Non-payment notifications are acknowledged without gateway calls
    - An approved payment settles its order exactly once: one stock decrement,
      one Sale, settled_at set; replays acknowledge without side effects
    - Non-approved statuses are copied onto the order without side effects
    - Unknown orders and foreign references are acknowledged (200)
    - Stock never goes negative, whatever number of orders get approved
"""

import json
from decimal import Decimal

import pytest
from sqlalchemy import func, select

from event_site.models.gift import Gift
from event_site.models.order import Order
from event_site.models.sale import Sale


def _payment_body(payment_id) -> bytes:
    return json.dumps({
        "type": "payment", "action": "payment.updated", "data": {"id": payment_id},
    }).encode()


@pytest.fixture
def make_order(test_db):
    async def _make(gift, customer_name="Ana", customer_email="ana@example.com"):
        order = Order(
            gift_id=gift.id, customer_name=customer_name,
            customer_email=customer_email, status="pending", payment_ref="pref-x",
        )
        test_db.add(order)
        await test_db.commit()
        await test_db.refresh(order)
        return order
    return _make


async def _sales(test_session_factory) -> list[Sale]:
    async with test_session_factory() as session:
        return list((await session.execute(select(Sale))).scalars().all())


# ─── Signature gate ─────────────────────────────────────────────

async def test_bad_signature_is_rejected_without_side_effects(
    signed_webhook, site_config, gift, make_order, gateway, read_fresh,
):
    order = await make_order(gift)
    gateway.add_payment("1001", order.id, "approved")

    res = await signed_webhook(_payment_body("1001"), signature="0" * 64)

    assert res.status_code == 401
    assert res.json()["error"]["code"] == "INVALID_SIGNATURE"
    assert gateway.payment_calls == []
    assert (await read_fresh(Order, order.id)).status == "pending"


async def test_missing_signature_is_rejected(client, site_config):
    res = await client.post(
        "/api/v1/payment-webhook", content=_payment_body("1"),
        headers={"Content-Type": "application/json"},
    )
    assert res.status_code == 401


async def test_malformed_body_with_valid_signature_is_bad_request(signed_webhook):
    res = await signed_webhook(b"{not json")
    assert res.status_code == 400


async def test_payment_without_data_is_bad_request(signed_webhook):
    res = await signed_webhook(json.dumps({"type": "payment"}).encode())
    assert res.status_code == 400


# ─── Acknowledged no-ops ────────────────────────────────────────

async def test_non_payment_notification_is_acknowledged(signed_webhook, gateway):
    res = await signed_webhook(json.dumps({
        "type": "merchant_order", "data": {"id": "77"},
    }).encode())

    assert res.status_code == 200
    assert res.text == "OK"
    assert gateway.payment_calls == []


async def test_unknown_order_is_acknowledged(signed_webhook, site_config, gateway):
    gateway.add_payment("2002", 999, "approved")

    res = await signed_webhook(_payment_body("2002"))

    assert res.status_code == 200
    assert gateway.payment_calls == ["2002"]


async def test_foreign_reference_is_acknowledged(
    signed_webhook, site_config, gateway, test_session_factory,
):
    gateway.add_payment("3003", None, "approved")

    res = await signed_webhook(_payment_body("3003"))

    assert res.status_code == 200
    assert await _sales(test_session_factory) == []


async def test_gateway_lookup_failure_is_server_error(
    signed_webhook, site_config, gateway,
):
    gateway.fail_payment = True

    res = await signed_webhook(_payment_body("4004"))

    assert res.status_code == 500
    assert res.json()["error"]["code"] == "UPSTREAM_FAILURE"


# ─── Settlement ─────────────────────────────────────────────────

async def test_approved_payment_settles_order(
    signed_webhook, site_config, gift, make_order, gateway,
    read_fresh, test_session_factory,
):
    order = await make_order(gift)
    gateway.add_payment("5005", order.id, "approved")

    res = await signed_webhook(_payment_body(5005))

    assert res.status_code == 200
    settled = await read_fresh(Order, order.id)
    assert settled.status == "paid"
    assert settled.settled_at is not None
    assert (await read_fresh(Gift, gift.id)).stock_count == 0

    sales = await _sales(test_session_factory)
    assert len(sales) == 1
    sale = sales[0]
    assert sale.order_id == order.id
    assert sale.gift_id == gift.id
    assert sale.amount == Decimal("450.00")
    assert sale.customer_name == "Ana"
    assert sale.customer_email == "ana@example.com"
    assert sale.payment_method == "mercadopago"
    assert sale.payment_ref == "5005"
    assert sale.status == "paid"


async def test_replayed_approval_has_no_second_effect(
    signed_webhook, site_config, make_gift, make_order, gateway,
    read_fresh, test_session_factory,
):
    gift = await make_gift(stock_count=3)
    order = await make_order(gift)
    gateway.add_payment("6006", order.id, "approved")

    first = await signed_webhook(_payment_body("6006"))
    settled_at = (await read_fresh(Order, order.id)).settled_at
    second = await signed_webhook(_payment_body("6006"))

    assert first.status_code == 200
    assert second.status_code == 200
    assert (await read_fresh(Gift, gift.id)).stock_count == 2
    assert len(await _sales(test_session_factory)) == 1
    assert (await read_fresh(Order, order.id)).settled_at == settled_at


async def test_non_approved_status_passes_through(
    signed_webhook, site_config, gift, make_order, gateway,
    read_fresh, test_session_factory,
):
    order = await make_order(gift)
    gateway.add_payment("7007", order.id, "rejected")

    res = await signed_webhook(_payment_body("7007"))

    assert res.status_code == 200
    updated = await read_fresh(Order, order.id)
    assert updated.status == "rejected"
    assert updated.settled_at is None
    assert (await read_fresh(Gift, gift.id)).stock_count == 1
    assert await _sales(test_session_factory) == []


async def test_pending_then_approved_settles_once(
    signed_webhook, site_config, gift, make_order, gateway,
    read_fresh, test_session_factory,
):
    order = await make_order(gift)
    gateway.add_payment("8008", order.id, "in_process")
    await signed_webhook(_payment_body("8008"))
    assert (await read_fresh(Order, order.id)).status == "in_process"

    gateway.add_payment("8008", order.id, "approved")
    await signed_webhook(_payment_body("8008"))

    assert (await read_fresh(Order, order.id)).status == "paid"
    assert len(await _sales(test_session_factory)) == 1


async def test_refund_after_settlement_keeps_settlement(
    signed_webhook, site_config, gift, make_order, gateway,
    read_fresh, test_session_factory,
):
    order = await make_order(gift)
    gateway.add_payment("9009", order.id, "approved")
    await signed_webhook(_payment_body("9009"))

    gateway.add_payment("9009", order.id, "refunded")
    await signed_webhook(_payment_body("9009"))

    refunded = await read_fresh(Order, order.id)
    assert refunded.status == "refunded"
    assert refunded.settled_at is not None
    assert len(await _sales(test_session_factory)) == 1


async def test_stock_never_goes_negative(
    signed_webhook, site_config, make_gift, make_order, gateway,
    read_fresh, test_session_factory,
):
    gift = await make_gift(stock_count=2)
    orders = [await make_order(gift, customer_name=f"Guest {i}") for i in range(4)]
    for i, order in enumerate(orders):
        gateway.add_payment(f"p-{i}", order.id, "approved")

    for i in range(len(orders)):
        res = await signed_webhook(_payment_body(f"p-{i}"))
        assert res.status_code == 200

    assert (await read_fresh(Gift, gift.id)).stock_count == 0
    async with test_session_factory() as session:
        paid = (
            await session.execute(
                select(func.count(Order.id)).where(Order.settled_at.is_not(None)),
            )
        ).scalar_one()
    assert paid == 4
    assert len(await _sales(test_session_factory)) == 4
