"""Domain Types — verifies rich type definitions and enum values.

Tests:
    - NewType wrappers exist and are callable
    - Enums serialize to the strings stored in the database
    - Upload namespaces match the public upload directories
"""

from event_site.core.domain_types import (
    GiftId, OrderId, SaleId, PaymentRef,
    OrderStatus, SaleStatus, PaymentMethod, NotificationType,
    UploadNamespace, ReconcileOutcome,
)


def test_identity_types_wrap_primitives():
    assert GiftId(3) == 3
    assert OrderId(4) == 4
    assert SaleId(5) == 5
    assert PaymentRef("123456") == "123456"


def test_order_status_values():
    assert OrderStatus.PENDING.value == "pending"
    assert OrderStatus.PAID.value == "paid"


def test_sale_and_payment_values():
    assert SaleStatus.PAID.value == "paid"
    assert PaymentMethod.MERCADOPAGO.value == "mercadopago"
    assert NotificationType.PAYMENT.value == "payment"


def test_upload_namespaces():
    assert {n.value for n in UploadNamespace} == {
        "presentes", "album", "story", "backgrounds", "pix",
    }


def test_reconcile_outcome_has_four_members():
    assert set(ReconcileOutcome) == {
        ReconcileOutcome.IGNORED,
        ReconcileOutcome.STATUS_UPDATED,
        ReconcileOutcome.SETTLED,
        ReconcileOutcome.ALREADY_SETTLED,
    }
