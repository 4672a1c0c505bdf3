"""Order Reference — codec and gateway status mapping.

Tests:
    - parse(format(n)) == n across small and large ids
    - Malformed references yield None instead of raising
    - "approved" maps to paid; every other status passes through unchanged
"""

import pytest

from event_site.core.domain_types import OrderStatus
from event_site.core.order_reference import (
    format_external_reference, map_payment_status, parse_external_reference,
)


@pytest.mark.parametrize("order_id", [1, 7, 42, 1000, 2**31 - 1, 10**12])
def test_reference_round_trips(order_id):
    assert parse_external_reference(format_external_reference(order_id)) == order_id


def test_format_uses_order_prefix():
    assert format_external_reference(42) == "order-42"


def test_format_rejects_non_positive_ids():
    with pytest.raises(ValueError):
        format_external_reference(0)


@pytest.mark.parametrize("reference", [
    None, "", "order-", "order-abc", "gift-12", "ORDER-12", "order-12-extra",
    "order--3", "order-0", "12",
])
def test_parse_returns_none_for_unrecognized(reference):
    assert parse_external_reference(reference) is None


def test_parse_tolerates_surrounding_whitespace():
    assert parse_external_reference("  order-9 \n") == 9


def test_approved_maps_to_paid():
    assert map_payment_status("approved") == OrderStatus.PAID.value


@pytest.mark.parametrize("status", [
    "pending", "in_process", "rejected", "cancelled", "refunded", "charged_back",
])
def test_other_statuses_pass_through(status):
    assert map_payment_status(status) == status
