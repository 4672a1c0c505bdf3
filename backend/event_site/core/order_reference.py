"""Order Reference — codec for the gateway external reference and status mapping.

Invariants:
    - format_external_reference(n) == "order-<n>" for every n >= 1
    - parse_external_reference(format_external_reference(n)) == n
    - Unparseable references return None (never raise) — the webhook acknowledges them
    - Gateway "approved" collapses to OrderStatus.PAID; every other status passes through

Design Decisions:
    - Pure functions, no IO: exercised directly by core tests
"""

import re

from event_site.core.domain_types import OrderId, OrderStatus

EXTERNAL_REFERENCE_PREFIX = "order-"
GATEWAY_APPROVED = "approved"

_REFERENCE_PATTERN = re.compile(
    rf"^{re.escape(EXTERNAL_REFERENCE_PREFIX)}([0-9]+)$",
)


def format_external_reference(order_id: int) -> str:
    """Build the reference embedded in a checkout preference."""
    if order_id < 1:
        raise ValueError(f"order id must be positive, got {order_id}")
    return f"{EXTERNAL_REFERENCE_PREFIX}{order_id}"


def parse_external_reference(reference: str | None) -> OrderId | None:
    """Recover the order id from a payment's external reference."""
    if not reference:
        return None
    match = _REFERENCE_PATTERN.match(reference.strip())
    if not match:
        return None
    order_id = int(match.group(1))
    if order_id < 1:
        return None
    return OrderId(order_id)


def map_payment_status(gateway_status: str) -> str:
    """Map a gateway payment status onto the Order status column."""
    if gateway_status == GATEWAY_APPROVED:
        return OrderStatus.PAID.value
    return gateway_status
