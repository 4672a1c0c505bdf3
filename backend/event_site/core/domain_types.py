"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - GiftId, OrderId, SaleId wrap ints — row ids from the relational store
    - PaymentRef is the gateway's opaque identifier, always carried as str
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON and compare against DB strings without converters
    - OrderStatus only names the states this service writes; gateway statuses
      pass through as plain strings
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

GiftId = NewType("GiftId", int)
OrderId = NewType("OrderId", int)
SaleId = NewType("SaleId", int)
PaymentRef = NewType("PaymentRef", str)


# ─── Enums ───────────────────────────────────────────────────────

class OrderStatus(str, Enum):
    """Order states written by this service — maps to DB `status` column."""
    PENDING = "pending"
    PAID = "paid"


class SaleStatus(str, Enum):
    """Sale status on creation. Admins may later set any free-form status."""
    PAID = "paid"


class PaymentMethod(str, Enum):
    """Payment channels recorded on sales."""
    MERCADOPAGO = "mercadopago"


class NotificationType(str, Enum):
    """Gateway notification types the webhook distinguishes."""
    PAYMENT = "payment"


class UploadNamespace(str, Enum):
    """Upload sub-directories, one per image-bearing collection."""
    GIFTS = "presentes"
    ALBUM = "album"
    STORY = "story"
    BACKGROUNDS = "backgrounds"
    PIX = "pix"


class ReconcileOutcome(str, Enum):
    """What a processed webhook notification did to domain state."""
    IGNORED = "ignored"
    STATUS_UPDATED = "status_updated"
    SETTLED = "settled"
    ALREADY_SETTLED = "already_settled"
