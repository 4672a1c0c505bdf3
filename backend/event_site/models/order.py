"""Order ORM — purchase intent for one gift, pending until the gateway confirms.

Invariants:
    - Created with status "pending"; changed only by webhook reconciliation
    - payment_ref (gateway preference id) written at most once (conditional update)
    - settled_at written at most once — it is the settlement admission gate
    - Never deleted by the order lifecycle

Design Decisions:
    - settled_at separate from status: a gateway may report "refunded" after
      "approved"; status follows the gateway while settled_at remembers that
      stock and sale side effects already happened
    - gift relationship eager (selectin): order lookups always return the gift snapshot
"""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from event_site.db.base import Base, TimestampMixin


class Order(TimestampMixin, Base):
    """Checkout order."""
    __tablename__ = "orders"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    gift_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("gifts.id"), nullable=False, index=True,
    )
    customer_name: Mapped[str] = mapped_column(String(200), nullable=False)
    customer_email: Mapped[str | None] = mapped_column(String(320), nullable=True)
    status: Mapped[str] = mapped_column(
        String(30), nullable=False, default="pending",
    )
    payment_ref: Mapped[str | None] = mapped_column(String(100), nullable=True)
    settled_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )

    gift: Mapped["Gift"] = relationship("Gift", lazy="selectin")
