"""Sale ORM — append-only settlement record, one per paid order.

Invariants:
    - order_id is UNIQUE: a second settlement insert for the same order fails
    - Created with status "paid"; only the admin status edit changes it afterwards
    - amount copies the gift price at settlement time

Design Decisions:
    - order_id nullable: sales recorded by hand (no checkout order) stay possible
"""

from decimal import Decimal

from sqlalchemy import ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from event_site.db.base import Base, TimestampMixin


class Sale(TimestampMixin, Base):
    """Sale ledger entry."""
    __tablename__ = "sales"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    gift_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("gifts.id"), nullable=False, index=True,
    )
    order_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("orders.id"), nullable=True, unique=True,
    )
    customer_name: Mapped[str] = mapped_column(String(200), nullable=False)
    customer_email: Mapped[str | None] = mapped_column(String(320), nullable=True)
    amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    payment_method: Mapped[str] = mapped_column(String(30), nullable=False)
    payment_ref: Mapped[str | None] = mapped_column(String(100), nullable=True)
    status: Mapped[str] = mapped_column(String(30), nullable=False, default="paid")
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    gift: Mapped["Gift"] = relationship("Gift", lazy="selectin")
