"""Gift ORM — registry item that guests can buy through checkout.

Invariants:
    - stock_count >= 0 (CHECK constraint; settlement decrements are floored)
    - price is Numeric(10, 2) — currency amount, never float in storage

Design Decisions:
    - image stores the upload reference string (/uploads/presentes/...), not bytes
"""

from decimal import Decimal

from sqlalchemy import CheckConstraint, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from event_site.db.base import Base, TimestampMixin


class Gift(TimestampMixin, Base):
    """Gift registry entry."""
    __tablename__ = "gifts"
    __table_args__ = (
        CheckConstraint("stock_count >= 0", name="ck_gifts_stock_non_negative"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    image: Mapped[str | None] = mapped_column(String(500), nullable=True)
    stock_count: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
