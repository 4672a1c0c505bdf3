"""SiteConfig ORM — the single site-wide configuration row.

Invariants:
    - Exactly one logical row; enforced by services/site_config.ensure_single_config
    - mercado_pago_access_token is never serialized to anonymous clients

Design Decisions:
    - No DB-level singleton constraint: duplicates are collapsed on read, keeping
      the earliest-created row
"""

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from event_site.db.base import Base, TimestampMixin


class SiteConfig(TimestampMixin, Base):
    """Site configuration and payment credentials."""
    __tablename__ = "site_config"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    site_title: Mapped[str] = mapped_column(String(200), nullable=False, default="")
    wedding_date: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    pix_key: Mapped[str] = mapped_column(String(200), nullable=False, default="")
    pix_description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    pix_qr_code_image: Mapped[str] = mapped_column(String(500), nullable=False, default="")
    mercado_pago_public_key: Mapped[str] = mapped_column(
        String(200), nullable=False, default="",
    )
    mercado_pago_access_token: Mapped[str] = mapped_column(
        String(300), nullable=False, default="",
    )
    mercado_pago_webhook_url: Mapped[str] = mapped_column(
        String(500), nullable=False, default="",
    )
    mercado_pago_notification_url: Mapped[str] = mapped_column(
        String(500), nullable=False, default="",
    )
