"""Initial schema — gifts, orders, sales, site config, content and media tables.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("email", sa.String(320), nullable=False, unique=True),
        sa.Column("password_hash", sa.String(200), nullable=False),
        *_timestamps(),
    )

    op.create_table(
        "gifts",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("price", sa.Numeric(10, 2), nullable=False),
        sa.Column("image", sa.String(500), nullable=True),
        sa.Column("stock_count", sa.Integer, nullable=False, server_default="1"),
        *_timestamps(),
        sa.CheckConstraint("stock_count >= 0", name="ck_gifts_stock_non_negative"),
    )

    op.create_table(
        "orders",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("gift_id", sa.Integer, sa.ForeignKey("gifts.id"), nullable=False),
        sa.Column("customer_name", sa.String(200), nullable=False),
        sa.Column("customer_email", sa.String(320), nullable=True),
        sa.Column("status", sa.String(30), nullable=False, server_default="pending"),
        sa.Column("payment_ref", sa.String(100), nullable=True),
        sa.Column("settled_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_orders_gift_id", "orders", ["gift_id"])

    op.create_table(
        "sales",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("gift_id", sa.Integer, sa.ForeignKey("gifts.id"), nullable=False),
        sa.Column("order_id", sa.Integer, sa.ForeignKey("orders.id"), nullable=True, unique=True),
        sa.Column("customer_name", sa.String(200), nullable=False),
        sa.Column("customer_email", sa.String(320), nullable=True),
        sa.Column("amount", sa.Numeric(10, 2), nullable=False),
        sa.Column("payment_method", sa.String(30), nullable=False),
        sa.Column("payment_ref", sa.String(100), nullable=True),
        sa.Column("status", sa.String(30), nullable=False, server_default="paid"),
        sa.Column("notes", sa.Text, nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_sales_gift_id", "sales", ["gift_id"])

    op.create_table(
        "site_config",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("site_title", sa.String(200), nullable=False, server_default=""),
        sa.Column("wedding_date", sa.String(100), nullable=False, server_default=""),
        sa.Column("pix_key", sa.String(200), nullable=False, server_default=""),
        sa.Column("pix_description", sa.Text, nullable=False, server_default=""),
        sa.Column("pix_qr_code_image", sa.String(500), nullable=False, server_default=""),
        sa.Column("mercado_pago_public_key", sa.String(200), nullable=False, server_default=""),
        sa.Column("mercado_pago_access_token", sa.String(300), nullable=False, server_default=""),
        sa.Column("mercado_pago_webhook_url", sa.String(500), nullable=False, server_default=""),
        sa.Column("mercado_pago_notification_url", sa.String(500), nullable=False, server_default=""),
        *_timestamps(),
    )

    op.create_table(
        "content_blocks",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("section", sa.String(100), nullable=False, unique=True),
        sa.Column("content", sa.Text, nullable=False, server_default=""),
        *_timestamps(),
    )

    op.create_table(
        "album_photos",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("gallery", sa.String(100), nullable=False),
        sa.Column("image", sa.String(500), nullable=False),
        sa.Column("title", sa.String(200), nullable=False, server_default=""),
        sa.Column("position", sa.Integer, nullable=False, server_default="0"),
        sa.Column("active", sa.Boolean, nullable=False, server_default=sa.true()),
        *_timestamps(),
    )
    op.create_index("ix_album_photos_gallery", "album_photos", ["gallery"])

    op.create_table(
        "story_events",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("date", sa.String(100), nullable=False),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("text", sa.Text, nullable=False),
        sa.Column("image", sa.String(500), nullable=True),
        sa.Column("position", sa.Integer, nullable=False, server_default="0"),
        *_timestamps(),
    )

    op.create_table(
        "background_images",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("filename", sa.String(300), nullable=False),
        sa.Column("path", sa.String(500), nullable=False),
        sa.Column("active", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("position", sa.Integer, nullable=False, server_default="0"),
        *_timestamps(),
    )

    op.create_table(
        "rsvps",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("companions", sa.Integer, nullable=False, server_default="0"),
        sa.Column("email", sa.String(320), nullable=True),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("message", sa.Text, nullable=True),
        sa.Column("confirmed", sa.Boolean, nullable=False, server_default=sa.true()),
        *_timestamps(),
    )


def downgrade() -> None:
    op.drop_table("rsvps")
    op.drop_table("background_images")
    op.drop_table("story_events")
    op.drop_index("ix_album_photos_gallery", table_name="album_photos")
    op.drop_table("album_photos")
    op.drop_table("content_blocks")
    op.drop_table("site_config")
    op.drop_index("ix_sales_gift_id", table_name="sales")
    op.drop_table("sales")
    op.drop_index("ix_orders_gift_id", table_name="orders")
    op.drop_table("orders")
    op.drop_table("gifts")
    op.drop_table("users")
