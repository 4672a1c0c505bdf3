"""Site Config Repository — single-row configuration with self-healing reads.

Invariants:
    - ensure_single_config always returns exactly one row: creates a default when
      the table is empty and deletes every row but the earliest-created one
    - Callers fetch through this module on every use; nothing caches the row
    - gateway_credentials raises UpstreamFailureError when no access token is set

Design Decisions:
    - Repository function over a process-wide mutable global: credential rotation
      through PUT /config takes effect on the next request
"""

import logging

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from event_site.config import Settings
from event_site.core.errors import UpstreamFailureError
from event_site.core.payment_types import GatewayCredentials
from event_site.models.site_config import SiteConfig

logger = logging.getLogger(__name__)

DEFAULT_SITE_TITLE = "Nosso Casamento"

# PUT /config fields that follow "new value or keep existing"
MERGEABLE_FIELDS = (
    "site_title",
    "wedding_date",
    "pix_key",
    "pix_description",
    "pix_qr_code_image",
    "mercado_pago_public_key",
    "mercado_pago_access_token",
    "mercado_pago_webhook_url",
    "mercado_pago_notification_url",
)


async def ensure_single_config(db: AsyncSession) -> SiteConfig:
    """Return the one configuration row, creating or collapsing as needed."""
    result = await db.execute(
        select(SiteConfig).order_by(SiteConfig.created_at.asc(), SiteConfig.id.asc()),
    )
    configs = list(result.scalars().all())

    if not configs:
        config = SiteConfig(site_title=DEFAULT_SITE_TITLE)
        db.add(config)
        await db.commit()
        await db.refresh(config)
        logger.info("Created default site configuration")
        return config

    primary, duplicates = configs[0], configs[1:]
    if duplicates:
        await db.execute(
            delete(SiteConfig).where(
                SiteConfig.id.in_([c.id for c in duplicates]),
            ),
        )
        await db.commit()
        logger.warning(
            f"Removed {len(duplicates)} duplicate site configuration row(s), "
            f"kept id={primary.id}",
        )
    return primary


async def update_config(
    db: AsyncSession, changes: dict[str, str | None],
) -> tuple[SiteConfig, str | None]:
    """Merge non-empty values into the config row.

    Returns the updated row and the previous QR code reference when the QR image
    was replaced, so the caller can remove the old file.
    """
    config = await ensure_single_config(db)
    replaced_qr: str | None = None
    for name in MERGEABLE_FIELDS:
        value = changes.get(name)
        if not value:
            continue
        if name == "pix_qr_code_image" and value != config.pix_qr_code_image:
            replaced_qr = config.pix_qr_code_image or None
        setattr(config, name, value)
    await db.commit()
    await db.refresh(config)
    return config, replaced_qr


def gateway_credentials(config: SiteConfig, settings: Settings) -> GatewayCredentials:
    """Build per-call gateway credentials from the config row."""
    if not config.mercado_pago_access_token:
        raise UpstreamFailureError(
            "Payment gateway settings not found", "configure",
        )
    return GatewayCredentials(
        access_token=config.mercado_pago_access_token,
        public_key=config.mercado_pago_public_key or None,
        notification_url=(
            config.mercado_pago_notification_url
            or settings.payment_notification_url
            or None
        ),
    )
