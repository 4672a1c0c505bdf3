"""Site Config Schemas — public view, admin view and the merge update.

Invariants:
    - SiteConfigPublic never includes the gateway access token
    - SiteConfigUpdate fields are all optional; empty strings keep existing values
"""

from datetime import datetime

from pydantic import Field

from event_site.schemas.common import ApiModel, StrictApiModel


class SiteConfigPublic(ApiModel):
    id: int
    site_title: str
    wedding_date: str
    pix_key: str
    pix_description: str
    pix_qr_code_image: str
    mercado_pago_public_key: str
    mercado_pago_webhook_url: str
    mercado_pago_notification_url: str
    created_at: datetime
    updated_at: datetime


class SiteConfigAdmin(SiteConfigPublic):
    mercado_pago_access_token: str


class SiteConfigUpdate(StrictApiModel):
    site_title: str | None = Field(None, max_length=200)
    wedding_date: str | None = Field(None, max_length=100)
    pix_key: str | None = Field(None, max_length=200)
    pix_description: str | None = None
    pix_qr_code_image: str | None = Field(None, max_length=500)
    mercado_pago_public_key: str | None = Field(None, max_length=200)
    mercado_pago_access_token: str | None = Field(None, max_length=300)
    mercado_pago_webhook_url: str | None = Field(None, max_length=500)
    mercado_pago_notification_url: str | None = Field(None, max_length=500)


class PublicKeyResponse(ApiModel):
    public_key: str
