"""Site Config Routes — public settings view and admin merge updates.

Invariants:
    - The gateway access token is returned only to a verified admin on GET
    - PUT responses never include the access token
    - A replaced QR code image is removed best-effort after the commit
    - upload-qrcode stores the file AND points the config row at it
"""

import logging

from fastapi import APIRouter, Depends, File, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from event_site.api.dependencies import get_file_storage, optional_admin, require_admin
from event_site.api.routes.route_helpers import store_upload
from event_site.core.domain_types import UploadNamespace
from event_site.core.errors import ResourceNotFoundError
from event_site.core.repository_protocols import FileStorage
from event_site.infrastructure.credentials import Principal
from event_site.infrastructure.database import get_db
from event_site.schemas.common import UploadResponse
from event_site.schemas.site_config import (
    PublicKeyResponse, SiteConfigAdmin, SiteConfigPublic, SiteConfigUpdate,
)
from event_site.services.site_config import ensure_single_config, update_config

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/config", tags=["config"])


@router.get("", response_model=None)
async def read_config(
    db: AsyncSession = Depends(get_db),
    admin: Principal | None = Depends(optional_admin),
) -> SiteConfigAdmin | SiteConfigPublic:
    config = await ensure_single_config(db)
    if admin is not None:
        return SiteConfigAdmin.model_validate(config)
    return SiteConfigPublic.model_validate(config)


@router.put("", response_model=SiteConfigPublic)
async def write_config(
    body: SiteConfigUpdate,
    db: AsyncSession = Depends(get_db),
    storage: FileStorage = Depends(get_file_storage),
    admin: Principal = Depends(require_admin),
):
    config, replaced_qr = await update_config(db, body.model_dump())
    if replaced_qr:
        storage.remove(replaced_qr)
    logger.info(f"Site configuration updated by admin {admin.user_id}")
    return SiteConfigPublic.model_validate(config)


@router.post("/upload-qrcode", response_model=UploadResponse)
async def upload_qrcode(
    image: UploadFile | None = File(None),
    db: AsyncSession = Depends(get_db),
    storage: FileStorage = Depends(get_file_storage),
    admin: Principal = Depends(require_admin),
):
    reference, _name = await store_upload(storage, UploadNamespace.PIX.value, image)
    _config, replaced_qr = await update_config(db, {"pix_qr_code_image": reference})
    if replaced_qr:
        storage.remove(replaced_qr)
    logger.info(f"PIX QR code replaced by admin {admin.user_id}")
    return UploadResponse(url=reference, message="QR code uploaded successfully")


@router.get("/mercadopago-public-key", response_model=PublicKeyResponse)
async def read_public_key(db: AsyncSession = Depends(get_db)):
    config = await ensure_single_config(db)
    if not config.mercado_pago_public_key:
        raise ResourceNotFoundError("Mercado Pago public key", "config")
    return PublicKeyResponse(public_key=config.mercado_pago_public_key)
