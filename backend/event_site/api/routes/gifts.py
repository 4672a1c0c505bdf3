"""Gift Routes — registry CRUD and image upload.

Invariants:
    - Reads are public; writes require the admin credential
    - Deleting a gift removes its uploaded image best-effort after the DB delete
"""

import logging

from fastapi import APIRouter, Depends, File, UploadFile, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from event_site.api.dependencies import get_file_storage, require_admin
from event_site.api.routes.route_helpers import get_or_404, store_upload
from event_site.core.domain_types import UploadNamespace
from event_site.core.repository_protocols import FileStorage
from event_site.infrastructure.credentials import Principal
from event_site.infrastructure.database import get_db
from event_site.models.gift import Gift
from event_site.schemas.common import MessageResponse, UploadResponse
from event_site.schemas.gift import GiftCreate, GiftResponse, GiftUpdate

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/gifts", tags=["gifts"])


@router.get("", response_model=list[GiftResponse])
async def list_gifts(db: AsyncSession = Depends(get_db)):
    result = await db.execute(select(Gift).order_by(Gift.name.asc()))
    return result.scalars().all()


@router.post("/upload", response_model=UploadResponse)
async def upload_gift_image(
    image: UploadFile | None = File(None),
    storage: FileStorage = Depends(get_file_storage),
    _: Principal = Depends(require_admin),
):
    reference, _name = await store_upload(storage, UploadNamespace.GIFTS.value, image)
    return UploadResponse(url=reference)


@router.get("/{gift_id}", response_model=GiftResponse)
async def get_gift(gift_id: int, db: AsyncSession = Depends(get_db)):
    return await get_or_404(db, Gift, gift_id, "Gift")


@router.post("", response_model=GiftResponse, status_code=status.HTTP_201_CREATED)
async def create_gift(
    body: GiftCreate,
    db: AsyncSession = Depends(get_db),
    _: Principal = Depends(require_admin),
):
    gift = Gift(**body.model_dump())
    db.add(gift)
    await db.commit()
    await db.refresh(gift)
    logger.info(f"Gift {gift.id} created", extra={"gift_id": gift.id})
    return gift


@router.put("/{gift_id}", response_model=GiftResponse)
async def update_gift(
    gift_id: int,
    body: GiftUpdate,
    db: AsyncSession = Depends(get_db),
    _: Principal = Depends(require_admin),
):
    gift = await get_or_404(db, Gift, gift_id, "Gift")
    for name, value in body.model_dump(exclude_unset=True).items():
        if name in ("name", "price", "stock_count") and value is None:
            continue
        setattr(gift, name, value)
    await db.commit()
    await db.refresh(gift)
    return gift


@router.delete("/{gift_id}", response_model=MessageResponse)
async def delete_gift(
    gift_id: int,
    db: AsyncSession = Depends(get_db),
    storage: FileStorage = Depends(get_file_storage),
    _: Principal = Depends(require_admin),
):
    gift = await get_or_404(db, Gift, gift_id, "Gift")
    image = gift.image
    await db.delete(gift)
    await db.commit()
    storage.remove(image)
    logger.info(f"Gift {gift_id} deleted", extra={"gift_id": gift_id})
    return MessageResponse(message="Gift deleted successfully")
