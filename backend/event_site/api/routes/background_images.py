"""Background Image Routes — home page slideshow.

Invariants:
    - Listings are ordered by position; /active filters to active images
    - An upload creates its record at the end of the list (position = row count)
    - POST /reorder assigns positions from the index of each id in the payload
"""

import logging

from fastapi import APIRouter, Depends, File, UploadFile
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from event_site.api.dependencies import get_file_storage, require_admin
from event_site.api.routes.route_helpers import get_or_404, store_upload
from event_site.core.domain_types import UploadNamespace
from event_site.core.repository_protocols import FileStorage
from event_site.infrastructure.credentials import Principal
from event_site.infrastructure.database import get_db
from event_site.models.background_image import BackgroundImage
from event_site.schemas.background_image import (
    BackgroundImageResponse, BackgroundImageUpdate, BackgroundReorder,
    BackgroundUploadResponse,
)
from event_site.schemas.common import MessageResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/background-images", tags=["background-images"])


def _by_position():
    return select(BackgroundImage).order_by(
        BackgroundImage.position.asc(), BackgroundImage.id.asc(),
    )


@router.get("", response_model=list[BackgroundImageResponse])
async def list_background_images(db: AsyncSession = Depends(get_db)):
    result = await db.execute(_by_position())
    return result.scalars().all()


@router.get("/active", response_model=list[BackgroundImageResponse])
async def list_active_background_images(db: AsyncSession = Depends(get_db)):
    result = await db.execute(_by_position().where(BackgroundImage.active.is_(True)))
    return result.scalars().all()


@router.post("/upload", response_model=BackgroundUploadResponse)
async def upload_background_image(
    image: UploadFile | None = File(None),
    db: AsyncSession = Depends(get_db),
    storage: FileStorage = Depends(get_file_storage),
    _: Principal = Depends(require_admin),
):
    reference, _name = await store_upload(
        storage, UploadNamespace.BACKGROUNDS.value, image,
    )
    count = (await db.execute(select(func.count(BackgroundImage.id)))).scalar_one()
    record = BackgroundImage(
        filename=reference.rsplit("/", 1)[-1],
        path=reference,
        active=True,
        position=count,
    )
    db.add(record)
    await db.commit()
    await db.refresh(record)
    return BackgroundUploadResponse(
        image=BackgroundImageResponse.model_validate(record),
    )


@router.post("/reorder", response_model=MessageResponse)
async def reorder_background_images(
    body: BackgroundReorder,
    db: AsyncSession = Depends(get_db),
    _: Principal = Depends(require_admin),
):
    for index, image_id in enumerate(body.order):
        image = await get_or_404(db, BackgroundImage, image_id, "Background image")
        image.position = index
    await db.commit()
    return MessageResponse(message="Order updated successfully")


@router.put("/{image_id}", response_model=BackgroundImageResponse)
async def update_background_image(
    image_id: int,
    body: BackgroundImageUpdate,
    db: AsyncSession = Depends(get_db),
    _: Principal = Depends(require_admin),
):
    image = await get_or_404(db, BackgroundImage, image_id, "Background image")
    if body.active is not None:
        image.active = body.active
    if body.position is not None:
        image.position = body.position
    await db.commit()
    await db.refresh(image)
    return image


@router.delete("/{image_id}", response_model=MessageResponse)
async def delete_background_image(
    image_id: int,
    db: AsyncSession = Depends(get_db),
    storage: FileStorage = Depends(get_file_storage),
    _: Principal = Depends(require_admin),
):
    image = await get_or_404(db, BackgroundImage, image_id, "Background image")
    path = image.path
    await db.delete(image)
    await db.commit()
    storage.remove(path)
    return MessageResponse(message="Image deleted successfully")
