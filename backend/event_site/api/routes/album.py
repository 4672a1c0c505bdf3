"""Album Routes — gallery photos, batch insert, multi-file upload and reordering.

Invariants:
    - Reads are public and accept ?active=true|false to filter
    - Batch inserts continue positions after the gallery's current maximum
    - /reorder is declared before /{photo_id} so it is never parsed as an id
    - At most MAX_UPLOAD_FILES files per upload request
"""

import logging
from collections import defaultdict

from fastapi import APIRouter, Depends, File, UploadFile, status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from event_site.api.dependencies import get_file_storage, require_admin
from event_site.api.routes.route_helpers import get_or_404, store_upload
from event_site.core.domain_types import UploadNamespace
from event_site.core.errors import RequestValidationFailedError
from event_site.core.repository_protocols import FileStorage
from event_site.infrastructure.credentials import Principal
from event_site.infrastructure.database import get_db
from event_site.models.album_photo import AlbumPhoto
from event_site.schemas.album import (
    ActiveToggle, AlbumBatchCreate, AlbumBatchResponse, AlbumPhotoCreate,
    AlbumPhotoResponse, AlbumPhotoUpdate, AlbumReorder, AlbumUploadResponse,
    UploadedFile,
)
from event_site.schemas.common import MessageResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/album", tags=["album"])

MAX_UPLOAD_FILES = 20


def _ordered(active: bool | None):
    query = select(AlbumPhoto).order_by(
        AlbumPhoto.gallery.asc(), AlbumPhoto.position.asc(), AlbumPhoto.id.asc(),
    )
    if active is not None:
        query = query.where(AlbumPhoto.active == active)
    return query


@router.get("", response_model=dict[str, list[AlbumPhotoResponse]])
async def list_album(active: bool | None = None, db: AsyncSession = Depends(get_db)):
    """All photos grouped by gallery name."""
    result = await db.execute(_ordered(active))
    grouped: dict[str, list[AlbumPhoto]] = defaultdict(list)
    for photo in result.scalars().all():
        grouped[photo.gallery].append(photo)
    return grouped


@router.post("", response_model=AlbumPhotoResponse, status_code=status.HTTP_201_CREATED)
async def create_photo(
    body: AlbumPhotoCreate,
    db: AsyncSession = Depends(get_db),
    _: Principal = Depends(require_admin),
):
    photo = AlbumPhoto(**body.model_dump())
    db.add(photo)
    await db.commit()
    await db.refresh(photo)
    return photo


@router.post(
    "/batch", response_model=AlbumBatchResponse, status_code=status.HTTP_201_CREATED,
)
async def create_photos_batch(
    body: AlbumBatchCreate,
    db: AsyncSession = Depends(get_db),
    _: Principal = Depends(require_admin),
):
    next_position: dict[str, int] = {}
    photos = []
    for item in body.photos:
        if item.gallery not in next_position:
            current_max = (
                await db.execute(
                    select(func.max(AlbumPhoto.position))
                    .where(AlbumPhoto.gallery == item.gallery),
                )
            ).scalar_one()
            next_position[item.gallery] = 0 if current_max is None else current_max + 1
        photo = AlbumPhoto(**item.model_dump(), position=next_position[item.gallery])
        next_position[item.gallery] += 1
        db.add(photo)
        photos.append(photo)
    await db.commit()
    for photo in photos:
        await db.refresh(photo)
    logger.info(f"Added {len(photos)} album photo(s) in batch")
    return AlbumBatchResponse(
        message=f"{len(photos)} photo(s) added successfully",
        photos=[AlbumPhotoResponse.model_validate(p) for p in photos],
    )


@router.post("/upload", response_model=AlbumUploadResponse)
async def upload_album_images(
    images: list[UploadFile] = File(...),
    storage: FileStorage = Depends(get_file_storage),
    _: Principal = Depends(require_admin),
):
    if not images:
        raise RequestValidationFailedError("No image sent", "images")
    if len(images) > MAX_UPLOAD_FILES:
        raise RequestValidationFailedError(
            f"At most {MAX_UPLOAD_FILES} images per upload", "images",
        )
    files = []
    for upload in images:
        reference, original = await store_upload(
            storage, UploadNamespace.ALBUM.value, upload,
        )
        files.append(UploadedFile(
            filename=reference.rsplit("/", 1)[-1],
            path=reference,
            original_name=original,
        ))
    return AlbumUploadResponse(files=files)


@router.put("/reorder", response_model=MessageResponse)
async def reorder_photos(
    body: AlbumReorder,
    db: AsyncSession = Depends(get_db),
    _: Principal = Depends(require_admin),
):
    for entry in body.photos:
        photo = await get_or_404(db, AlbumPhoto, entry.id, "Photo")
        photo.position = entry.position
    await db.commit()
    return MessageResponse(message="Order updated successfully")


@router.get("/{gallery}", response_model=list[AlbumPhotoResponse])
async def list_gallery(
    gallery: str, active: bool | None = None, db: AsyncSession = Depends(get_db),
):
    result = await db.execute(_ordered(active).where(AlbumPhoto.gallery == gallery))
    return result.scalars().all()


@router.put("/{photo_id}", response_model=AlbumPhotoResponse)
async def update_photo(
    photo_id: int,
    body: AlbumPhotoUpdate,
    db: AsyncSession = Depends(get_db),
    _: Principal = Depends(require_admin),
):
    photo = await get_or_404(db, AlbumPhoto, photo_id, "Photo")
    for name, value in body.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(photo, name, value)
    await db.commit()
    await db.refresh(photo)
    return photo


@router.put("/{photo_id}/toggle-active", response_model=AlbumPhotoResponse)
async def toggle_photo_active(
    photo_id: int,
    body: ActiveToggle,
    db: AsyncSession = Depends(get_db),
    _: Principal = Depends(require_admin),
):
    photo = await get_or_404(db, AlbumPhoto, photo_id, "Photo")
    photo.active = body.active
    await db.commit()
    await db.refresh(photo)
    return photo


@router.delete("/{photo_id}", response_model=MessageResponse)
async def delete_photo(
    photo_id: int,
    db: AsyncSession = Depends(get_db),
    storage: FileStorage = Depends(get_file_storage),
    _: Principal = Depends(require_admin),
):
    photo = await get_or_404(db, AlbumPhoto, photo_id, "Photo")
    image = photo.image
    await db.delete(photo)
    await db.commit()
    storage.remove(image)
    return MessageResponse(message="Photo removed successfully")
