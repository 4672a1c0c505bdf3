"""Route Helpers — shared lookup and multipart handling for resource routes.

Invariants:
    - get_or_404 raises ResourceNotFoundError (404), never returns None
    - Uploads are read fully into memory, bounded by the storage max size check
    - An UploadFile without a filename counts as "no file sent" (400)
"""

from typing import TypeVar

from fastapi import UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from event_site.core.errors import RequestValidationFailedError, ResourceNotFoundError
from event_site.core.repository_protocols import FileStorage

ModelT = TypeVar("ModelT")


async def get_or_404(
    db: AsyncSession, model: type[ModelT], entity_id: int, label: str,
) -> ModelT:
    """Get a row by primary key or raise 404."""
    entity = await db.get(model, entity_id)
    if entity is None:
        raise ResourceNotFoundError(label, str(entity_id))
    return entity


async def store_upload(
    storage: FileStorage, namespace: str, upload: UploadFile | None,
) -> tuple[str, str]:
    """Persist one upload. Returns (reference, original filename)."""
    if upload is None or not upload.filename:
        raise RequestValidationFailedError("No image sent", "image")
    data = await upload.read()
    reference = await storage.save(
        namespace, upload.filename, upload.content_type, data,
    )
    return reference, upload.filename
