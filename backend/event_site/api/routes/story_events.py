"""Story Event Routes — the couple's timeline.

Invariants:
    - Listing order is (position, created_at) ascending
    - Create and update both require date, title and text
    - Deleting an event removes its uploaded image best-effort
"""

import logging

from fastapi import APIRouter, Depends, File, UploadFile, status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from event_site.api.dependencies import get_file_storage, require_admin
from event_site.api.routes.route_helpers import get_or_404, store_upload
from event_site.core.domain_types import UploadNamespace
from event_site.core.repository_protocols import FileStorage
from event_site.infrastructure.credentials import Principal
from event_site.infrastructure.database import get_db
from event_site.models.story_event import StoryEvent
from event_site.schemas.common import MessageResponse, UploadResponse
from event_site.schemas.story_event import StoryEventResponse, StoryEventWrite

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/story-events", tags=["story-events"])


@router.get("", response_model=list[StoryEventResponse])
async def list_story_events(db: AsyncSession = Depends(get_db)):
    result = await db.execute(
        select(StoryEvent).order_by(
            StoryEvent.position.asc(), StoryEvent.created_at.asc(), StoryEvent.id.asc(),
        ),
    )
    return result.scalars().all()


@router.post("/upload", response_model=UploadResponse)
async def upload_story_image(
    image: UploadFile | None = File(None),
    storage: FileStorage = Depends(get_file_storage),
    _: Principal = Depends(require_admin),
):
    reference, _name = await store_upload(storage, UploadNamespace.STORY.value, image)
    return UploadResponse(url=reference)


@router.get("/{event_id}", response_model=StoryEventResponse)
async def get_story_event(event_id: int, db: AsyncSession = Depends(get_db)):
    return await get_or_404(db, StoryEvent, event_id, "Story event")


@router.post("", response_model=StoryEventResponse, status_code=status.HTTP_201_CREATED)
async def create_story_event(
    body: StoryEventWrite,
    db: AsyncSession = Depends(get_db),
    _: Principal = Depends(require_admin),
):
    position = body.position
    if position is None:
        count = (await db.execute(select(func.count(StoryEvent.id)))).scalar_one()
        position = count
    event = StoryEvent(
        date=body.date, title=body.title, text=body.text,
        image=body.image or None, position=position,
    )
    db.add(event)
    await db.commit()
    await db.refresh(event)
    return event


@router.put("/{event_id}", response_model=StoryEventResponse)
async def update_story_event(
    event_id: int,
    body: StoryEventWrite,
    db: AsyncSession = Depends(get_db),
    _: Principal = Depends(require_admin),
):
    event = await get_or_404(db, StoryEvent, event_id, "Story event")
    event.date = body.date
    event.title = body.title
    event.text = body.text
    event.image = body.image or None
    if body.position is not None:
        event.position = body.position
    await db.commit()
    await db.refresh(event)
    return event


@router.delete("/{event_id}", response_model=MessageResponse)
async def delete_story_event(
    event_id: int,
    db: AsyncSession = Depends(get_db),
    storage: FileStorage = Depends(get_file_storage),
    _: Principal = Depends(require_admin),
):
    event = await get_or_404(db, StoryEvent, event_id, "Story event")
    image = event.image
    await db.delete(event)
    await db.commit()
    storage.remove(image)
    return MessageResponse(message="Event deleted successfully")
