"""Content Routes — editable text sections.

Invariants:
    - GET never 404s: unknown sections are created with their default text
    - PUT upserts the whole section content (admin)
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from event_site.api.dependencies import require_admin
from event_site.infrastructure.credentials import Principal
from event_site.infrastructure.database import get_db
from event_site.schemas.content import ContentResponse, ContentUpdate
from event_site.services.content import get_section, upsert_section

router = APIRouter(prefix="/api/v1/content", tags=["content"])


@router.get("/{section}", response_model=ContentResponse)
async def read_section(section: str, db: AsyncSession = Depends(get_db)):
    return await get_section(db, section)


@router.put("/{section}", response_model=ContentResponse)
async def write_section(
    section: str,
    body: ContentUpdate,
    db: AsyncSession = Depends(get_db),
    _: Principal = Depends(require_admin),
):
    return await upsert_section(db, section, body.content)
