"""RSVP Routes — public confirmation form, admin listing and CSV export.

Invariants:
    - POST is public; listing, export and delete require the admin credential
    - New RSVPs are always stored as confirmed
    - /export is declared before /{rsvp_id}
"""

import csv
import io
import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import Response
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from event_site.api.dependencies import require_admin
from event_site.api.routes.route_helpers import get_or_404
from event_site.infrastructure.credentials import Principal
from event_site.infrastructure.database import get_db
from event_site.models.rsvp import Rsvp
from event_site.schemas.common import MessageResponse
from event_site.schemas.rsvp import RsvpCreate, RsvpResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/rsvp", tags=["rsvp"])

CSV_HEADER = (
    "Nome", "Acompanhantes", "Email", "Telefone", "Mensagem",
    "Confirmado", "Data de Registro",
)


def _newest_first():
    return select(Rsvp).order_by(Rsvp.created_at.desc(), Rsvp.id.desc())


def render_rsvp_csv(rsvps: list[Rsvp]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for rsvp in rsvps:
        writer.writerow((
            rsvp.name,
            rsvp.companions,
            rsvp.email or "",
            rsvp.phone or "",
            rsvp.message or "",
            "Sim" if rsvp.confirmed else "Não",
            rsvp.created_at.strftime("%d/%m/%Y"),
        ))
    return buffer.getvalue()


@router.get("", response_model=list[RsvpResponse])
async def list_rsvps(
    db: AsyncSession = Depends(get_db),
    _: Principal = Depends(require_admin),
):
    result = await db.execute(_newest_first())
    return result.scalars().all()


@router.post("", response_model=RsvpResponse, status_code=status.HTTP_201_CREATED)
async def create_rsvp(body: RsvpCreate, db: AsyncSession = Depends(get_db)):
    rsvp = Rsvp(**body.model_dump(), confirmed=True)
    db.add(rsvp)
    await db.commit()
    await db.refresh(rsvp)
    logger.info(f"RSVP {rsvp.id} registered with {rsvp.companions} companion(s)")
    return rsvp


@router.get("/export")
async def export_rsvps(
    db: AsyncSession = Depends(get_db),
    _: Principal = Depends(require_admin),
):
    result = await db.execute(_newest_first())
    return Response(
        content=render_rsvp_csv(list(result.scalars().all())),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": "attachment; filename=rsvps.csv"},
    )


@router.delete("/{rsvp_id}", response_model=MessageResponse)
async def delete_rsvp(
    rsvp_id: int,
    db: AsyncSession = Depends(get_db),
    _: Principal = Depends(require_admin),
):
    rsvp = await get_or_404(db, Rsvp, rsvp_id, "RSVP")
    await db.delete(rsvp)
    await db.commit()
    return MessageResponse(message="RSVP deleted successfully")
