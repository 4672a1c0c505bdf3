"""Sales Routes — admin ledger of settled gift purchases.

Invariants:
    - Every route requires the admin credential
    - Sales are created only by payment settlement; this router edits status/notes
    - /stats/summary is declared before /{sale_id}
"""

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from event_site.api.dependencies import require_admin
from event_site.core.domain_types import SaleId
from event_site.core.errors import ErrorContext, ResourceNotFoundError
from event_site.infrastructure.database import get_db
from event_site.models.sale import Sale
from event_site.schemas.sale import SaleResponse, SaleStatusUpdate
from event_site.services.sales_stats import summarize_sales

router = APIRouter(
    prefix="/api/v1/sales", tags=["sales"], dependencies=[Depends(require_admin)],
)


@router.get("", response_model=list[SaleResponse])
async def list_sales(db: AsyncSession = Depends(get_db)):
    result = await db.execute(
        select(Sale)
        .options(selectinload(Sale.gift))
        .order_by(Sale.created_at.desc(), Sale.id.desc()),
    )
    return result.scalars().all()


@router.get("/stats/summary")
async def sales_summary(db: AsyncSession = Depends(get_db)):
    return await summarize_sales(db)


async def _get_sale(db: AsyncSession, sale_id: SaleId) -> Sale:
    sale = await db.get(Sale, sale_id)
    if sale is None:
        raise ResourceNotFoundError(
            "Sale", str(sale_id), ErrorContext(debug_info={"sale_id": sale_id}),
        )
    return sale


@router.get("/{sale_id}", response_model=SaleResponse)
async def get_sale(sale_id: int, db: AsyncSession = Depends(get_db)):
    return await _get_sale(db, SaleId(sale_id))


@router.put("/{sale_id}/status", response_model=SaleResponse)
async def update_sale_status(
    sale_id: int,
    body: SaleStatusUpdate,
    db: AsyncSession = Depends(get_db),
):
    sale = await _get_sale(db, SaleId(sale_id))
    sale.status = body.status
    if body.notes is not None:
        sale.notes = body.notes
    await db.commit()
    await db.refresh(sale)
    return sale
