"""Sales Statistics — aggregates over paid sales for the admin dashboard.

Invariants:
    - Only sales with status "paid" are counted
    - Top products are ordered by sale count, then revenue (descending)
"""

from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from event_site.core.domain_types import SaleStatus
from event_site.models.gift import Gift
from event_site.models.sale import Sale


async def summarize_sales(db: AsyncSession) -> dict:
    paid = Sale.status == SaleStatus.PAID.value

    total_sales = (
        await db.execute(select(func.count(Sale.id)).where(paid))
    ).scalar_one()
    total_amount = (
        await db.execute(select(func.sum(Sale.amount)).where(paid))
    ).scalar_one()

    by_method = await db.execute(
        select(Sale.payment_method, func.count(Sale.id), func.sum(Sale.amount))
        .where(paid)
        .group_by(Sale.payment_method),
    )
    top_products = await db.execute(
        select(
            Sale.gift_id, Gift.name, Gift.description,
            func.count(Sale.id).label("sales_count"),
            func.sum(Sale.amount).label("sales_amount"),
        )
        .join(Gift, Gift.id == Sale.gift_id, isouter=True)
        .where(paid)
        .group_by(Sale.gift_id, Gift.name, Gift.description)
        .order_by(
            func.count(Sale.id).desc(), func.sum(Sale.amount).desc(),
        ),
    )

    return {
        "totalSales": total_sales,
        "totalAmount": Decimal(total_amount or 0),
        "salesByMethod": [
            {"paymentMethod": method, "count": count, "amount": Decimal(amount or 0)}
            for method, count, amount in by_method.all()
        ],
        "topProducts": [
            {
                "giftId": gift_id,
                "name": name or "Product not found",
                "description": description or "",
                "count": count,
                "amount": Decimal(amount or 0),
            }
            for gift_id, name, description, count, amount in top_products.all()
        ],
    }
