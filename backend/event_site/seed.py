"""Seed Script — idempotent initial data for a fresh database.

Invariants:
    - Every step checks before inserting: re-running the seed adds nothing
    - The admin password is stored only as a bcrypt hash
    - Sample gifts and album placeholders are inserted only into empty tables

Design Decisions:
    - Runs outside FastAPI (python -m event_site.seed) with its own session
      factory from db/session.py
    - Site config goes through ensure_single_config so the seed never creates
      a second config row
"""

import asyncio
import logging
from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from event_site.config import Settings, get_settings
from event_site.db.session import create_session_factory
from event_site.infrastructure.credentials import hash_password
from event_site.infrastructure.observability import setup_logging
from event_site.models.album_photo import AlbumPhoto
from event_site.models.gift import Gift
from event_site.models.user import User
from event_site.services.content import get_section
from event_site.services.site_config import ensure_single_config

logger = logging.getLogger(__name__)

ADMIN_NAME = "Administrador"
CONTENT_SECTIONS = ("home", "historia", "informacoes")
ALBUM_GALLERIES = ("preWedding", "momentos", "padrinhos", "festa")
PHOTOS_PER_GALLERY = 4
PLACEHOLDER_IMAGE = "/images/placeholder.jpg"

SAMPLE_GIFTS = (
    ("Jogo de Panelas", "Conjunto completo de panelas antiaderentes", "450.00"),
    ("Liquidificador", "Liquidificador de alta potência", "250.00"),
    ("Jogo de Toalhas", "Kit com 4 toalhas de banho e 4 de rosto", "180.00"),
    ("Cafeteira", "Cafeteira elétrica programável", "320.00"),
    ("Jogo de Talheres", "Kit completo com 24 peças", "280.00"),
    ("Aspirador de Pó", "Aspirador de pó sem fio", "550.00"),
)


async def seed_admin(db: AsyncSession, settings: Settings) -> bool:
    existing = await db.execute(
        select(User).where(User.email == settings.seed_admin_email),
    )
    if existing.scalar_one_or_none() is not None:
        return False
    db.add(User(
        name=ADMIN_NAME,
        email=settings.seed_admin_email,
        password_hash=hash_password(settings.seed_admin_password),
    ))
    await db.commit()
    logger.info(f"Created admin user {settings.seed_admin_email}")
    return True


async def seed_gifts(db: AsyncSession) -> int:
    count = (await db.execute(select(func.count(Gift.id)))).scalar_one()
    if count:
        return 0
    for index, (name, description, price) in enumerate(SAMPLE_GIFTS, start=1):
        db.add(Gift(
            name=name,
            description=description,
            price=Decimal(price),
            image=f"/images/presente{index}.jpg",
            stock_count=1,
        ))
    await db.commit()
    logger.info(f"Created {len(SAMPLE_GIFTS)} sample gifts")
    return len(SAMPLE_GIFTS)


async def seed_album(db: AsyncSession) -> int:
    count = (await db.execute(select(func.count(AlbumPhoto.id)))).scalar_one()
    if count:
        return 0
    created = 0
    for gallery in ALBUM_GALLERIES:
        for number in range(1, PHOTOS_PER_GALLERY + 1):
            db.add(AlbumPhoto(
                gallery=gallery,
                image=PLACEHOLDER_IMAGE,
                title=f"Foto {number} da galeria {gallery}",
                position=number - 1,
            ))
            created += 1
    await db.commit()
    logger.info(f"Created {created} album placeholder photos")
    return created


async def run_seed(db: AsyncSession, settings: Settings) -> None:
    await seed_admin(db, settings)
    await ensure_single_config(db)
    for section in CONTENT_SECTIONS:
        await get_section(db, section)
    await seed_gifts(db)
    await seed_album(db)


async def main() -> None:
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    session_factory = create_session_factory(settings.database_url)
    async with session_factory() as db:
        await run_seed(db, settings)
    await session_factory.kw["bind"].dispose()
    logger.info("Seed completed")


if __name__ == "__main__":
    asyncio.run(main())
