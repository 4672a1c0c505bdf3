"""Content Service — section lookup with lazy, explicit legacy migration.

Invariants:
    - get_section never returns "not found": missing sections are created with defaults
    - Structured sections holding legacy text are migrated once, persisted, and logged
    - Re-reading a migrated section performs no write

Design Decisions:
    - Migration is a pure function (core/content_migration.py); this module only
      decides when to persist it
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from event_site.core.content_migration import (
    default_content, migrate_legacy_info, needs_migration, parse_stored_content,
)
from event_site.models.content_block import ContentBlock

logger = logging.getLogger(__name__)


async def _find(db: AsyncSession, section: str) -> ContentBlock | None:
    result = await db.execute(
        select(ContentBlock).where(ContentBlock.section == section),
    )
    return result.scalar_one_or_none()


async def get_section(db: AsyncSession, section: str) -> ContentBlock:
    block = await _find(db, section)
    if block is None:
        block = ContentBlock(section=section, content=default_content(section))
        db.add(block)
        await db.commit()
        await db.refresh(block)
        logger.info(f"Created default content for section '{section}'")
        return block

    if needs_migration(section, block.content):
        migrated = migrate_legacy_info(parse_stored_content(block.content))
        block.content = migrated.serialize()
        await db.commit()
        await db.refresh(block)
        logger.info(f"Migrated legacy content for section '{section}' to structured fields")
    return block


async def upsert_section(db: AsyncSession, section: str, content: str) -> ContentBlock:
    block = await _find(db, section)
    if block is None:
        block = ContentBlock(section=section, content=content)
        db.add(block)
    else:
        block.content = content
    await db.commit()
    await db.refresh(block)
    return block
