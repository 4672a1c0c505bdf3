"""ContentBlock ORM — editable text per site section.

Invariants:
    - section is unique
    - Structured sections store a JSON object string in content
"""

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from event_site.db.base import Base, TimestampMixin


class ContentBlock(TimestampMixin, Base):
    __tablename__ = "content_blocks"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    section: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")
