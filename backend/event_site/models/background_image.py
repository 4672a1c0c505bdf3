"""BackgroundImage ORM — slideshow image for the home page.

Invariants:
    - path is the upload reference; filename is the stored file's basename
    - new uploads are appended (position = current row count)
"""

from sqlalchemy import Boolean, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from event_site.db.base import Base, TimestampMixin


class BackgroundImage(TimestampMixin, Base):
    __tablename__ = "background_images"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    filename: Mapped[str] = mapped_column(String(300), nullable=False)
    path: Mapped[str] = mapped_column(String(500), nullable=False)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
