"""AlbumPhoto ORM — one photo inside a named gallery.

Invariants:
    - position orders photos within a gallery (ascending)
    - inactive photos stay stored but are filtered by ?active=true
"""

from sqlalchemy import Boolean, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from event_site.db.base import Base, TimestampMixin


class AlbumPhoto(TimestampMixin, Base):
    __tablename__ = "album_photos"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    gallery: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    image: Mapped[str] = mapped_column(String(500), nullable=False)
    title: Mapped[str] = mapped_column(String(200), nullable=False, default="")
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
