"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Integer autoincrement primary keys; ids appear in URLs and external references

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from event_site.models.gift import Gift  # noqa: F401
from event_site.models.order import Order  # noqa: F401
from event_site.models.sale import Sale  # noqa: F401
from event_site.models.site_config import SiteConfig  # noqa: F401
from event_site.models.content_block import ContentBlock  # noqa: F401
from event_site.models.album_photo import AlbumPhoto  # noqa: F401
from event_site.models.story_event import StoryEvent  # noqa: F401
from event_site.models.background_image import BackgroundImage  # noqa: F401
from event_site.models.rsvp import Rsvp  # noqa: F401
from event_site.models.user import User  # noqa: F401
