"""
Typed per-content facades over a collection store.

A facade built with ``public=True`` hides records whose ``visible`` field
is ``False``; that is the variant the public site reads through.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Optional

from clubsite.config import get_settings
from clubsite.content import ContentStore, is_visible

logger = logging.getLogger(__name__)


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


def parse_event_date(value) -> Optional[date]:
    """Parse the calendar date of an event, ignoring any time-of-day part."""
    if not value or not isinstance(value, str):
        return None
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        return None


class CollectionFacade:
    collection: str = ""

    def __init__(self, store: ContentStore, *, public: bool = False):
        self.store = store
        self.public = public

    def get_all(self) -> list[dict]:
        items = self.store.get_all(self.collection)
        if self.public:
            return [item for item in items if is_visible(item)]
        return items

    def get_by_id(self, record_id: str) -> Optional[dict]:
        record = self.store.get_by_id(self.collection, record_id)
        if record is not None and self.public and not is_visible(record):
            return None
        return record

    def create(self, data: dict) -> dict:
        return self.store.create(self.collection, data)

    def update(self, record_id: str, data: dict) -> Optional[dict]:
        return self.store.update(self.collection, record_id, data)

    def delete(self, record_id: str) -> bool:
        return self.store.delete(self.collection, record_id)

    def toggle_visibility(self, record_id: str) -> Optional[dict]:
        return self.store.toggle_visibility(self.collection, record_id)

    def get_visible(self) -> list[dict]:
        return [item for item in self.get_all() if is_visible(item)]


class EventsFacade(CollectionFacade):
    collection = "events"

    def create(self, data: dict) -> dict:
        return super().create({**data, "registered": 0})

    def get_upcoming(self, today: Optional[date] = None) -> list[dict]:
        """Visible events dated today or later, soonest first."""
        today = today or utc_today()
        upcoming = []
        for event in self.get_visible():
            event_date = parse_event_date(event.get("date"))
            if event_date is None:
                logger.debug("Skipping event %s with unparseable date", event.get("id"))
                continue
            if event_date >= today:
                upcoming.append((event_date, event))
        upcoming.sort(key=lambda pair: pair[0])
        return [event for _, event in upcoming]

    def get_featured(self, today: Optional[date] = None) -> Optional[dict]:
        for event in self.get_visible():
            if event.get("featured"):
                return event
        upcoming = self.get_upcoming(today)
        return upcoming[0] if upcoming else None

    def get_by_category(self, category: str) -> list[dict]:
        return [e for e in self.get_all() if e.get("category") == category]


class ProgramsFacade(CollectionFacade):
    collection = "programs"

    def get_by_level(self, level: str) -> list[dict]:
        return [p for p in self.get_all() if p.get("level") == level]


class PostsFacade(CollectionFacade):
    collection = "posts"

    def __init__(
        self,
        store: ContentStore,
        *,
        public: bool = False,
        default_author: Optional[str] = None,
    ):
        super().__init__(store, public=public)
        self.default_author = default_author

    def create(self, data: dict) -> dict:
        if self.default_author and not data.get("author"):
            data = {**data, "author": self.default_author}
        return super().create(data)

    def get_by_type(self, post_type: str) -> list[dict]:
        return [p for p in self.get_all() if p.get("type") == post_type]

    def get_recent(self, count: int = 3) -> list[dict]:
        posts = sorted(
            self.get_visible(), key=lambda p: p.get("createdAt") or "", reverse=True
        )
        return posts[:count]


class AnnouncementsFacade(CollectionFacade):
    collection = "announcements"

    def get_active(self) -> list[dict]:
        return self.get_visible()


class ProductsFacade(CollectionFacade):
    collection = "products"

    def get_featured(self) -> list[dict]:
        return [p for p in self.get_visible() if p.get("featured")]

    def get_by_category(self, category: str) -> list[dict]:
        return [p for p in self.get_all() if p.get("category") == category]


@dataclass
class DashboardStats:
    total_events: int
    total_programs: int
    total_posts: int
    total_products: int
    total_registrations: int
    estimated_revenue: float

    def as_dict(self) -> dict:
        return {
            "totalEvents": self.total_events,
            "totalPrograms": self.total_programs,
            "totalPosts": self.total_posts,
            "totalProducts": self.total_products,
            "totalRegistrations": self.total_registrations,
            "estimatedRevenue": self.estimated_revenue,
        }


class ContentRepository:
    """
    Bundle of the five typed facades over one store. Posts created without
    an author get ``default_author``, or the configured default when omitted.
    """

    def __init__(
        self,
        store: ContentStore,
        *,
        public: bool = False,
        default_author: Optional[str] = None,
    ):
        if default_author is None:
            default_author = get_settings().default_post_author
        self.store = store
        self.public = public
        self.events = EventsFacade(store, public=public)
        self.programs = ProgramsFacade(store, public=public)
        self.posts = PostsFacade(store, public=public, default_author=default_author)
        self.announcements = AnnouncementsFacade(store, public=public)
        self.products = ProductsFacade(store, public=public)

    def get_stats(self, today: Optional[date] = None) -> DashboardStats:
        events = self.events.get_all()
        return DashboardStats(
            total_events=len(self.events.get_upcoming(today)),
            total_programs=len(self.programs.get_visible()),
            total_posts=len(self.posts.get_visible()),
            total_products=len(self.products.get_visible()),
            total_registrations=sum(e.get("registered") or 0 for e in events),
            estimated_revenue=sum(
                (e.get("price") or 0) * (e.get("registered") or 0) for e in events
            ),
        )
