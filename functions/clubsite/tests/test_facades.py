import os
import unittest
from datetime import date
from unittest.mock import patch

from clubsite.config import get_settings
from clubsite.content import CollectionStore
from clubsite.facades import ContentRepository, parse_event_date
from clubsite.kv import InMemoryKeyValueStore


def _event(event_id, event_date, **extra):
    return {"id": event_id, "title": event_id, "date": event_date, "visible": True, **extra}


class EventsFacadeTests(unittest.TestCase):
    def setUp(self):
        self.store = CollectionStore(InMemoryKeyValueStore())
        self.repo = ContentRepository(self.store)

    def test_get_upcoming_filters_and_sorts(self):
        self.store.replace_all(
            "events",
            [
                _event("evt-c", "2025-03-22"),
                _event("evt-a", "2025-03-08"),
                _event("evt-b", "2025-03-15"),
            ],
        )
        upcoming = self.repo.events.get_upcoming(today=date(2025, 3, 10))
        self.assertEqual([e["id"] for e in upcoming], ["evt-b", "evt-c"])

    def test_get_upcoming_includes_today_and_skips_hidden(self):
        self.store.replace_all(
            "events",
            [
                _event("evt-today", "2025-03-10"),
                _event("evt-hidden", "2025-03-12", visible=False),
                _event("evt-timed", "2025-03-11T18:30:00"),
                {"id": "evt-bad", "date": "next week"},
            ],
        )
        upcoming = self.repo.events.get_upcoming(today=date(2025, 3, 10))
        self.assertEqual([e["id"] for e in upcoming], ["evt-today", "evt-timed"])

    def test_get_featured_falls_back_to_next_upcoming(self):
        self.store.replace_all(
            "events",
            [_event("evt-late", "2025-04-01"), _event("evt-soon", "2025-03-12")],
        )
        featured = self.repo.events.get_featured(today=date(2025, 3, 10))
        self.assertEqual(featured["id"], "evt-soon")

        self.store.update("events", "evt-late", {"featured": True})
        featured = self.repo.events.get_featured(today=date(2025, 3, 10))
        self.assertEqual(featured["id"], "evt-late")

    def test_create_starts_with_no_registrations(self):
        event = self.repo.events.create({"title": "Round Robin", "registered": 7})
        self.assertEqual(event["registered"], 0)

    def test_get_by_category(self):
        self.store.seed()
        self.assertEqual(
            [e["id"] for e in self.repo.events.get_by_category("clinic")], ["evt-002"]
        )

    def test_parse_event_date(self):
        self.assertEqual(parse_event_date("2025-03-08"), date(2025, 3, 8))
        self.assertIsNone(parse_event_date(""))
        self.assertIsNone(parse_event_date(None))
        self.assertIsNone(parse_event_date("03/08/2025"))


class PublicVariantTests(unittest.TestCase):
    def setUp(self):
        self.store = CollectionStore(InMemoryKeyValueStore())
        self.store.seed()
        self.admin = ContentRepository(self.store)
        self.public = ContentRepository(self.store, public=True)

    def test_hidden_record_excluded_from_public_reads(self):
        self.admin.programs.update("prg-002", {"visible": False})
        public_ids = [p["id"] for p in self.public.programs.get_all()]
        self.assertNotIn("prg-002", public_ids)
        self.assertIsNone(self.public.programs.get_by_id("prg-002"))
        self.assertIn("prg-002", [p["id"] for p in self.admin.programs.get_all()])
        self.assertIsNotNone(self.admin.programs.get_by_id("prg-002"))

    def test_toggle_visibility_round_trip(self):
        self.admin.products.toggle_visibility("prod-001")
        self.assertEqual(self.public.products.get_featured(), [])
        self.admin.products.toggle_visibility("prod-001")
        self.assertEqual([p["id"] for p in self.public.products.get_featured()], ["prod-001"])

    def test_get_by_level(self):
        self.assertEqual(
            [p["id"] for p in self.public.programs.get_by_level("beginner")], ["prg-001"]
        )


class PostsFacadeTests(unittest.TestCase):
    def setUp(self):
        self.store = CollectionStore(InMemoryKeyValueStore())
        self.store.seed()
        self.repo = ContentRepository(self.store, default_author="Marcy Borr")

    def test_get_recent_sorted_newest_first(self):
        self.repo.posts.update("post-001", {"visible": False})
        recent = self.repo.posts.get_recent(2)
        self.assertEqual([p["id"] for p in recent], ["post-002", "post-003"])

    def test_create_fills_default_author(self):
        post = self.repo.posts.create({"title": "Ball machine is back", "type": "news"})
        self.assertEqual(post["author"], "Marcy Borr")
        post = self.repo.posts.create({"title": "Footwork", "author": "Lexi Borr"})
        self.assertEqual(post["author"], "Lexi Borr")
        self.assertEqual(self.repo.posts.get_recent(1)[0]["id"], post["id"])

    def test_create_uses_configured_author(self):
        get_settings.cache_clear()
        self.addCleanup(get_settings.cache_clear)
        with patch.dict(os.environ, {"DEFAULT_POST_AUTHOR": "Coach Lexi"}):
            repo = ContentRepository(CollectionStore(InMemoryKeyValueStore()))
        self.assertEqual(repo.posts.create({"title": "Hi"})["author"], "Coach Lexi")

    def test_get_by_type_and_visible(self):
        self.assertEqual([p["id"] for p in self.repo.posts.get_by_type("tip")], ["post-003"])
        self.repo.posts.toggle_visibility("post-003")
        self.assertEqual(len(self.repo.posts.get_visible()), 2)


class AnnouncementsAndStatsTests(unittest.TestCase):
    def setUp(self):
        self.store = CollectionStore(InMemoryKeyValueStore())
        self.store.seed()
        self.repo = ContentRepository(self.store)

    def test_get_active(self):
        self.repo.announcements.create({"title": "Draft", "visible": False})
        self.assertEqual([a["id"] for a in self.repo.announcements.get_active()], ["ann-001"])

    def test_get_stats(self):
        stats = self.repo.get_stats(today=date(2026, 3, 10))
        self.assertEqual(stats.total_events, 2)
        self.assertEqual(stats.total_programs, 3)
        self.assertEqual(stats.total_posts, 3)
        self.assertEqual(stats.total_products, 3)
        self.assertEqual(stats.total_registrations, 40)
        self.assertEqual(stats.estimated_revenue, 45 * 24 + 35 * 4 + 60 * 12)
        self.assertEqual(stats.as_dict()["totalRegistrations"], 40)


if __name__ == "__main__":
    unittest.main()
