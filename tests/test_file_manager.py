# tests/test_file_manager.py

"""Tests for the DealStore storage module."""

import json
import shutil
import tempfile
import unittest
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from src.models.post import Post
from src.storage.file_manager import DealStore
from tests.helpers import SCRAPED_AT, make_flight, make_hotel

NOW = datetime(2026, 10, 18, 6, 30, tzinfo=timezone.utc)


class TestDealStore(unittest.TestCase):
    """Tests for deal file writes and reads."""

    def setUp(self) -> None:
        """Set up a temp directory for output."""
        self.tmp_dir = Path(tempfile.mkdtemp())
        self.addCleanup(shutil.rmtree, self.tmp_dir, ignore_errors=True)
        self.store = DealStore(self.tmp_dir)

    def _read(self, name: str) -> dict[str, Any]:
        with open(self.tmp_dir / name, encoding="utf-8") as f:
            data: dict[str, Any] = json.load(f)
        return data

    def test_save_flights_envelope(self) -> None:
        """flights.json holds generated, count and deals."""
        path = self.store.save_flights([make_flight()], NOW)

        self.assertEqual(path.name, "flights.json")
        data = self._read("flights.json")
        self.assertEqual(data["generated"], "2026-10-18T06:30:00+00:00")
        self.assertEqual(data["count"], 1)
        self.assertEqual(data["deals"][0]["destination"], "PAR")
        self.assertEqual(data["deals"][0]["percent_off"], 25)

    def test_save_combined_summary(self) -> None:
        """deals.json summarises totals and the best of each kind."""
        flights = [make_flight(percent_off=40), make_flight(price=700)]
        self.store.save_combined(flights, [], NOW)

        data = self._read("deals.json")
        summary = data["summary"]
        self.assertEqual(summary["total_flight_deals"], 2)
        self.assertEqual(summary["total_hotel_deals"], 0)
        self.assertEqual(summary["best_flight_deal"]["percent_off"], 40)
        self.assertIsNone(summary["best_hotel_deal"])
        self.assertEqual(data["hotels"], [])

    def test_save_overwrites(self) -> None:
        """A second save replaces the earlier file."""
        self.store.save_hotels([make_hotel(), make_hotel(price=90)], NOW)
        self.store.save_hotels([], NOW)
        self.assertEqual(self._read("hotels.json")["count"], 0)

    def test_load_hotels_restores_deals(self) -> None:
        """Saved hotel deals load back intact."""
        deal = make_hotel()
        self.store.save_hotels([deal], NOW)
        self.assertEqual(self.store.load_hotels(), [deal])

    def test_load_missing_file(self) -> None:
        """No file on disk means no previous deals."""
        self.assertEqual(self.store.load_flights(), [])
        self.assertEqual(self.store.load_hotels(), [])

    def test_load_corrupt_file(self) -> None:
        """Unparseable JSON is treated as empty."""
        (self.tmp_dir / "hotels.json").write_text("{not json", encoding="utf-8")
        self.assertEqual(self.store.load_hotels(), [])

    def test_load_skips_malformed_entries(self) -> None:
        """Entries missing required fields are dropped individually."""
        good = make_hotel().to_dict()
        payload = {"generated": "", "count": 2, "deals": [{"hotel_name": "X"}, good]}
        (self.tmp_dir / "hotels.json").write_text(
            json.dumps(payload), encoding="utf-8"
        )
        loaded = self.store.load_hotels()
        self.assertEqual(len(loaded), 1)
        self.assertEqual(loaded[0].hotel_name, "Hotel Lutetia")

    def test_load_recent_hotels_window(self) -> None:
        """Deals older than seven days are not carried forward."""
        fresh = make_hotel(hotel_name="Fresh", scraped_at=SCRAPED_AT)
        edge = make_hotel(
            hotel_name="Six Days",
            scraped_at=datetime(2026, 10, 12, 7, 0, tzinfo=timezone.utc),
        )
        stale = make_hotel(
            hotel_name="Stale",
            scraped_at=datetime(2026, 10, 10, tzinfo=timezone.utc),
        )
        self.store.save_hotels([fresh, edge, stale], NOW)

        recent = self.store.load_recent_hotels(NOW)
        self.assertEqual(
            [d.hotel_name for d in recent], ["Fresh", "Six Days"]
        )


class TestPostAndActivityFiles(unittest.TestCase):
    """Tests for post and activity exports."""

    def setUp(self) -> None:
        """Set up a temp directory for output."""
        self.tmp_dir = Path(tempfile.mkdtemp())
        self.addCleanup(shutil.rmtree, self.tmp_dir, ignore_errors=True)
        self.store = DealStore(self.tmp_dir)

    def test_save_post_writes_json_and_html(self) -> None:
        """Both the post record and raw content are written."""
        post = Post(
            title="T", slug="s", content="<p>hi</p>", excerpt="e",
            categories=["Flight Deals"],
        )
        json_path, html_path = self.store.save_post(post, "flight-deals")

        self.assertEqual(json_path, self.tmp_dir / "posts" / "flight-deals-post.json")
        self.assertEqual(html_path.read_text(encoding="utf-8"), "<p>hi</p>")
        with open(json_path, encoding="utf-8") as f:
            self.assertEqual(json.load(f)["categories"], ["Flight Deals"])

    def test_save_activities_name_and_extension(self) -> None:
        """Search terms become a slugged file name."""
        path = self.store.save_activities("Eiffel Tower", "[]", "json")
        self.assertEqual(path.name, "gyg-eiffel-tower.json")

        path = self.store.save_activities("Louvre", "1. Louvre", "markdown")
        self.assertEqual(path.name, "gyg-louvre.txt")
        self.assertEqual(path.read_text(encoding="utf-8"), "1. Louvre")

    def test_save_activities_path_separators_slugged(self) -> None:
        """Slashes and punctuation never leave the output folder."""
        path = self.store.save_activities("AC/DC tour", "x", "markdown")
        self.assertEqual(path, self.tmp_dir / "gyg-ac-dc-tour.txt")
        self.assertTrue(path.is_file())

        path = self.store.save_activities("../etc", "x", "json")
        self.assertEqual(path, self.tmp_dir / "gyg-etc.json")

    def test_save_activities_blank_slug(self) -> None:
        """A term with no word characters still gets a file name."""
        path = self.store.save_activities("///", "x", "simple")
        self.assertEqual(path.name, "gyg-activities.txt")


if __name__ == "__main__":
    unittest.main()
