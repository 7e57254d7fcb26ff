# tests/test_runner.py

"""Tests for the scrape, posts and links command runners."""

import shutil
import tempfile
import unittest
from pathlib import Path
from unittest.mock import ANY, MagicMock, patch

from src.cli import runner
from src.models.activity import Activity
from src.models.post import Post
from src.services.deal_pipeline import RunResult
from src.storage.file_manager import DealStore
from tests.helpers import make_flight, make_hotel


class TestRunScrape(unittest.TestCase):
    """run_scrape dispatches to the pipeline and maps failures to exit 1."""

    def setUp(self) -> None:
        """Swap the environment-built pipeline for a mock."""
        self.pipeline = MagicMock()
        patcher = patch.object(
            runner, "build_pipeline", return_value=self.pipeline
        )
        patcher.start()
        self.addCleanup(patcher.stop)

    def test_all_prints_summary(self) -> None:
        """The combined run returns 0 even when one side reported errors."""
        self.pipeline.run_all.return_value = RunResult(
            flights=[make_flight()],
            hotels=[make_hotel()],
            combined_path=Path("output/deals.json"),
            errors=["hotels: timed out"],
        )
        self.assertEqual(runner.run_scrape("all"), 0)
        self.pipeline.run_all.assert_called_once_with(ANY, ANY, True)

    def test_all_with_no_deals(self) -> None:
        """An empty run skips the best-deal lines."""
        self.pipeline.run_all.return_value = RunResult()
        self.assertEqual(runner.run_scrape("all", all_routes=True), 0)
        self.pipeline.run_all.assert_called_once_with(ANY, ANY, False)

    def test_flights_only(self) -> None:
        """--all-routes turns the weekday rotation off."""
        self.pipeline.run_flights.return_value = [make_flight()]
        self.assertEqual(runner.run_scrape("flights", all_routes=True), 0)
        self.pipeline.run_flights.assert_called_once_with(ANY, ANY, False)
        self.pipeline.run_hotels.assert_not_called()

    def test_hotels_only(self) -> None:
        """The hotel target never touches the flight scraper."""
        self.pipeline.run_hotels.return_value = [make_hotel()]
        self.assertEqual(runner.run_scrape("hotels"), 0)
        self.pipeline.run_hotels.assert_called_once()
        self.pipeline.run_flights.assert_not_called()

    def test_failure_returns_one(self) -> None:
        """An exception escaping the pipeline is logged as critical."""
        self.pipeline.run_all.side_effect = RuntimeError("store unwritable")
        with self.assertLogs("travel_deals.cli", level="CRITICAL") as logs:
            self.assertEqual(runner.run_scrape("all"), 1)
        self.assertIn("store unwritable", logs.output[0])

    def test_flights_failure_returns_one(self) -> None:
        """Single-target runs share the same failure handling."""
        self.pipeline.run_flights.side_effect = OSError("disk full")
        with self.assertLogs("travel_deals.cli", level="CRITICAL"):
            self.assertEqual(runner.run_scrape("flights"), 1)


class TestRunPosts(unittest.TestCase):
    """run_posts renders locally or publishes."""

    def setUp(self) -> None:
        """Swap the environment-built pipeline for a mock."""
        self.pipeline = MagicMock()
        self.pipeline.store.output_dir = Path("output")
        patcher = patch.object(
            runner, "build_pipeline", return_value=self.pipeline
        )
        patcher.start()
        self.addCleanup(patcher.stop)

    def test_generate_local_posts(self) -> None:
        """Without --publish only the local files are written."""
        post = Post(title="T", slug="s", content="<p/>", excerpt="e")
        self.pipeline.generate_posts.return_value = (post, post)
        self.assertEqual(runner.run_posts(), 0)
        self.pipeline.generate_posts.assert_called_once()
        self.pipeline.generate_and_publish.assert_not_called()

    def test_publish(self) -> None:
        """--publish goes through WordPress; a skipped post is fine."""
        self.pipeline.generate_and_publish.return_value = {
            "flights": {"id": 7, "link": "https://example.com/?p=7"},
            "hotels": None,
        }
        self.assertEqual(runner.run_posts(publish=True), 0)
        self.pipeline.generate_and_publish.assert_called_once()
        self.pipeline.generate_posts.assert_not_called()

    def test_failure_returns_one(self) -> None:
        """Rendering errors map to exit code 1."""
        self.pipeline.generate_posts.side_effect = OSError("disk full")
        with self.assertLogs("travel_deals.cli", level="CRITICAL"):
            self.assertEqual(runner.run_posts(), 1)

    def test_publish_failure_returns_one(self) -> None:
        """Publishing errors map to exit code 1."""
        self.pipeline.generate_and_publish.side_effect = RuntimeError("boom")
        with self.assertLogs("travel_deals.cli", level="CRITICAL"):
            self.assertEqual(runner.run_posts(publish=True), 1)


class TestRunLinks(unittest.TestCase):
    """run_links searches every term and saves formatted output."""

    def setUp(self) -> None:
        """Mock the scraper and store files in a temp directory."""
        self.tmp_dir = Path(tempfile.mkdtemp())
        self.addCleanup(shutil.rmtree, self.tmp_dir, ignore_errors=True)

        scraper_patcher = patch.object(runner, "GetYourGuideScraper")
        self.scraper = scraper_patcher.start().return_value
        self.addCleanup(scraper_patcher.stop)

        store_patcher = patch.object(
            runner, "DealStore", return_value=DealStore(self.tmp_dir)
        )
        store_patcher.start()
        self.addCleanup(store_patcher.stop)

    @staticmethod
    def _activity(query: str) -> Activity:
        return Activity(
            title="Skip-the-line tour",
            url="https://www.getyourguide.com/activity/t1/",
            search_query=query,
            price=45,
        )

    def test_no_terms_prints_usage(self) -> None:
        """An empty term list shows usage and exits cleanly."""
        self.assertEqual(runner.run_links([], None), 0)
        self.scraper.search_many.assert_not_called()

    def test_list_overrides_terms(self) -> None:
        """Comma-separated terms replace positional ones, in order."""
        self.scraper.search_many.return_value = {"Paris": [], "Rome": []}
        self.assertEqual(runner.run_links(["x"], " Paris , Rome ,"), 0)
        self.scraper.search_many.assert_called_once_with(
            ["Paris", "Rome"], runner.Settings.ACTIVITY_LIMIT
        )
        self.assertEqual(list(self.tmp_dir.iterdir()), [])

    def test_results_saved_per_term(self) -> None:
        """Terms with results get their own file."""
        self.scraper.search_many.return_value = {
            "Louvre": [self._activity("Louvre")],
            "Rome": [],
        }
        self.assertEqual(runner.run_links(["Louvre", "Rome"], None), 0)
        saved = self.tmp_dir / "gyg-louvre.txt"
        self.assertIn("Skip-the-line tour", saved.read_text(encoding="utf-8"))
        self.assertFalse((self.tmp_dir / "gyg-rome.txt").exists())

    def test_term_with_slash_saved(self) -> None:
        """A '/' in the search term does not break the file path."""
        self.scraper.search_many.return_value = {
            "AC/DC tour": [self._activity("AC/DC tour")],
        }
        self.assertEqual(runner.run_links(["AC/DC tour"], None, "json"), 0)
        self.assertTrue((self.tmp_dir / "gyg-ac-dc-tour.json").is_file())

    def test_search_failure_returns_one(self) -> None:
        """An unexpected error is logged as critical instead of raised."""
        self.scraper.search_many.side_effect = RuntimeError("blocked")
        with self.assertLogs("travel_deals.cli", level="CRITICAL"):
            self.assertEqual(runner.run_links(["Paris"], None), 1)

    def test_save_failure_returns_one(self) -> None:
        """A file write error maps to exit code 1."""
        self.scraper.search_many.return_value = {
            "Paris": [self._activity("Paris")],
        }
        with patch.object(
            DealStore, "save_activities", side_effect=OSError("read-only")
        ), self.assertLogs("travel_deals.cli", level="CRITICAL"):
            self.assertEqual(runner.run_links(["Paris"], None), 1)


if __name__ == "__main__":
    unittest.main()
