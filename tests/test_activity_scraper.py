# tests/test_activity_scraper.py

"""Tests for the GetYourGuide activity scraper."""

import unittest
from pathlib import Path
from unittest.mock import MagicMock, patch

from bs4 import BeautifulSoup

from src.affiliate.link_builder import AffiliateLinkBuilder
from src.config.settings import AffiliateConfig
from src.scrapers.activity_scraper import GetYourGuideScraper

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def _soup() -> BeautifulSoup:
    html = (FIXTURES_DIR / "getyourguide_search.html").read_text(encoding="utf-8")
    return BeautifulSoup(html, "lxml")


@patch("src.scrapers.base_scraper.curl_requests.Session")
class TestGetYourGuideScraper(unittest.TestCase):
    """Search URL, card parsing and partner tagging."""

    def test_search_url_encodes_query(
        self, mock_session_cls: MagicMock,
    ) -> None:
        """Spaces in the query become %20."""
        scraper = GetYourGuideScraper(AffiliateLinkBuilder(AffiliateConfig()))
        self.assertEqual(
            scraper.search_url("Eiffel Tower"),
            "https://www.getyourguide.com/s/?q=Eiffel%20Tower&searchSource=3",
        )

    def test_search_parses_cards(self, mock_session_cls: MagicMock) -> None:
        """Cards with activity links become Activity records."""
        scraper = GetYourGuideScraper(AffiliateLinkBuilder(AffiliateConfig()))
        with patch.object(scraper, "_get_page", return_value=_soup()):
            activities = scraper.search("Eiffel Tower")

        self.assertEqual(len(activities), 2)
        first = activities[0]
        self.assertEqual(first.title, "Eiffel Tower Summit Access")
        self.assertEqual(
            first.url,
            "https://www.getyourguide.com/paris-l16/activity/eiffel-tower-summit-t101/",
        )
        self.assertEqual(first.price, 79)
        self.assertEqual(first.rating, 4.6)
        self.assertEqual(first.review_count, "9,870")
        self.assertEqual(first.image_url, "https://cdn.getyourguide.com/img/t101.jpg")
        self.assertEqual(first.search_query, "Eiffel Tower")

        second = activities[1]
        self.assertEqual(second.title, "Seine River Cruise")
        self.assertIsNone(second.price)
        self.assertIsNone(second.rating)

    def test_partner_id_applied(self, mock_session_cls: MagicMock) -> None:
        """Configured partner ids are appended to every link."""
        scraper = GetYourGuideScraper(
            AffiliateLinkBuilder(AffiliateConfig(gyg_partner_id="P1"))
        )
        with patch.object(scraper, "_get_page", return_value=_soup()):
            activities = scraper.search("Eiffel Tower")

        self.assertTrue(all(a.url.endswith("?partner_id=P1") for a in activities))

    def test_limit(self, mock_session_cls: MagicMock) -> None:
        """Only the first cards up to the limit are considered."""
        scraper = GetYourGuideScraper(AffiliateLinkBuilder(AffiliateConfig()))
        with patch.object(scraper, "_get_page", return_value=_soup()):
            self.assertEqual(len(scraper.search("Eiffel Tower", limit=1)), 1)

    def test_fetch_failure(self, mock_session_cls: MagicMock) -> None:
        """An unreachable search page yields no activities."""
        scraper = GetYourGuideScraper(AffiliateLinkBuilder(AffiliateConfig()))
        with patch.object(scraper, "_get_page", return_value=None):
            self.assertEqual(scraper.search("Louvre"), [])

    def test_search_many(self, mock_session_cls: MagicMock) -> None:
        """Each query gets its own result list."""
        scraper = GetYourGuideScraper(AffiliateLinkBuilder(AffiliateConfig()))
        with patch.object(scraper, "search", return_value=[]) as search:
            results = scraper.search_many(["Paris", "Rome"])
        self.assertEqual(set(results), {"Paris", "Rome"})
        self.assertEqual(search.call_count, 2)


if __name__ == "__main__":
    unittest.main()
