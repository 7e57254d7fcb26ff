# src/scrapers/activity_scraper.py

"""Scraper for GetYourGuide activity search results."""

from bs4 import Tag

from src.affiliate.link_builder import AffiliateLinkBuilder, encode_query
from src.models.activity import Activity
from src.scrapers.base_scraper import BaseScraper
from src.scrapers.extractors import extract_price, parse_activity_rating


class GetYourGuideScraper(BaseScraper):
    """Search GetYourGuide and return affiliate-ready activity links."""

    BASE_URL = "https://www.getyourguide.com"

    def __init__(self, link_builder: AffiliateLinkBuilder) -> None:
        super().__init__("getyourguide")
        self.link_builder = link_builder

    def _get_homepage(self) -> str:
        """Return the GetYourGuide homepage URL."""
        return f"{self.BASE_URL}/"

    def search_url(self, query: str) -> str:
        params = {"q": query, "searchSource": 3}
        return f"{self.BASE_URL}/s/?{encode_query(params)}"

    def _parse_card(self, card: Tag, query: str) -> Activity | None:
        """Parse one activity card; cards without an activity link are skipped."""
        link_el = card.select_one(self.selectors["link"])
        if not link_el or not link_el.get("href"):
            return None
        href = str(link_el["href"])
        full_url = href if href.startswith("http") else f"{self.BASE_URL}{href}"

        title_el = card.select_one(self.selectors["title"])
        title = title_el.get_text(strip=True) if title_el else "Activity"

        price_el = card.select_one(self.selectors["price"])
        price = extract_price(price_el.get_text(" ", strip=True)) if price_el else None

        rating: float | None = None
        reviews: str | None = None
        rating_el = card.select_one(self.selectors["rating"])
        if rating_el:
            rating, reviews = parse_activity_rating(
                rating_el.get_text(" ", strip=True)
            )

        img_el = card.select_one(self.selectors["image"])
        image_url = str(img_el["src"]) if img_el and img_el.get("src") else None

        return Activity(
            title=title,
            url=self.link_builder.tag_activity_url(full_url),
            search_query=query,
            price=price,
            rating=rating,
            review_count=reviews,
            image_url=image_url,
        )

    def search(self, query: str, limit: int | None = None) -> list[Activity]:
        """Search GetYourGuide for activities matching the query."""
        limit = limit or self.settings.ACTIVITY_LIMIT
        activities: list[Activity] = []
        try:
            self.logger.info("[gyg] Searching for '%s'", query)
            soup = self._get_page(self.search_url(query))
            if not soup:
                return []
            cards = soup.select(self.selectors["activity_card"])
            self.logger.info("[gyg] Found %d activity cards", len(cards))
            for card in cards[:limit]:
                try:
                    activity = self._parse_card(card, query)
                except Exception as e:
                    self.logger.debug("[gyg] Card skipped: %s", e)
                    continue
                if activity:
                    activities.append(activity)
        except Exception as e:
            self.logger.error(
                "[gyg] Search failed: %s", e, exc_info=True
            )
        return activities

    def search_many(
        self, queries: list[str], limit: int = 5,
    ) -> dict[str, list[Activity]]:
        """Build a lookup table of activities for several destinations."""
        results: dict[str, list[Activity]] = {}
        for query in queries:
            results[query] = self.search(query, limit)
            self._wait(self.settings.ACTIVITY_DELAY)
        return results
