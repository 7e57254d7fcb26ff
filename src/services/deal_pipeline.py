# src/services/deal_pipeline.py

"""Runs the scrape → filter → save → render → publish steps in order."""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from pathlib import Path
from typing import Any

from src.affiliate.link_builder import AffiliateLinkBuilder
from src.config.settings import AffiliateConfig, WordPressConfig
from src.models.deal import FlightDeal, HotelDeal
from src.models.post import Post
from src.scrapers.flight_scraper import GoogleFlightsScraper
from src.scrapers.hotel_scraper import GoogleHotelsScraper
from src.services.post_renderer import render_flight_post, render_hotel_post
from src.services.wordpress_publisher import PublishError, WordPressPublisher
from src.storage.file_manager import DealStore

logger = logging.getLogger("travel_deals.pipeline")


@dataclass
class RunResult:
    """Outcome of a combined flight + hotel scrape."""

    flights: list[FlightDeal] = field(
        default_factory=lambda: list[FlightDeal]()
    )
    hotels: list[HotelDeal] = field(
        default_factory=lambda: list[HotelDeal]()
    )
    combined_path: Path | None = None
    errors: list[str] = field(
        default_factory=lambda: list[str]()
    )


class DealPipeline:
    """Coordinates scrapers, the deal store, rendering and publishing.

    Every step runs sequentially. A failing scraper or publish call is
    logged and only empties or skips its own side of the run.
    """

    def __init__(
        self,
        affiliate: AffiliateConfig,
        wordpress: WordPressConfig,
        store: DealStore | None = None,
        flight_scraper: GoogleFlightsScraper | None = None,
        hotel_scraper: GoogleHotelsScraper | None = None,
        publisher: WordPressPublisher | None = None,
    ) -> None:
        self.affiliate = affiliate
        self.wordpress = wordpress
        self.store = store or DealStore()
        self.link_builder = AffiliateLinkBuilder(affiliate)
        self._flight_scraper = flight_scraper
        self._hotel_scraper = hotel_scraper
        self._publisher = publisher

    # ── Lazily built collaborators ───────────────────────

    @property
    def flight_scraper(self) -> GoogleFlightsScraper:
        if self._flight_scraper is None:
            self._flight_scraper = GoogleFlightsScraper(self.link_builder)
        return self._flight_scraper

    @property
    def hotel_scraper(self) -> GoogleHotelsScraper:
        if self._hotel_scraper is None:
            self._hotel_scraper = GoogleHotelsScraper(self.link_builder)
        return self._hotel_scraper

    @property
    def publisher(self) -> WordPressPublisher:
        if self._publisher is None:
            self._publisher = WordPressPublisher(self.wordpress)
        return self._publisher

    # ── Scraping ─────────────────────────────────────────

    def run_flights(
        self, today: date, now: datetime, use_rotation: bool = True,
    ) -> list[FlightDeal]:
        """Scrape flight deals and overwrite ``flights.json``."""
        deals = self.flight_scraper.scrape(today, use_rotation)
        self.store.save_flights(deals, now)
        return deals

    def run_hotels(self, today: date, now: datetime) -> list[HotelDeal]:
        """Scrape hotel deals merged with the last week's and save them."""
        previous = self.store.load_recent_hotels(now)
        deals = self.hotel_scraper.scrape(today, previous)
        self.store.save_hotels(deals, now)
        return deals

    def run_all(
        self, today: date, now: datetime, use_rotation: bool = True,
    ) -> RunResult:
        """Run both scrapers, then write the combined ``deals.json``."""
        result = RunResult()

        try:
            result.flights = self.run_flights(today, now, use_rotation)
        except Exception as exc:
            logger.error("Flight scraper failed: %s", exc, exc_info=True)
            result.errors.append(f"flights: {exc}")

        try:
            result.hotels = self.run_hotels(today, now)
        except Exception as exc:
            logger.error("Hotel scraper failed: %s", exc, exc_info=True)
            result.errors.append(f"hotels: {exc}")

        result.combined_path = self.store.save_combined(
            result.flights, result.hotels, now
        )
        return result

    # ── Posts ────────────────────────────────────────────

    def generate_posts(self, day: date) -> tuple[Post, Post]:
        """Render both posts from the saved deals and write them locally."""
        flight_post = render_flight_post(self.store.load_flights(), day)
        hotel_post = render_hotel_post(self.store.load_hotels(), day)
        self.store.save_post(flight_post, "flight-deals")
        self.store.save_post(hotel_post, "hotel-deals")
        return flight_post, hotel_post

    def _publish_one(
        self, post: Post, category_id: int, label: str,
    ) -> dict[str, Any] | None:
        logger.info("Publishing %s post: %s", label, post.title)
        try:
            return self.publisher.publish(post, category_id)
        except PublishError as exc:
            logger.error("Failed to publish %s deals: %s", label, exc)
        except Exception as exc:
            logger.error(
                "Failed to publish %s deals: %s", label, exc, exc_info=True
            )
        return None

    def generate_and_publish(
        self, day: date,
    ) -> dict[str, dict[str, Any] | None]:
        """Publish each post type that has deals; failures stay isolated."""
        results: dict[str, dict[str, Any] | None] = {
            "flights": None,
            "hotels": None,
        }

        flight_deals = self.store.load_flights()
        logger.info("Loaded %d flight deals", len(flight_deals))
        if flight_deals:
            results["flights"] = self._publish_one(
                render_flight_post(flight_deals, day),
                self.wordpress.flight_category_id,
                "flight",
            )

        hotel_deals = self.store.load_hotels()
        logger.info("Loaded %d hotel deals", len(hotel_deals))
        if hotel_deals:
            results["hotels"] = self._publish_one(
                render_hotel_post(hotel_deals, day),
                self.wordpress.hotel_category_id,
                "hotel",
            )

        return results
