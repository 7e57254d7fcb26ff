# src/scrapers/hotel_scraper.py

"""Scraper for Google Hotels listings and the Kayak deals page."""

from datetime import date, datetime, timedelta, timezone
from urllib.parse import quote

from bs4 import Tag
from dateutil.relativedelta import relativedelta

from src.affiliate.link_builder import AffiliateLinkBuilder
from src.config.destinations import (
    DAY_NAMES,
    HotelDestination,
    day_index,
    todays_hotel_destinations,
)
from src.filters.deal_ranker import select_top_deals
from src.filters.discount_filter import DiscountFilter
from src.models.deal import HotelDeal, percent_off
from src.scrapers.base_scraper import BaseScraper
from src.scrapers.extractors import (
    ExtractionError,
    parse_discount_card,
    parse_hotel_card,
)

_WEEKEND = (0, 6)


class GoogleHotelsScraper(BaseScraper):
    """Find discounted hotels in today's rotation of destinations.

    Google Hotels cards show "Usually $X" next to the current rate when a
    property is discounted. On weekends the Kayak deals page is checked
    as well.
    """

    SEARCH_URL = (
        "https://www.google.com/travel/hotels/{term}"
        "?q={query}&hl=en-US&gl=us"
    )
    KAYAK_DEALS_URL = "https://www.kayak.com/deals"

    def __init__(self, link_builder: AffiliateLinkBuilder) -> None:
        super().__init__("google_hotels")
        self.link_builder = link_builder
        self.kayak_selectors = self._load_selectors("kayak")

    def _get_homepage(self) -> str:
        """Return the Google Hotels homepage URL."""
        return "https://www.google.com/travel/hotels"

    def stay_dates(self, today: date) -> tuple[date, date]:
        """Sample stay: check in two months out for three nights."""
        checkin = today + relativedelta(months=self.settings.MONTHS_AHEAD)
        return checkin, checkin + timedelta(
            days=self.settings.HOTEL_NIGHTS
        )

    def _parse_card(
        self,
        card: Tag,
        destination: HotelDestination,
        checkin: date,
        checkout: date,
    ) -> HotelDeal | None:
        """Turn one hotel card into a deal if it passes the hotel rule."""
        data = parse_hotel_card(self.card_text(card))

        name_el = card.select_one(self.selectors["name"])
        hotel_name = name_el.get_text(strip=True) if name_el else ""

        off = 0
        if data.original_price and data.original_price > data.price:
            off = percent_off(data.original_price, data.price)

        if not DiscountFilter.admit_hotel(off, data.price, data.rating):
            return None

        return HotelDeal(
            hotel_name=hotel_name or f"Hotel in {destination.name}",
            location=destination.name,
            country=destination.country,
            price_per_night=data.price,
            original_price=data.original_price,
            percent_off=off,
            rating=data.rating,
            checkin_date=checkin.isoformat(),
            checkout_date=checkout.isoformat(),
            nights=self.settings.HOTEL_NIGHTS,
            source="Google Hotels",
            scraped_at=datetime.now(timezone.utc),
            search_url=self.link_builder.hotel_search_link(
                destination.search_term, checkin, checkout
            ),
            direct_url=(
                self.link_builder.hotel_direct_link(
                    hotel_name,
                    destination.search_term,
                    checkin,
                    checkout,
                )
                if hotel_name
                else None
            ),
        )

    def scrape_destination(
        self, destination: HotelDestination, today: date,
    ) -> list[HotelDeal]:
        """Check the first hotel cards for one destination."""
        checkin, checkout = self.stay_dates(today)
        url = self.SEARCH_URL.format(
            term=quote(destination.search_term, safe=""),
            query=quote(f"{destination.search_term} hotels", safe=""),
        )
        deals: list[HotelDeal] = []
        try:
            soup = self._get_page(url)
            if not soup:
                return []
            cards = soup.select(self.selectors["hotel_card"])
            self.logger.info(
                "[hotels] %s: %d hotel cards",
                destination.name,
                len(cards),
            )
            for card in cards[: self.settings.HOTEL_CARD_LIMIT]:
                try:
                    deal = self._parse_card(
                        card, destination, checkin, checkout
                    )
                except ExtractionError as e:
                    self.logger.debug("[hotels] Card skipped: %s", e)
                    continue
                if deal:
                    deals.append(deal)
        except Exception as e:
            self.logger.error(
                "[hotels] Error scraping hotels in %s: %s",
                destination.name,
                e,
                exc_info=True,
            )
        return deals

    def scrape_kayak_deals(self, today: date) -> list[HotelDeal]:
        """Collect flash sales of at least 30% from the Kayak deals page."""
        checkin, checkout = self.stay_dates(today)
        deals: list[HotelDeal] = []
        try:
            soup = self._get_page(self.KAYAK_DEALS_URL)
            if not soup:
                self.logger.info("[hotels] Kayak deals page not accessible")
                return []

            cards = soup.select(self.kayak_selectors["deal_card"])
            for card in cards[: self.settings.KAYAK_CARD_LIMIT]:
                try:
                    price, off = parse_discount_card(self.card_text(card))
                except ExtractionError:
                    continue
                if not DiscountFilter.admit_flash_sale(off):
                    continue
                deals.append(
                    HotelDeal(
                        hotel_name="Kayak Deal",
                        location="",
                        country="",
                        price_per_night=price,
                        percent_off=off,
                        checkin_date=checkin.isoformat(),
                        checkout_date=checkout.isoformat(),
                        nights=self.settings.HOTEL_NIGHTS,
                        source="Kayak Deals",
                        scraped_at=datetime.now(timezone.utc),
                        search_url=self.KAYAK_DEALS_URL,
                    )
                )
        except Exception as e:
            self.logger.error(
                "[hotels] Error scraping Kayak deals: %s", e, exc_info=True
            )
        return deals

    def scrape(
        self,
        today: date,
        previous: list[HotelDeal] | None = None,
    ) -> list[HotelDeal]:
        """Scrape today's destinations and merge in *previous* deals.

        Fresh deals go first so deduplication keeps them over older
        copies with the same key.
        """
        day = day_index(today)
        destinations = todays_hotel_destinations(today)
        self.logger.info(
            "[hotels] %s (day %d) rotation: %s",
            DAY_NAMES[day],
            day,
            ", ".join(d.name for d in destinations),
        )

        all_deals: list[HotelDeal] = []
        for destination in destinations:
            found = self.scrape_destination(destination, today)
            self.logger.info(
                "[hotels] %s: %d deals", destination.name, len(found)
            )
            all_deals.extend(found)
            self._wait(
                self.settings.DESTINATION_DELAY_MIN,
                self.settings.DESTINATION_DELAY_MAX,
            )

        if day in _WEEKEND:
            all_deals.extend(self.scrape_kayak_deals(today))

        if previous:
            self.logger.info(
                "[hotels] Merging %d deals from previous runs",
                len(previous),
            )
            all_deals.extend(previous)

        top = select_top_deals(all_deals, self.settings.TOP_DEALS_LIMIT)
        self.logger.info("[hotels] Found %d deals", len(top))
        return top
