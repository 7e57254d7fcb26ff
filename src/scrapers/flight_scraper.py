# src/scrapers/flight_scraper.py

"""Scraper for Google Flights route searches and the Explore map."""

from datetime import date, datetime, timedelta, timezone
from urllib.parse import quote

from dateutil.relativedelta import relativedelta

from src.affiliate.link_builder import AffiliateLinkBuilder
from src.config.destinations import (
    DAY_NAMES,
    FLIGHT_DESTINATIONS,
    ORIGIN_CITIES,
    FlightDestination,
    OriginCity,
    day_index,
    find_destination_by_name,
    todays_origins,
    typical_price_for,
)
from src.filters.deal_ranker import select_top_deals
from src.filters.discount_filter import DiscountFilter
from src.models.deal import FlightDeal, percent_off
from src.scrapers.base_scraper import BaseScraper
from src.scrapers.extractors import (
    ExtractionError,
    extract_lowest_price,
    parse_explore_card,
)


class GoogleFlightsScraper(BaseScraper):
    """Find discounted round trips from US hubs to popular destinations.

    Each route search yields at most one deal: the lowest fare shown,
    compared with the destination's typical fare. The Explore page adds
    a handful of extra deals per origin.
    """

    SEARCH_URL = "https://www.google.com/travel/flights?q={query}"
    EXPLORE_URL = (
        "https://www.google.com/travel/explore"
        "?tfs=CBwQAxoJagcIARID{origin}QAFIAXABggELCP___________wGYAQI"
    )

    def __init__(self, link_builder: AffiliateLinkBuilder) -> None:
        super().__init__("google_flights")
        self.link_builder = link_builder

    def _get_homepage(self) -> str:
        """Return the Google Flights homepage URL."""
        return "https://www.google.com/travel/flights"

    def trip_dates(self, today: date) -> tuple[date, date]:
        """Sample dates: depart two months out, return a week later."""
        depart = today + relativedelta(months=self.settings.MONTHS_AHEAD)
        return depart, depart + timedelta(
            days=self.settings.FLIGHT_TRIP_DAYS
        )

    def _make_deal(
        self,
        origin: OriginCity,
        destination: FlightDestination,
        price: int,
        today: date,
        source: str,
    ) -> FlightDeal | None:
        """Build a deal for *price* if it clears the flight threshold."""
        typical = typical_price_for(destination.code)
        off = percent_off(typical, price)
        if not DiscountFilter.admit_flight(off):
            self.logger.debug(
                "[flights] %s -> %s at $%d is %d%% off, skipped",
                origin.code,
                destination.code,
                price,
                off,
            )
            return None

        depart, return_ = self.trip_dates(today)
        return FlightDeal(
            origin=origin.code,
            origin_name=origin.name,
            destination=destination.code,
            destination_name=destination.name,
            destination_country=destination.country,
            price=price,
            typical_price=typical,
            percent_off=off,
            depart_date=depart.isoformat(),
            return_date=return_.isoformat(),
            trip_length=f"{self.settings.FLIGHT_TRIP_DAYS} days",
            source=source,
            scraped_at=datetime.now(timezone.utc),
            booking_url=self.link_builder.flight_link(
                origin.code, destination.code, depart, return_
            ),
        )

    def scrape_route(
        self,
        origin: OriginCity,
        destination: FlightDestination,
        today: date,
    ) -> list[FlightDeal]:
        """Search one route and return its deal, if the fare qualifies."""
        query = quote(
            f"flights from {origin.name} to {destination.name}", safe=""
        )
        url = self.SEARCH_URL.format(query=query)
        try:
            soup = self._get_page(url)
            if not soup:
                return []
            texts = [
                self.card_text(el)
                for el in soup.select(self.selectors["price"])
            ]
            price = extract_lowest_price(texts)
            deal = self._make_deal(
                origin, destination, price, today, "Google Flights"
            )
            return [deal] if deal else []
        except ExtractionError as e:
            self.logger.info(
                "[flights] No price for %s -> %s: %s",
                origin.code,
                destination.code,
                e,
            )
        except Exception as e:
            self.logger.error(
                "[flights] Error scraping %s -> %s: %s",
                origin.code,
                destination.code,
                e,
                exc_info=True,
            )
        return []

    def scrape_explore(
        self, origin: OriginCity, today: date,
    ) -> list[FlightDeal]:
        """Collect deals from the Explore map cards for *origin*."""
        deals: list[FlightDeal] = []
        try:
            soup = self._get_page(
                self.EXPLORE_URL.format(origin=origin.code)
            )
            if not soup:
                return []
            cards = soup.select(self.selectors["explore_card"])
            for card in cards[: self.settings.EXPLORE_CARD_LIMIT]:
                try:
                    city, price = parse_explore_card(
                        self.card_text(card)
                    )
                except ExtractionError as e:
                    self.logger.debug("[flights] Explore card: %s", e)
                    continue
                destination = find_destination_by_name(city) or (
                    FlightDestination(code=city, name=city, country="")
                )
                deal = self._make_deal(
                    origin,
                    destination,
                    price,
                    today,
                    "Google Flights Explore",
                )
                if deal:
                    deals.append(deal)
        except Exception as e:
            self.logger.error(
                "[flights] Error exploring from %s: %s",
                origin.code,
                e,
                exc_info=True,
            )
        return deals

    def scrape(
        self, today: date, use_rotation: bool = True,
    ) -> list[FlightDeal]:
        """Run today's routes plus Explore and return the top deals."""
        origins = (
            todays_origins(today) if use_rotation else list(ORIGIN_CITIES)
        )
        self.logger.info(
            "[flights] %s rotation: %s x %d destinations",
            DAY_NAMES[day_index(today)],
            ", ".join(o.code for o in origins),
            len(FLIGHT_DESTINATIONS),
        )

        all_deals: list[FlightDeal] = []
        for origin in origins:
            for destination in FLIGHT_DESTINATIONS:
                all_deals.extend(
                    self.scrape_route(origin, destination, today)
                )
                self._wait(
                    self.settings.ROUTE_DELAY_MIN,
                    self.settings.ROUTE_DELAY_MAX,
                )

        for origin in origins[: self.settings.EXPLORE_ORIGIN_LIMIT]:
            all_deals.extend(self.scrape_explore(origin, today))
            self._wait(self.settings.EXPLORE_DELAY)

        top = select_top_deals(all_deals, self.settings.TOP_DEALS_LIMIT)
        self.logger.info("[flights] Found %d deals", len(top))
        return top
