# tests/helpers.py

"""Builders for deal records used across the test modules."""

from datetime import datetime, timezone

from src.models.deal import FlightDeal, HotelDeal

SCRAPED_AT = datetime(2026, 10, 18, 6, 0, tzinfo=timezone.utc)


def make_flight(
    origin: str = "JFK",
    destination: str = "PAR",
    price: int = 600,
    percent_off: int = 25,
    destination_name: str = "Paris",
    scraped_at: datetime = SCRAPED_AT,
) -> FlightDeal:
    """Create a minimal FlightDeal."""
    return FlightDeal(
        origin=origin,
        origin_name="New York (JFK)",
        destination=destination,
        destination_name=destination_name,
        destination_country="France",
        price=price,
        typical_price=800,
        percent_off=percent_off,
        depart_date="2026-12-18",
        return_date="2026-12-25",
        scraped_at=scraped_at,
        booking_url="https://www.expedia.com/Flights-Search?trip=roundtrip",
    )


def make_hotel(
    hotel_name: str = "Hotel Lutetia",
    location: str = "Paris",
    price: int = 180,
    percent_off: int = 40,
    rating: float | None = 4.6,
    scraped_at: datetime = SCRAPED_AT,
) -> HotelDeal:
    """Create a minimal HotelDeal."""
    return HotelDeal(
        hotel_name=hotel_name,
        location=location,
        country="France",
        price_per_night=price,
        original_price=300,
        percent_off=percent_off,
        rating=rating,
        checkin_date="2026-12-18",
        checkout_date="2026-12-21",
        scraped_at=scraped_at,
        search_url="https://www.expedia.com/Hotel-Search?destination=Paris",
    )
