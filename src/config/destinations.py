# src/config/destinations.py

"""Static route and destination registry with day-of-week rotation.

Scraping every route daily takes too long and draws anti-bot attention,
so each weekday processes a fixed subset. Indices in the rotation tables
point into ``ORIGIN_CITIES`` and ``HOTEL_DESTINATIONS``; full coverage is
reached over a week.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import date
from typing import TypeVar

T = TypeVar("T")

DAY_NAMES: tuple[str, ...] = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)


class RotationError(ValueError):
    """Raised when a day index has no rotation entry."""


@dataclass(frozen=True)
class OriginCity:
    code: str
    name: str
    metro: str


@dataclass(frozen=True)
class FlightDestination:
    code: str
    name: str
    country: str


@dataclass(frozen=True)
class HotelDestination:
    name: str
    country: str
    search_term: str


ORIGIN_CITIES: tuple[OriginCity, ...] = (
    OriginCity("JFK", "New York (JFK)", "NYC"),
    OriginCity("LAX", "Los Angeles", "LAX"),
    OriginCity("SFO", "San Francisco", "SFO"),
    OriginCity("ORD", "Chicago", "CHI"),
    OriginCity("MIA", "Miami", "MIA"),
    OriginCity("DFW", "Dallas", "DFW"),
    OriginCity("BOS", "Boston", "BOS"),
    OriginCity("SEA", "Seattle", "SEA"),
    OriginCity("DEN", "Denver", "DEN"),
    OriginCity("ATL", "Atlanta", "ATL"),
)

FLIGHT_DESTINATIONS: tuple[FlightDestination, ...] = (
    FlightDestination("PAR", "Paris", "France"),
    FlightDestination("LON", "London", "UK"),
    FlightDestination("TYO", "Tokyo", "Japan"),
    FlightDestination("ROM", "Rome", "Italy"),
    FlightDestination("BCN", "Barcelona", "Spain"),
    FlightDestination("CUN", "Cancun", "Mexico"),
    FlightDestination("LIS", "Lisbon", "Portugal"),
    FlightDestination("DUB", "Dublin", "Ireland"),
    FlightDestination("AMS", "Amsterdam", "Netherlands"),
    FlightDestination("ICN", "Seoul", "South Korea"),
    FlightDestination("BKK", "Bangkok", "Thailand"),
    FlightDestination("SIN", "Singapore", "Singapore"),
)

# Typical round-trip fares in USD, the baseline for percent-off
TYPICAL_PRICES: Mapping[str, int] = {
    "PAR": 800, "LON": 750, "TYO": 1200, "ROM": 850,
    "BCN": 700, "CUN": 400, "LIS": 650, "DUB": 600,
    "AMS": 700, "ICN": 1100, "BKK": 900, "SIN": 1000,
}

DEFAULT_TYPICAL_PRICE: int = 800

HOTEL_DESTINATIONS: tuple[HotelDestination, ...] = (
    HotelDestination("Paris", "France", "Paris, France"),
    HotelDestination("London", "UK", "London, England"),
    HotelDestination("Tokyo", "Japan", "Tokyo, Japan"),
    HotelDestination("Rome", "Italy", "Rome, Italy"),
    HotelDestination("Barcelona", "Spain", "Barcelona, Spain"),
    HotelDestination("Cancun", "Mexico", "Cancun, Mexico"),
    HotelDestination("New York", "USA", "New York City"),
    HotelDestination("Las Vegas", "USA", "Las Vegas"),
    HotelDestination("Miami", "USA", "Miami, Florida"),
    HotelDestination("Honolulu", "USA", "Honolulu, Hawaii"),
    HotelDestination("San Francisco", "USA", "San Francisco"),
    HotelDestination("Los Angeles", "USA", "Los Angeles"),
    HotelDestination("Amsterdam", "Netherlands", "Amsterdam, Netherlands"),
    HotelDestination("Dublin", "Ireland", "Dublin, Ireland"),
    HotelDestination("Lisbon", "Portugal", "Lisbon, Portugal"),
    HotelDestination("Bangkok", "Thailand", "Bangkok, Thailand"),
    HotelDestination("Singapore", "Singapore", "Singapore"),
    HotelDestination("Bali", "Indonesia", "Bali, Indonesia"),
    HotelDestination("Phuket", "Thailand", "Phuket, Thailand"),
    HotelDestination("Maldives", "Maldives", "Maldives"),
)

HOTEL_DAY_ROTATION: Mapping[int, tuple[int, ...]] = {
    0: (0, 1, 2, 3, 4, 5, 6),           # Paris .. New York
    1: (7, 8, 9, 10, 11, 12),           # Las Vegas .. Amsterdam
    2: (13, 14, 15, 16, 17),            # Dublin .. Bali
    3: (18, 19, 0, 1, 2),               # Phuket, Maldives, Paris, London, Tokyo
    4: (3, 4, 5, 6, 7, 8),              # Rome .. Miami
    5: (9, 10, 11, 12, 13, 14),         # Honolulu .. Lisbon
    6: (0, 1, 2, 15, 16, 17, 18, 19),   # Top Europe + Asia
}

FLIGHT_DAY_ROTATION: Mapping[int, tuple[int, ...]] = {
    0: (0, 1),          # JFK, LAX
    1: (2, 3),          # SFO, ORD
    2: (4, 5),          # MIA, DFW
    3: (6, 7),          # BOS, SEA
    4: (8, 9),          # DEN, ATL
    5: (0, 2, 4),       # JFK, SFO, MIA
    6: (1, 3, 6),       # LAX, ORD, BOS
}


def day_index(day: date) -> int:
    """Return the rotation day index for *day* (Sunday = 0)."""
    return (day.weekday() + 1) % 7


def rotation_for_day(
    table: Mapping[int, Sequence[int]],
    items: Sequence[T],
    day: int,
) -> list[T]:
    """Return the *items* scheduled for rotation *day*, in table order.

    Raises:
        RotationError: *day* has no entry in *table*.
    """
    if day not in table:
        raise RotationError(f"No rotation configured for day {day}")
    return [items[i] for i in table[day]]


def todays_hotel_destinations(day: date) -> list[HotelDestination]:
    return rotation_for_day(
        HOTEL_DAY_ROTATION, HOTEL_DESTINATIONS, day_index(day)
    )


def todays_origins(day: date) -> list[OriginCity]:
    return rotation_for_day(
        FLIGHT_DAY_ROTATION, ORIGIN_CITIES, day_index(day)
    )


def typical_price_for(code: str) -> int:
    """Typical fare for a destination code, or the default baseline."""
    return TYPICAL_PRICES.get(code, DEFAULT_TYPICAL_PRICE)


def find_destination_by_name(name: str) -> FlightDestination | None:
    """Case-insensitive lookup of a flight destination by city name."""
    wanted = name.strip().lower()
    for dest in FLIGHT_DESTINATIONS:
        if dest.name.lower() == wanted:
            return dest
    return None
