# src/models/deal.py

"""Flight and hotel deal records for inter-module data flow."""

import math
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from typing import Any

from dateutil import parser as date_parser


def percent_off(typical: float, current: float) -> int:
    """Discount of *current* against *typical*, in whole percent.

    Rounds half up. Negative when *current* exceeds *typical*; nothing
    here validates the scraped inputs.
    """
    if typical <= 0:
        return 0
    return math.floor((typical - current) * 100 / typical + 0.5)


def _parse_timestamp(value: Any) -> datetime:
    """Parse an ISO timestamp; naive values are taken as UTC."""
    parsed = (
        value
        if isinstance(value, datetime)
        else date_parser.isoparse(str(value))
    )
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass
class FlightDeal:
    """A round-trip fare found for one origin/destination pair."""

    origin: str
    origin_name: str
    destination: str
    destination_name: str
    destination_country: str
    price: int
    typical_price: int
    percent_off: int
    depart_date: str
    return_date: str
    scraped_at: datetime
    booking_url: str = ""
    trip_length: str = "7 days"
    source: str = "Google Flights"

    @property
    def dedup_key(self) -> str:
        return f"{self.origin}-{self.destination}-{self.price}"

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["scraped_at"] = self.scraped_at.isoformat()
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FlightDeal":
        return cls(
            origin=str(data["origin"]),
            origin_name=str(data.get("origin_name", "")),
            destination=str(data["destination"]),
            destination_name=str(data.get("destination_name", "")),
            destination_country=str(
                data.get("destination_country", "")
            ),
            price=int(data["price"]),
            typical_price=int(data.get("typical_price", 0)),
            percent_off=int(data.get("percent_off", 0)),
            depart_date=str(data.get("depart_date", "")),
            return_date=str(data.get("return_date", "")),
            scraped_at=_parse_timestamp(data["scraped_at"]),
            booking_url=str(data.get("booking_url", "")),
            trip_length=str(data.get("trip_length", "7 days")),
            source=str(data.get("source", "Google Flights")),
        )


@dataclass
class HotelDeal:
    """A nightly hotel rate, optionally compared to its usual price."""

    hotel_name: str
    location: str
    country: str
    price_per_night: int
    percent_off: int
    checkin_date: str
    checkout_date: str
    scraped_at: datetime
    original_price: int | None = None
    rating: float | None = None
    nights: int = 3
    source: str = "Google Hotels"
    search_url: str = ""
    direct_url: str | None = None

    @property
    def dedup_key(self) -> str:
        return (
            f"{self.hotel_name}-{self.location}-{self.price_per_night}"
        )

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["scraped_at"] = self.scraped_at.isoformat()
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "HotelDeal":
        original = data.get("original_price")
        rating = data.get("rating")
        return cls(
            hotel_name=str(data["hotel_name"]),
            location=str(data.get("location") or ""),
            country=str(data.get("country") or ""),
            price_per_night=int(data["price_per_night"]),
            percent_off=int(data.get("percent_off", 0)),
            checkin_date=str(data.get("checkin_date", "")),
            checkout_date=str(data.get("checkout_date", "")),
            scraped_at=_parse_timestamp(data["scraped_at"]),
            original_price=(
                int(original) if original is not None else None
            ),
            rating=float(rating) if rating is not None else None,
            nights=int(data.get("nights", 3)),
            source=str(data.get("source", "Google Hotels")),
            search_url=str(data.get("search_url", "")),
            direct_url=data.get("direct_url"),
        )
