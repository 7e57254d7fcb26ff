# src/affiliate/link_builder.py

"""Affiliate booking link construction.

Every booking URL goes through :func:`encode_query` so flight, hotel and
activity links share one encoding. Expedia reads ``:``, ``,`` and ``/``
literally inside ``leg1``/``leg2`` and the dates, so those are never
escaped; everything else outside the unreserved set is percent-encoded
and spaces become ``%20``.
"""

from collections.abc import Mapping
from datetime import date
from urllib.parse import quote

from src.config.settings import AffiliateConfig

EXPEDIA_BASE = "https://www.expedia.com"

_SAFE_CHARS = ":,/"


def encode_query(params: Mapping[str, object]) -> str:
    """Join *params* into a query string, preserving insertion order."""
    return "&".join(
        f"{quote(str(key), safe='')}={quote(str(value), safe=_SAFE_CHARS)}"
        for key, value in params.items()
    )


def _expedia_date(day: date) -> str:
    return day.strftime("%m/%d/%Y")


class AffiliateLinkBuilder:
    """Build Expedia deep links and tag activity URLs with partner ids."""

    def __init__(self, affiliate: AffiliateConfig) -> None:
        self.affiliate = affiliate

    @property
    def affcid(self) -> str:
        return (
            "US.DIRECT.PHG."
            f"{self.affiliate.publisher_id}.{self.affiliate.affiliate_tag}"
        )

    def flight_link(
        self,
        origin: str,
        destination: str,
        depart: date,
        return_: date,
        passengers: int = 1,
    ) -> str:
        """Round-trip flight search between two airport/metro codes."""
        params = {
            "trip": "roundtrip",
            "leg1": (
                f"from:{origin},to:{destination},"
                f"departure:{_expedia_date(depart)}TANYT"
            ),
            "leg2": (
                f"from:{destination},to:{origin},"
                f"departure:{_expedia_date(return_)}TANYT"
            ),
            "passengers": f"adults:{passengers}",
            "AFFCID": self.affcid,
        }
        return f"{EXPEDIA_BASE}/Flights-Search?{encode_query(params)}"

    def hotel_search_link(
        self,
        destination: str,
        checkin: date,
        checkout: date,
    ) -> str:
        """Hotel search for a destination, one room for two adults."""
        params = {
            "destination": destination,
            "startDate": _expedia_date(checkin),
            "endDate": _expedia_date(checkout),
            "rooms": 1,
            "adults": 2,
            "AFFCID": self.affcid,
        }
        return f"{EXPEDIA_BASE}/Hotel-Search?{encode_query(params)}"

    def hotel_direct_link(
        self,
        hotel_name: str,
        destination: str,
        checkin: date,
        checkout: date,
    ) -> str:
        """Hotel search narrowed to a named property."""
        params = {
            "destination": destination,
            "startDate": _expedia_date(checkin),
            "endDate": _expedia_date(checkout),
            "hotelName": hotel_name,
            "sort": "RECOMMENDED",
            "AFFCID": self.affcid,
        }
        return f"{EXPEDIA_BASE}/Hotel-Search?{encode_query(params)}"

    def tag_activity_url(self, url: str) -> str:
        """Append the GetYourGuide ``partner_id`` when one is configured."""
        partner_id = self.affiliate.gyg_partner_id
        if not partner_id:
            return url
        sep = "&" if "?" in url else "?"
        return f"{url}{sep}{encode_query({'partner_id': partner_id})}"
