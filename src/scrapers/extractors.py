# src/scrapers/extractors.py

"""Text-level extraction of prices, ratings and discounts.

Scrapers hand rendered card text to these functions and get back either
structured values or an :class:`ExtractionError`. The regexes are the
brittle part of the system; keeping them here means markup changes never
touch filtering or rendering.
"""

import re
from collections.abc import Iterable
from dataclasses import dataclass

_PRICE_RE = re.compile(r"\$(\d[\d,]*)")
_EXPLORE_CITY_RE = re.compile(r"([A-Za-z\s]+)\$")
_USUALLY_RE = re.compile(r"usually\s*\$(\d[\d,]*)", re.IGNORECASE)
_WAS_RE = re.compile(r"was\s*\$(\d[\d,]*)", re.IGNORECASE)
_RATING_RE = re.compile(r"(\d\.\d)\s*(?:star|★|\()")
_DISCOUNT_RE = re.compile(r"(\d+)%\s*off", re.IGNORECASE)
_NUMBER_RE = re.compile(r"(\d+\.?\d*)")
_REVIEWS_RE = re.compile(r"\((\d[\d,]*)\)")


class ExtractionError(ValueError):
    """Raised when card text does not contain the expected fields."""


@dataclass(frozen=True)
class HotelCardData:
    price: int
    original_price: int | None
    rating: float | None


def _to_int(token: str) -> int:
    return int(token.replace(",", ""))


def extract_price(text: str | None) -> int | None:
    """Return the first ``$N`` amount in *text*, if any."""
    if not text:
        return None
    match = _PRICE_RE.search(text)
    return _to_int(match.group(1)) if match else None


def extract_lowest_price(texts: Iterable[str]) -> int:
    """Return the lowest non-zero ``$N`` amount across *texts*.

    ``$0`` tokens (fees, placeholders) are not fares.

    Raises:
        ExtractionError: no text carried a non-zero price.
    """
    prices = [
        price
        for price in (extract_price(t) for t in texts)
        if price
    ]
    if not prices:
        raise ExtractionError("no non-zero price token found")
    return min(prices)


def parse_explore_card(text: str) -> tuple[str, int]:
    """Return ``(city, price)`` from an Explore destination card."""
    price = extract_price(text)
    city_match = _EXPLORE_CITY_RE.search(text)
    if price is None or not city_match:
        raise ExtractionError(f"explore card not parseable: {text[:60]!r}")
    city = city_match.group(1).strip()
    if not city:
        raise ExtractionError("explore card has no city name")
    return city, price


def parse_hotel_card(text: str) -> HotelCardData:
    """Extract current price, usual price and star rating from a hotel card.

    The usual price comes from "Usually $X", else "Was $X".
    """
    price = extract_price(text)
    if price is None:
        raise ExtractionError("hotel card has no price")

    usually = _USUALLY_RE.search(text)
    was = _WAS_RE.search(text)
    original: int | None = None
    if usually:
        original = _to_int(usually.group(1))
    elif was:
        original = _to_int(was.group(1))

    rating_match = _RATING_RE.search(text)
    rating = float(rating_match.group(1)) if rating_match else None

    return HotelCardData(
        price=price, original_price=original, rating=rating
    )


def parse_discount_card(text: str) -> tuple[int, int]:
    """Return ``(price, percent_off)`` from a flash-sale card."""
    price = extract_price(text)
    discount = _DISCOUNT_RE.search(text)
    if price is None or not discount:
        raise ExtractionError("deal card lacks price or discount")
    return price, int(discount.group(1))


def parse_activity_rating(text: str) -> tuple[float | None, str | None]:
    """Return ``(rating, review_count)`` from e.g. ``"4.8 (12,345)"``."""
    rating_match = _NUMBER_RE.search(text)
    reviews_match = _REVIEWS_RE.search(text)
    rating = float(rating_match.group(1)) if rating_match else None
    reviews = reviews_match.group(1) if reviews_match else None
    return rating, reviews
