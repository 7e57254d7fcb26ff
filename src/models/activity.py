# src/models/activity.py

"""Bookable activity found on GetYourGuide."""

from dataclasses import asdict, dataclass
from typing import Any


@dataclass
class Activity:
    """Represents a single activity card from a search result page."""

    title: str
    url: str
    search_query: str
    price: int | None = None
    rating: float | None = None
    review_count: str | None = None
    image_url: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
