# src/config/settings.py

"""Central configuration for the travel_deals scrapers and publisher."""

import os
from dataclasses import dataclass
from pathlib import Path

from curl_cffi.requests import BrowserTypeLiteral
from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Central configuration for the travel_deals scrapers and publisher."""

    # --- Scraping ---
    REQUEST_TIMEOUT: int = 30           # Seconds before a navigation times out
    ROUTE_DELAY_MIN: float = 2.0        # Seconds between flight routes
    ROUTE_DELAY_MAX: float = 4.0
    DESTINATION_DELAY_MIN: float = 1.5  # Seconds between hotel destinations
    DESTINATION_DELAY_MAX: float = 2.5
    EXPLORE_DELAY: float = 3.0          # Seconds between Explore pages
    ACTIVITY_DELAY: float = 2.0         # Seconds between activity searches
    EXPLORE_ORIGIN_LIMIT: int = 5       # Origins checked on Explore
    EXPLORE_CARD_LIMIT: int = 10
    HOTEL_CARD_LIMIT: int = 15
    KAYAK_CARD_LIMIT: int = 10
    ACTIVITY_LIMIT: int = 10

    # --- Anti-bot page detection ---
    CAPTCHA_KEYWORDS: list[str] = [
        "captcha",
        "verify you are human",
        "unusual traffic",
        "automated requests",
    ]

    # --- Deal thresholds ---
    FLIGHT_MIN_PERCENT_OFF: int = 15    # Exclusive
    HOTEL_MIN_PERCENT_OFF: int = 25     # Inclusive
    HOTEL_BUDGET_PRICE: int = 150       # Budget exception: price below this
    HOTEL_BUDGET_MIN_RATING: float = 4.0
    KAYAK_MIN_PERCENT_OFF: int = 30
    TOP_DEALS_LIMIT: int = 20
    MERGE_WINDOW_DAYS: int = 7

    # --- Trip shape ---
    MONTHS_AHEAD: int = 2
    FLIGHT_TRIP_DAYS: int = 7
    HOTEL_NIGHTS: int = 3

    # --- Browser Impersonation ---
    IMPERSONATE_BROWSER: BrowserTypeLiteral = "chrome131"
    DEFAULT_HEADERS: dict[str, str] = {
        "Accept": (
            "text/html,application/xhtml+xml,"
            "application/xml;q=0.9,image/avif,"
            "image/webp,image/apng,*/*;q=0.8"
        ),
        "Accept-Language": "en-US,en;q=0.9",
        "sec-ch-ua": (
            '"Google Chrome";v="131", '
            '"Chromium";v="131", '
            '"Not_A Brand";v="24"'
        ),
        "sec-ch-ua-mobile": "?0",
        "sec-ch-ua-platform": '"Windows"',
        "sec-fetch-dest": "document",
        "sec-fetch-mode": "navigate",
        "sec-fetch-site": "none",
        "sec-fetch-user": "?1",
        "Upgrade-Insecure-Requests": "1",
    }

    # --- Paths ---
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    SELECTORS_PATH: Path = BASE_DIR / "src" / "config" / "selectors.json"
    OUTPUT_DIR: Path = BASE_DIR / "output"
    LOGS_DIR: Path = BASE_DIR / "logs"


def _int_env(name: str, default: int) -> int:
    """Read an integer env var, falling back on missing or bad values."""
    raw = os.getenv(name, "")
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class AffiliateConfig:
    """Partner tracking identifiers used when building booking links."""

    affiliate_tag: str = "etravelogs"
    publisher_id: str = "1011l387199"
    gyg_partner_id: str = ""

    @classmethod
    def from_env(cls) -> "AffiliateConfig":
        """Build the config from ``EXPEDIA_*`` and ``GYG_*`` env vars."""
        return cls(
            affiliate_tag=os.getenv(
                "EXPEDIA_AFFILIATE_TAG", cls.affiliate_tag
            ),
            publisher_id=os.getenv(
                "EXPEDIA_PUBLISHER_ID", cls.publisher_id
            ),
            gyg_partner_id=os.getenv("GYG_PARTNER_ID", ""),
        )


@dataclass(frozen=True)
class WordPressConfig:
    """Connection details for the WordPress REST API."""

    url: str = "https://etravelogs.com"
    username: str = ""
    app_password: str = ""
    flight_category_id: int = 39
    hotel_category_id: int = 40

    @property
    def has_credentials(self) -> bool:
        return bool(self.username and self.app_password)

    @property
    def posts_endpoint(self) -> str:
        return f"{self.url.rstrip('/')}/wp-json/wp/v2/posts"

    @classmethod
    def from_env(cls) -> "WordPressConfig":
        """Build the config from ``WORDPRESS_*`` env vars."""
        return cls(
            url=os.getenv("WORDPRESS_URL") or cls.url,
            username=os.getenv("WORDPRESS_USERNAME", ""),
            app_password=os.getenv("WORDPRESS_APP_PASSWORD", ""),
            flight_category_id=_int_env(
                "WORDPRESS_FLIGHT_CATEGORY_ID",
                cls.flight_category_id,
            ),
            hotel_category_id=_int_env(
                "WORDPRESS_HOTEL_CATEGORY_ID",
                cls.hotel_category_id,
            ),
        )
