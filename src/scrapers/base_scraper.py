# src/scrapers/base_scraper.py

"""Abstract base class for all travel-site scrapers."""

import json
import logging
import random
import time
from abc import ABC, abstractmethod
from typing import Any

import cloudscraper  # type: ignore[import-untyped]
from bs4 import BeautifulSoup, Tag
from curl_cffi import requests as curl_requests

from src.config.settings import Settings


class BaseScraper(ABC):
    """Shared page fetching for the travel-site scrapers.

    Each page is requested once with a fixed timeout. A failed or
    challenged request is logged and the caller moves on to the next
    item; there is no retry loop.
    """

    def __init__(self, source_name: str) -> None:
        self.source_name = source_name
        self.logger = logging.getLogger(
            f"travel_deals.{source_name}"
        )
        self.settings = Settings()
        self.selectors: dict[str, str] = self._load_selectors()
        self.session = curl_requests.Session(
            impersonate=self.settings.IMPERSONATE_BROWSER
        )
        self._request_timeout: int = self.settings.REQUEST_TIMEOUT

    def _load_selectors(
        self, source: str | None = None,
    ) -> dict[str, str]:
        """Load CSS selectors for a source (default: this one)."""
        with open(self.settings.SELECTORS_PATH, encoding="utf-8") as f:
            all_selectors: dict[str, Any] = json.load(f)
        result: dict[str, str] = all_selectors.get(
            source or self.source_name, {}
        )
        return result

    def _wait(self, low: float, high: float | None = None) -> None:
        """Sleep between *low* and *high* seconds to pace requests."""
        delay = low if high is None else random.uniform(low, high)
        time.sleep(delay)

    # Cloudflare challenge page markers (checked before keyword scan)
    _CF_CHALLENGE_MARKERS: list[str] = [
        "challenges.cloudflare.com",
        "cdn-cgi/challenge-platform",
        "just a moment",
        "cf-turnstile",
        "cf_chl_opt",
    ]

    def _validate_response(
        self, resp: curl_requests.Response,
    ) -> bool:
        """Check for challenge pages and CAPTCHA interstitials."""
        text = resp.text
        lower = text.lower()

        for marker in self._CF_CHALLENGE_MARKERS:
            if marker in lower:
                self.logger.warning(
                    "[%s] Challenge page detected (marker: '%s')",
                    self.source_name,
                    marker,
                )
                return False

        # Skip the keyword scan on content-rich pages to avoid
        # false positives from footer text
        has_body_content = (
            "<body" in lower and len(text) > 5000
        )
        if not has_body_content:
            for keyword in self.settings.CAPTCHA_KEYWORDS:
                if keyword in lower:
                    self.logger.warning(
                        "[%s] CAPTCHA keyword '%s' detected",
                        self.source_name,
                        keyword,
                    )
                    return False
        return True

    def _fetch_get(
        self,
        url: str,
        headers: dict[str, str],
    ) -> curl_requests.Response | None:
        """Single GET with the navigation timeout; ``None`` on failure."""
        try:
            resp = self.session.get(
                url,
                headers=headers,
                timeout=self._request_timeout,
            )
        except Exception as exc:
            self.logger.warning(
                "[%s] Request error for %s: %s",
                self.source_name,
                url,
                exc,
                exc_info=True,
            )
            return None

        if resp.status_code != 200:
            self.logger.warning(
                "[%s] HTTP %d for %s",
                self.source_name,
                resp.status_code,
                url,
            )
            return None
        if not self._validate_response(resp):
            return None
        return resp

    def _get_page(self, url: str) -> BeautifulSoup | None:
        """Fetch a page, falling back to cloudscraper once on failure."""
        headers: dict[str, str] = {
            **self.settings.DEFAULT_HEADERS,
            "Referer": self._get_homepage(),
        }

        # Primary: curl_cffi (browser-impersonating TLS)
        resp = self._fetch_get(url, headers)
        if resp:
            return BeautifulSoup(resp.text, "lxml")

        # Fallback: cloudscraper (JS challenge solver)
        self.logger.info(
            "[%s] curl_cffi failed, falling back to cloudscraper",
            self.source_name,
        )
        try:
            _cs: Any = cloudscraper
            scraper: Any = _cs.create_scraper()
            fallback_resp: Any = scraper.get(
                url,
                headers=headers,
                timeout=self._request_timeout,
            )
            if (
                fallback_resp.status_code == 200
                and self._validate_response(fallback_resp)
            ):
                return BeautifulSoup(
                    str(fallback_resp.text), "lxml"
                )
            self.logger.warning(
                "[%s] cloudscraper fallback returned no usable page "
                "(status %s)",
                self.source_name,
                fallback_resp.status_code,
            )
        except Exception as e:
            self.logger.error(
                "[%s] cloudscraper fallback also failed: %s",
                self.source_name,
                e,
                exc_info=True,
            )

        return None

    @staticmethod
    def card_text(card: Tag) -> str:
        """Visible text of a card, whitespace-joined."""
        return card.get_text(" ", strip=True)

    @abstractmethod
    def _get_homepage(self) -> str:
        """Return the homepage URL for the Referer header."""
        ...
