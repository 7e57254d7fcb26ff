# src/storage/file_manager.py

"""Reads and writes deal, post and activity files in the output folder."""

import json
import logging
import re
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any

from src.config.settings import Settings
from src.models.deal import FlightDeal, HotelDeal
from src.models.post import Post

logger = logging.getLogger("travel_deals.storage")

FLIGHTS_FILE = "flights.json"
HOTELS_FILE = "hotels.json"
COMBINED_FILE = "deals.json"
POSTS_DIR = "posts"


class DealStore:
    """Flat-file persistence for one run's outputs.

    Deal files are overwritten wholesale on every run and hold
    ``{generated, count, deals}``.
    """

    def __init__(self, output_dir: Path | None = None) -> None:
        self.output_dir: Path = output_dir or Settings.OUTPUT_DIR
        self.output_dir.mkdir(parents=True, exist_ok=True)
        logger.debug("DealStore initialised, output_dir=%s", self.output_dir)

    def _write_json(self, filename: str, data: Any) -> Path:
        filepath = self.output_dir / filename
        filepath.parent.mkdir(parents=True, exist_ok=True)
        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
        return filepath

    def _save_deals(
        self,
        filename: str,
        deals: list[FlightDeal] | list[HotelDeal],
        now: datetime,
    ) -> Path:
        payload = {
            "generated": now.isoformat(),
            "count": len(deals),
            "deals": [d.to_dict() for d in deals],
        }
        filepath = self._write_json(filename, payload)
        logger.info("Saved %d deals to %s", len(deals), filepath)
        return filepath

    def save_flights(self, deals: list[FlightDeal], now: datetime) -> Path:
        return self._save_deals(FLIGHTS_FILE, deals, now)

    def save_hotels(self, deals: list[HotelDeal], now: datetime) -> Path:
        return self._save_deals(HOTELS_FILE, deals, now)

    def save_combined(
        self,
        flights: list[FlightDeal],
        hotels: list[HotelDeal],
        now: datetime,
    ) -> Path:
        """Write ``deals.json`` with both lists and a best-deal summary."""
        payload = {
            "generated": now.isoformat(),
            "summary": {
                "total_flight_deals": len(flights),
                "total_hotel_deals": len(hotels),
                "best_flight_deal": (
                    flights[0].to_dict() if flights else None
                ),
                "best_hotel_deal": (
                    hotels[0].to_dict() if hotels else None
                ),
            },
            "flights": [d.to_dict() for d in flights],
            "hotels": [d.to_dict() for d in hotels],
        }
        filepath = self._write_json(COMBINED_FILE, payload)
        logger.info("Saved combined deals to %s", filepath)
        return filepath

    def _load_raw(self, filename: str) -> list[dict[str, Any]]:
        """Deal dicts from *filename*; empty when missing or unreadable."""
        filepath = self.output_dir / filename
        try:
            with open(filepath, encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            logger.info("No previous deals at %s", filepath)
            return []
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Could not read %s: %s", filepath, exc)
            return []
        deals: list[dict[str, Any]] = data.get("deals") or []
        return deals

    def load_flights(self) -> list[FlightDeal]:
        deals: list[FlightDeal] = []
        for raw in self._load_raw(FLIGHTS_FILE):
            try:
                deals.append(FlightDeal.from_dict(raw))
            except (KeyError, TypeError, ValueError) as exc:
                logger.warning("Skipping malformed flight deal: %s", exc)
        return deals

    def load_hotels(self) -> list[HotelDeal]:
        deals: list[HotelDeal] = []
        for raw in self._load_raw(HOTELS_FILE):
            try:
                deals.append(HotelDeal.from_dict(raw))
            except (KeyError, TypeError, ValueError) as exc:
                logger.warning("Skipping malformed hotel deal: %s", exc)
        return deals

    def load_recent_hotels(
        self,
        now: datetime,
        window_days: int = Settings.MERGE_WINDOW_DAYS,
    ) -> list[HotelDeal]:
        """Hotel deals from the last run scraped within *window_days*."""
        cutoff = now - timedelta(days=window_days)
        recent = [d for d in self.load_hotels() if d.scraped_at > cutoff]
        logger.info(
            "Loaded %d existing hotel deals from previous runs", len(recent)
        )
        return recent

    def save_post(self, post: Post, name: str) -> tuple[Path, Path]:
        """Write ``{name}-post.json`` and ``{name}-content.html``."""
        json_path = self._write_json(
            f"{POSTS_DIR}/{name}-post.json", post.to_dict()
        )
        html_path = self.output_dir / POSTS_DIR / f"{name}-content.html"
        html_path.write_text(post.content, encoding="utf-8")
        logger.info("Saved post '%s' to %s", post.title, json_path)
        return json_path, html_path

    def save_activities(self, term: str, text: str, fmt: str) -> Path:
        """Write formatted activity output as ``gyg-{term}.{json|txt}``."""
        slug = re.sub(r"[^\w-]+", "-", term.strip()).strip("-").lower()
        ext = "json" if fmt == "json" else "txt"
        filepath = self.output_dir / f"gyg-{slug or 'activities'}.{ext}"
        filepath.write_text(text, encoding="utf-8")
        logger.info("Saved activities for '%s' to %s", term, filepath)
        return filepath
