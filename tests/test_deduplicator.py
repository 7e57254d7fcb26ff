# tests/test_deduplicator.py

"""Tests for DealDeduplicator composite-key deduplication."""

import unittest
from datetime import datetime, timezone

from src.filters.deduplicator import DealDeduplicator
from tests.helpers import make_flight, make_hotel


class TestDeduplicate(unittest.TestCase):
    """DealDeduplicator.deduplicate behaviour."""

    def test_empty_list(self) -> None:
        """Empty input returns empty output."""
        kept, removed = DealDeduplicator.deduplicate([])
        self.assertEqual(kept, [])
        self.assertEqual(removed, 0)

    def test_no_duplicates(self) -> None:
        """Deals with distinct keys are all kept."""
        deals = [
            make_flight(destination="PAR"),
            make_flight(destination="LON"),
            make_flight(destination="PAR", price=601),
        ]
        kept, removed = DealDeduplicator.deduplicate(deals)
        self.assertEqual(len(kept), 3)
        self.assertEqual(removed, 0)

    def test_shared_key_keeps_first_seen(self) -> None:
        """Two flights with the same key collapse to the first."""
        first = make_flight(percent_off=10)
        second = make_flight(percent_off=50)
        kept, removed = DealDeduplicator.deduplicate([first, second])
        self.assertEqual(kept, [first])
        self.assertIs(kept[0], first)
        self.assertEqual(removed, 1)

    def test_hotel_key_ignores_rating(self) -> None:
        """Hotels match on name, location and price only."""
        fresh = make_hotel(rating=4.9)
        older = make_hotel(
            rating=4.1,
            scraped_at=datetime(2026, 10, 14, tzinfo=timezone.utc),
        )
        kept, removed = DealDeduplicator.deduplicate([fresh, older])
        self.assertEqual(len(kept), 1)
        self.assertEqual(kept[0].rating, 4.9)
        self.assertEqual(removed, 1)

    def test_same_hotel_different_city_kept(self) -> None:
        """A chain name in two cities is two deals."""
        deals = [
            make_hotel(hotel_name="Hilton", location="Paris"),
            make_hotel(hotel_name="Hilton", location="Rome"),
        ]
        kept, _removed = DealDeduplicator.deduplicate(deals)
        self.assertEqual(len(kept), 2)

    def test_order_preserved(self) -> None:
        """Surviving deals keep their input order."""
        deals = [
            make_flight(destination="TYO"),
            make_flight(destination="PAR"),
            make_flight(destination="TYO"),
            make_flight(destination="BCN"),
        ]
        kept, removed = DealDeduplicator.deduplicate(deals)
        self.assertEqual(
            [d.destination for d in kept], ["TYO", "PAR", "BCN"]
        )
        self.assertEqual(removed, 1)


if __name__ == "__main__":
    unittest.main()
