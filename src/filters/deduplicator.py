# src/filters/deduplicator.py

"""Deal deduplication within a run and across the merge window."""

import logging
from typing import Protocol, TypeVar


class _Keyed(Protocol):
    @property
    def dedup_key(self) -> str: ...


D = TypeVar("D", bound=_Keyed)

logger = logging.getLogger("travel_deals.filters")


class DealDeduplicator:
    """Remove duplicate deals by their composite key."""

    @staticmethod
    def deduplicate(deals: list[D]) -> tuple[list[D], int]:
        """Keep the first deal seen for each ``dedup_key``.

        Callers put fresh results ahead of merged older ones, so the
        first occurrence is the most recent scrape.

        Returns the deduplicated list and the count of removed dupes.
        """
        seen: set[str] = set()
        kept: list[D] = []
        removed = 0

        for deal in deals:
            key = deal.dedup_key
            if key in seen:
                removed += 1
                continue
            seen.add(key)
            kept.append(deal)

        if removed:
            logger.info(
                "Deduplication removed %d duplicate deals", removed
            )

        return kept, removed
