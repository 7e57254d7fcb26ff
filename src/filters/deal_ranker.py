# src/filters/deal_ranker.py

"""Ranking of deals by discount, the sole ordering signal."""

import logging
from typing import Protocol, TypeVar

from src.config.settings import Settings
from src.filters.deduplicator import DealDeduplicator


class _Ranked(Protocol):
    @property
    def dedup_key(self) -> str: ...

    @property
    def percent_off(self) -> int | None: ...


D = TypeVar("D", bound=_Ranked)

logger = logging.getLogger("travel_deals.filters")


class DealRanker:
    """Sort deals by percent-off and keep the best ones."""

    @staticmethod
    def rank(
        deals: list[D],
        limit: int = Settings.TOP_DEALS_LIMIT,
    ) -> list[D]:
        """Return at most *limit* deals, biggest discount first.

        The sort is stable, so ties keep their input order. A missing
        percent-off ranks as 0.
        """
        ordered = sorted(
            deals,
            key=lambda d: d.percent_off or 0,
            reverse=True,
        )
        return ordered[:limit]


def select_top_deals(
    deals: list[D],
    limit: int = Settings.TOP_DEALS_LIMIT,
) -> list[D]:
    """Deduplicate, rank and truncate a raw deal list."""
    unique, _removed = DealDeduplicator.deduplicate(deals)
    top = DealRanker.rank(unique, limit)
    logger.info(
        "Selected %d top deals from %d unique (%d raw)",
        len(top),
        len(unique),
        len(deals),
    )
    return top
