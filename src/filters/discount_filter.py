# src/filters/discount_filter.py

"""Discount threshold rules deciding which scraped prices count as deals."""

from src.config.settings import Settings


class DiscountFilter:
    """Admission rules for flight and hotel deals."""

    @staticmethod
    def admit_flight(percent_off: int) -> bool:
        """Flights must beat the typical fare by more than 15%."""
        return percent_off > Settings.FLIGHT_MIN_PERCENT_OFF

    @staticmethod
    def admit_hotel(
        percent_off: int,
        price: int,
        rating: float | None,
    ) -> bool:
        """Hotels need 25% off, or a well-rated room under $150.

        The budget exception only applies when a rating was found.
        """
        if percent_off >= Settings.HOTEL_MIN_PERCENT_OFF:
            return True
        return (
            price < Settings.HOTEL_BUDGET_PRICE
            and rating is not None
            and rating >= Settings.HOTEL_BUDGET_MIN_RATING
        )

    @staticmethod
    def admit_flash_sale(percent_off: int) -> bool:
        """Aggregator flash sales must advertise at least 30% off."""
        return percent_off >= Settings.KAYAK_MIN_PERCENT_OFF
