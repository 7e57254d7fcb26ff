# src/services/post_renderer.py

"""Render daily deal posts as WordPress block-editor HTML."""

import logging
from datetime import date
from html import escape

from src.models.deal import FlightDeal, HotelDeal
from src.models.post import Post

logger = logging.getLogger("travel_deals.renderer")

CALCULATOR_URL = "https://etravelogs.com/miles-points-vs-cash-calculator/"

EMPTY_NOTICE = (
    "<p>Check back later - we're still searching for today's best deals!</p>"
)

_CARD_STYLE = (
    "background: #f7fafc; padding: 20px; border-radius: 8px; "
    "margin-bottom: 20px;"
)

_BUTTON_STYLE = (
    "display: inline-block; padding: 10px 20px; background: {color}; "
    "color: white; text-decoration: none; border-radius: 5px; "
    "font-weight: bold;"
)

MAX_TAGS = 5


def long_date(day: date) -> str:
    """``October 18, 2026`` style date."""
    return f"{day:%B} {day.day}, {day.year}"


def _heading(text: str) -> str:
    return (
        '<!-- wp:heading {"level":2} -->\n'
        f"<h2>{text}</h2>\n"
        "<!-- /wp:heading -->\n"
    )


def _card(body: str) -> str:
    return (
        '\n<!-- wp:group {"className":"deal-card"} -->\n'
        f'<div class="wp-block-group deal-card" style="{_CARD_STYLE}">\n'
        f"\n{body}\n"
        "</div>\n"
        "<!-- /wp:group -->\n"
    )


def _button(url: str, label: str, color: str) -> str:
    style = _BUTTON_STYLE.format(color=color)
    return (
        "<p>\n"
        f'  <a href="{escape(url)}" target="_blank" '
        f'rel="nofollow sponsored" style="{style}">\n'
        f"    {label}\n"
        "  </a>\n"
        "</p>\n"
    )


def _rank_emoji(index: int, podium: str, rest: str) -> str:
    if index == 0:
        return "🏆"
    return podium if index < 3 else rest


def _unique_tags(values: list[str]) -> list[str]:
    """First-seen unique non-empty values, capped at ``MAX_TAGS``."""
    tags: list[str] = []
    for value in values:
        if value and value not in tags:
            tags.append(value)
    return tags[:MAX_TAGS]


def _flight_card(deal: FlightDeal, index: int) -> str:
    emoji = _rank_emoji(index, "✈️", "🎫")
    discount = (
        f' <span style="color: green;">({deal.percent_off}% off typical '
        f"${deal.typical_price})</span>"
        if deal.percent_off > 0
        else ""
    )
    route = (
        f"{escape(deal.origin_name)} → {escape(deal.destination_name)}"
    )
    if deal.destination_country:
        route += f", {escape(deal.destination_country)}"
    body = (
        f"<h3>{emoji} {route}</h3>\n\n"
        f"<p><strong>💰 Price: ${deal.price}</strong>{discount}</p>\n\n"
        f"<p>📅 Sample dates: {deal.depart_date} to {deal.return_date} "
        f"({escape(deal.trip_length)})</p>\n\n"
        + _button(deal.booking_url, "Book on Expedia →", "#e53e3e")
    )
    return _card(body)


def _hotel_card(deal: HotelDeal, index: int) -> str:
    emoji = _rank_emoji(index, "🏨", "🛏️")
    stars = "⭐" * min(int(deal.rating), 5) if deal.rating else ""
    if deal.percent_off > 0:
        was = (
            f"${deal.original_price}"
            if deal.original_price
            else "regular price"
        )
        discount = (
            f' <span style="color: green;">({deal.percent_off}% off '
            f"{was})</span>"
        )
    else:
        discount = ""
    place = ", ".join(
        escape(part) for part in (deal.location, deal.country) if part
    )
    body = (
        f"<h3>{emoji} {escape(deal.hotel_name)}</h3>\n"
        f"<p>📍 {place} {stars}</p>\n\n"
        f"<p><strong>💰 ${deal.price_per_night}/night</strong>{discount}</p>\n\n"
        f"<p>📅 Sample stay: {deal.checkin_date} - {deal.checkout_date} "
        f"({deal.nights} nights)</p>\n\n"
        + _button(deal.search_url, "Check Availability →", "#2b6cb0")
    )
    return _card(body)


def render_flight_post(deals: list[FlightDeal], day: date) -> Post:
    """Render the "Today's Best Flight Deals" post for *day*."""
    date_str = long_date(day)

    content = (
        "\n<p>Looking for unbeatable flight deals today? Here are the top "
        f"offers verified as of {date_str}:</p>\n\n"
        + _heading("🔥 Today's Top Flight Deals")
        + "\n"
    )
    if not deals:
        content += EMPTY_NOTICE
    else:
        content += "".join(
            _flight_card(deal, i) for i, deal in enumerate(deals)
        )

    content += (
        "\n"
        + _heading("💡 Tips to Get These Prices")
        + "\n<ul>\n"
        "  <li>Prices change frequently - book quickly when you see a deal</li>\n"
        "  <li>Use incognito mode to avoid price tracking</li>\n"
        "  <li>Be flexible with dates (±3 days can save hundreds)</li>\n"
        f'  <li>Check our <a href="{CALCULATOR_URL}">Miles vs Cash '
        "Calculator</a> to see if points are better</li>\n"
        "</ul>\n\n"
        + _heading("🧮 Should You Use Miles Instead?")
        + "\n<p>Before booking with cash, check if your miles offer better "
        "value:</p>\n\n"
        "[miles_calculator]\n\n"
        "<p>Subscribe to our newsletter to get deals like these delivered "
        "to your inbox!</p>\n\n"
        f"<p><em>Deals found on {date_str}. Prices subject to change. "
        "Some links are affiliate links.</em></p>\n"
    )

    best = deals[0] if deals else None
    excerpt = (
        f"Today's verified flight deals from {len(deals)} routes. "
        f"Best deal: {best.origin_name if best else 'Check inside'} to "
        f"{best.destination_name if best else 'various'} for "
        f"${best.price if best else 'TBD'}."
    )

    post = Post(
        title=f"Today's Best Flight Deals – {date_str}",
        slug=f"todays-best-flight-deals-{day.isoformat()}",
        content=content,
        excerpt=excerpt,
        categories=["Flight Deals", "Daily Deals"],
        tags=_unique_tags([d.destination_name for d in deals]),
    )
    logger.info("Rendered flight post '%s' (%d deals)", post.slug, len(deals))
    return post


def render_hotel_post(deals: list[HotelDeal], day: date) -> Post:
    """Render the "Today's Best Hotel Deals" post for *day*."""
    date_str = long_date(day)

    content = (
        "\n<p>Looking for unbeatable hotel deals today? Here are the top "
        "properties with at least 25% off, verified as of "
        f"{date_str}:</p>\n\n"
        + _heading("🏨 Today's Top Hotel Deals")
        + "\n"
    )
    if not deals:
        content += EMPTY_NOTICE
    else:
        content += "".join(
            _hotel_card(deal, i) for i, deal in enumerate(deals)
        )

    content += (
        "\n"
        + _heading("💡 Hotel Booking Tips")
        + "\n<ul>\n"
        "  <li>Book directly sometimes offers perks (breakfast, upgrades)</li>\n"
        "  <li>Check if your credit card offers hotel status matches</li>\n"
        f'  <li>Use our <a href="{CALCULATOR_URL}">Calculator</a> to value '
        "hotel points</li>\n"
        '  <li>Look for "member prices" - often requires free signup</li>\n'
        "</ul>\n\n"
        "<p>Subscribe to our newsletter for weekly hotel deals!</p>\n\n"
        f"<p><em>Deals found on {date_str}. Prices subject to change. "
        "Some links are affiliate links.</em></p>\n"
    )

    best = deals[0] if deals else None
    excerpt = (
        f"Today's verified hotel deals in {len(deals)} destinations. "
        f"Best deal: {best.hotel_name if best else 'Various'} for "
        f"${best.price_per_night if best else 'TBD'}/night."
    )

    post = Post(
        title=f"Today's Best Hotel Deals – {date_str}",
        slug=f"todays-best-hotel-deals-{day.isoformat()}",
        content=content,
        excerpt=excerpt,
        categories=["Hotel Deals", "Daily Deals"],
        tags=_unique_tags([d.location for d in deals]),
    )
    logger.info("Rendered hotel post '%s' (%d deals)", post.slug, len(deals))
    return post
