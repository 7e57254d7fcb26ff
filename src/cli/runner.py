# src/cli/runner.py

"""Command runners behind the ``main.py`` subcommands."""

import logging
from datetime import date, datetime, timezone

from rich.console import Console
from rich.table import Table

from src.affiliate.link_builder import AffiliateLinkBuilder
from src.cli.formatters import format_activities
from src.config.settings import AffiliateConfig, Settings, WordPressConfig
from src.models.deal import FlightDeal, HotelDeal
from src.scrapers.activity_scraper import GetYourGuideScraper
from src.services.deal_pipeline import DealPipeline
from src.storage.file_manager import DealStore

logger = logging.getLogger("travel_deals.cli")

# Stderr console for status messages so stdout stays clean for output
_err = Console(stderr=True)

LINKS_USAGE = """\
[bold]GetYourGuide Affiliate Link Generator[/bold]

Usage:
  python main.py links "destination"
  python main.py links "tokyo food tour"
  python main.py links --list "a,b,c"
  python main.py links --format html "rome"

Formats: markdown, html, bligence, json, simple
"""


def build_pipeline() -> DealPipeline:
    """Pipeline wired with configuration read from the environment."""
    return DealPipeline(
        affiliate=AffiliateConfig.from_env(),
        wordpress=WordPressConfig.from_env(),
    )


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _print_flights(deals: list[FlightDeal]) -> None:
    table = Table(
        title="Flight Deals", show_lines=False, title_style="bold cyan",
    )
    table.add_column("#", style="dim", width=4)
    table.add_column("Route")
    table.add_column("Price", justify="right", style="green")
    table.add_column("Off", justify="right")
    table.add_column("Dates", style="dim")
    for idx, d in enumerate(deals, 1):
        table.add_row(
            str(idx),
            f"{d.origin_name} → {d.destination_name}",
            f"${d.price}",
            f"{d.percent_off}%",
            f"{d.depart_date} – {d.return_date}",
        )
    _err.print(table)


def _print_hotels(deals: list[HotelDeal]) -> None:
    table = Table(
        title="Hotel Deals", show_lines=False, title_style="bold cyan",
    )
    table.add_column("#", style="dim", width=4)
    table.add_column("Hotel", max_width=40)
    table.add_column("Location", style="magenta")
    table.add_column("Nightly", justify="right", style="green")
    table.add_column("Off", justify="right")
    table.add_column("Rating", justify="center")
    for idx, d in enumerate(deals, 1):
        table.add_row(
            str(idx),
            d.hotel_name[:40],
            d.location or "—",
            f"${d.price_per_night}",
            f"{d.percent_off}%",
            f"{d.rating}" if d.rating else "—",
        )
    _err.print(table)


def run_scrape(target: str, all_routes: bool = False) -> int:
    """Scrape flights, hotels or both and save the deal files."""
    pipeline = build_pipeline()
    today = date.today()
    now = _now()
    _err.rule("Daily Deal Scraper")
    _err.print(f"[dim]Started at {now.isoformat()}[/dim]")

    try:
        if target == "flights":
            _print_flights(
                pipeline.run_flights(today, now, not all_routes)
            )
        elif target == "hotels":
            _print_hotels(pipeline.run_hotels(today, now))
        else:
            result = pipeline.run_all(today, now, not all_routes)
            for error_msg in result.errors:
                _err.print(f"[red]Error: {error_msg}[/red]")
            _print_flights(result.flights)
            _print_hotels(result.hotels)
            _err.print(
                f"[green]✓ {len(result.flights)} flight deals, "
                f"{len(result.hotels)} hotel deals[/green]"
            )
            if result.flights:
                best = result.flights[0]
                _err.print(
                    f"🔥 Best flight deal: {best.origin_name} → "
                    f"{best.destination_name} ${best.price} "
                    f"({best.percent_off}% off)"
                )
            if result.hotels:
                best_hotel = result.hotels[0]
                _err.print(
                    f"🔥 Best hotel deal: {best_hotel.hotel_name} in "
                    f"{best_hotel.location} ${best_hotel.price_per_night}"
                    f"/night ({best_hotel.percent_off}% off)"
                )
            _err.print(f"[dim]Output saved to {result.combined_path}[/dim]")
    except Exception as exc:
        logger.critical("Scraper failed: %s", exc, exc_info=True)
        _err.print(f"[red]Scraper failed: {exc}[/red]")
        return 1

    _err.print(f"[dim]Completed at {_now().isoformat()}[/dim]")
    return 0


def run_posts(publish: bool = False) -> int:
    """Generate local post files, or publish them to WordPress."""
    pipeline = build_pipeline()
    today = date.today()
    try:
        if publish:
            results = pipeline.generate_and_publish(today)
            _err.rule("Publishing Complete")
            for label, created in results.items():
                if created:
                    _err.print(f"{label}: {created.get('link')}")
        else:
            flight_post, hotel_post = pipeline.generate_posts(today)
            _err.print("Generated WordPress posts:")
            _err.print(f"  - Flight deals: {flight_post.title}")
            _err.print(f"  - Hotel deals: {hotel_post.title}")
            _err.print(
                f"[dim]Output saved to {pipeline.store.output_dir / 'posts'}"
                "[/dim]"
            )
    except Exception as exc:
        logger.critical("Post generation failed: %s", exc, exc_info=True)
        _err.print(f"[red]Error: {exc}[/red]")
        return 1
    return 0


def run_links(
    terms: list[str],
    list_csv: str | None = None,
    fmt: str = "markdown",
) -> int:
    """Search GetYourGuide per term, print and save formatted links."""
    search_terms = list(terms)
    if list_csv:
        search_terms = [t.strip() for t in list_csv.split(",") if t.strip()]

    if not search_terms:
        _err.print(LINKS_USAGE)
        return 0

    scraper = GetYourGuideScraper(
        AffiliateLinkBuilder(AffiliateConfig.from_env())
    )
    store = DealStore()
    console = Console()

    try:
        results = scraper.search_many(search_terms, Settings.ACTIVITY_LIMIT)
        for term, activities in results.items():
            if not activities:
                _err.print(
                    f"[yellow]No activities found for \"{term}\"[/yellow]"
                )
                continue

            _err.rule(f"Results for: {term}")
            formatted = format_activities(activities, fmt)
            console.print(formatted, markup=False, highlight=False)
            path = store.save_activities(term, formatted, fmt)
            _err.print(f"[dim]📁 Saved to: {path}[/dim]")
    except Exception as exc:
        logger.critical("Link generation failed: %s", exc, exc_info=True)
        _err.print(f"[red]Error: {exc}[/red]")
        return 1

    return 0
