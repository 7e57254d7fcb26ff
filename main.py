# main.py

"""Entry point for the travel_deals scrapers, post generator and link tool."""

import argparse
import logging
import sys

from src.cli.formatters import FORMATS
from src.config.logging_config import setup_logging

logger = logging.getLogger("travel_deals.main")


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="travel_deals",
        description="Daily flight and hotel deal scraper and publisher.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Show progress (INFO) log messages on the console.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    scrape = sub.add_parser(
        "scrape", help="Scrape deals and save them to output/."
    )
    scrape.add_argument(
        "target",
        nargs="?",
        choices=["all", "flights", "hotels"],
        default="all",
        help="Which scraper to run (default: all).",
    )
    scrape.add_argument(
        "--all-routes",
        action="store_true",
        default=False,
        dest="all_routes",
        help="Ignore the day rotation and scrape every origin.",
    )

    posts = sub.add_parser(
        "posts", help="Generate blog posts from the saved deals."
    )
    posts.add_argument(
        "--publish",
        action="store_true",
        default=False,
        help="Publish to WordPress instead of writing local files only.",
    )

    links = sub.add_parser(
        "links", help="Generate GetYourGuide affiliate link lists."
    )
    links.add_argument(
        "terms",
        nargs="*",
        help="Destinations or activities to search for.",
    )
    links.add_argument(
        "--list",
        default=None,
        dest="list_csv",
        help="Comma-separated search terms.",
    )
    links.add_argument(
        "-f",
        "--format",
        default="markdown",
        dest="output_format",
        help=f"Output format: {', '.join(FORMATS)} (default: markdown).",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Parse arguments and dispatch to the matching runner."""
    args = _build_parser().parse_args(argv)

    log_file = setup_logging(run_name=args.command, verbose=args.verbose)
    logger.info("travel_deals %s starting, log file: %s", args.command, log_file)

    from src.cli import runner

    if args.command == "scrape":
        exit_code = runner.run_scrape(args.target, args.all_routes)
    elif args.command == "posts":
        exit_code = runner.run_posts(args.publish)
    else:
        exit_code = runner.run_links(
            args.terms, args.list_csv, args.output_format
        )
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
