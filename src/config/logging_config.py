# src/config/logging_config.py

"""Per-command timestamped logging for travel_deals.

Every invocation writes one log file inside ``logs/`` named after the
subcommand and the launch time, e.g. ``logs/scrape_20261018_060000.log``
for the daily scrape or ``logs/posts_20261018_063000.log`` for the
WordPress publish that follows it. All ``travel_deals.*`` loggers (the
per-source scrapers, the pipeline and the publisher) share that file.

The console shows warnings and errors only; ``--verbose`` lowers it to
INFO and adds the logger name, so each route and destination is visible
while a scrape runs.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path

from src.config.settings import Settings

_DETAILED_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(name)s | %(module)s:%(funcName)s:%(lineno)d | "
    "%(message)s"
)

_CONSOLE_FORMAT = "%(asctime)s | %(levelname)-8s | %(message)s"
_VERBOSE_CONSOLE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    logs_dir: Path | None = None,
    run_name: str = "run",
    verbose: bool = False,
) -> Path:
    """Attach the file and console handlers to the ``travel_deals`` logger.

    Args:
        logs_dir: Folder for log files; defaults to ``Settings.LOGS_DIR``.
        run_name: Prefix of the log file, normally the CLI subcommand.
        verbose: Show INFO messages on the console.

    Returns:
        The path of the log file for this invocation.
    """
    logs_dir = logs_dir or Settings.LOGS_DIR
    logs_dir.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = logs_dir / f"{run_name}_{timestamp}.log"

    root_logger = logging.getLogger("travel_deals")
    root_logger.setLevel(logging.DEBUG)

    # Repeated calls keep the first handlers
    if root_logger.handlers:
        return log_file

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter(_DETAILED_FORMAT, datefmt=_DATE_FORMAT)
    )

    console_handler = logging.StreamHandler(sys.stderr)
    if verbose:
        console_handler.setLevel(logging.INFO)
        console_handler.setFormatter(
            logging.Formatter(_VERBOSE_CONSOLE_FORMAT, datefmt=_DATE_FORMAT)
        )
    else:
        console_handler.setLevel(logging.WARNING)
        console_handler.setFormatter(
            logging.Formatter(_CONSOLE_FORMAT, datefmt=_DATE_FORMAT)
        )

    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    root_logger.info(
        "Logging initialised for '%s', log file: %s", run_name, log_file
    )

    return log_file
