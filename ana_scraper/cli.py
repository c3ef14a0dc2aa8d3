"""Command-line interface for the ANA award scraper"""

import argparse
import asyncio
import os
import sys
from pathlib import Path
from typing import List, Optional

from loguru import logger

from . import __version__
from .config import DEFAULT_OUTPUT_DIR, LEG_ADVANCE_MAX_DELAY, LEG_ADVANCE_MIN_DELAY, PASSWORD_ENV_VAR, USERNAME_ENV_VAR
from .date_utils import parse_optional_date, parse_travel_date
from .exceptions import ANAScraperError
from .logging_config import setup_logging
from .models import CabinClass, Credentials, Query
from .pacing import DelayPolicy
from .runner import AwardSearchRunner


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ana-scraper",
        description="ANA Mileage Club award search - captures raw result pages",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    search_group = parser.add_argument_group("Flight Search")
    search_group.add_argument("--origin", type=str, required=True, help="Origin airport code")
    search_group.add_argument(
        "--destination", type=str, required=True, help="Destination airport code"
    )
    search_group.add_argument(
        "--date", type=str, required=True, help="Departure date (YYYY-MM-DD)"
    )
    search_group.add_argument(
        "--return-date", type=str, help="Return date (YYYY-MM-DD); omit for one-way"
    )
    search_group.add_argument(
        "--passengers", type=int, default=1, help="Number of adult passengers"
    )
    search_group.add_argument(
        "--cabin",
        type=str,
        default=CabinClass.ECONOMY.value,
        choices=[cabin.value for cabin in CabinClass],
        help="Cabin class",
    )

    auth_group = parser.add_argument_group("Authentication")
    auth_group.add_argument(
        "--username",
        type=str,
        default=os.environ.get(USERNAME_ENV_VAR, ""),
        help=f"Mileage club number (default: ${USERNAME_ENV_VAR})",
    )
    auth_group.add_argument(
        "--password",
        type=str,
        default=os.environ.get(PASSWORD_ENV_VAR, ""),
        help=f"Password (default: ${PASSWORD_ENV_VAR})",
    )

    config_group = parser.add_argument_group("Configuration")
    config_group.add_argument(
        "--output", type=str, default=str(DEFAULT_OUTPUT_DIR), help="Output directory"
    )
    config_group.add_argument(
        "--no-headless", action="store_true", help="Visible browser mode"
    )
    config_group.add_argument(
        "--min-delay",
        type=int,
        default=LEG_ADVANCE_MIN_DELAY,
        help="Minimum pause before advancing to the inbound leg (ms)",
    )
    config_group.add_argument(
        "--max-delay",
        type=int,
        default=LEG_ADVANCE_MAX_DELAY,
        help="Maximum pause before advancing to the inbound leg (ms)",
    )
    config_group.add_argument("--verbose", action="store_true", help="Debug logging")
    config_group.add_argument("--log-file", type=str, help="Log file path")
    config_group.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    return parser


def build_query(args: argparse.Namespace) -> Query:
    """Turn parsed arguments into a Query; raises ValueError on bad input"""
    depart_date = parse_travel_date(args.date)
    return_date = parse_optional_date(args.return_date)
    return Query(
        origin=args.origin,
        destination=args.destination,
        depart_date=depart_date,
        return_date=return_date,
        one_way=return_date is None,
        passengers=args.passengers,
        cabin=CabinClass(args.cabin),
    )


def main(argv: Optional[List[str]] = None) -> None:
    """Main CLI entry point"""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        query = build_query(args)
        delay_policy = DelayPolicy(args.min_delay, args.max_delay)
    except ValueError as e:
        parser.error(str(e))

    log_file = Path(args.log_file) if args.log_file else Path("./logs/ana_scraper.log")
    setup_logging(verbose=args.verbose, log_file=log_file)

    logger.info("=" * 60)
    logger.info(f"ANA Award Scraper (v{__version__})")
    logger.info("=" * 60)

    runner = AwardSearchRunner(
        credentials=Credentials(username=args.username, password=args.password),
        output_dir=Path(args.output),
        headless=not args.no_headless,
        delay_policy=delay_policy,
    )

    try:
        report = asyncio.run(runner.run(query))
    except ANAScraperError as e:
        logger.error(f"❌ {type(e).__name__}: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        sys.exit(130)

    logger.info(f"Legs captured: {', '.join(report.leg_names) or 'none'}")
    logger.info(f"Airports saved: {report.airport_count}")
    logger.info(f"Output: {report.output_dir}")
