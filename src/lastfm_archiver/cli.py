"""
lastfm-archiver CLI - Entry point

Archive Last.fm listening history into a SQLite database.
"""

import argparse
import sqlite3
import sys
from pathlib import Path
from typing import List, Optional

import requests
from loguru import logger

from lastfm_archiver import __version__
from lastfm_archiver.archiver import archive
from lastfm_archiver.core import config as config_module
from lastfm_archiver.core.config import LOG_LEVELS, MAX_PAGE_SIZE
from lastfm_archiver.core.console import print_error, safe_print
from lastfm_archiver.core.output import set_quiet, setup_loguru
from lastfm_archiver.domain.lastfm import LastFMAPIError, LastFMError


def _page_size(value: str) -> int:
    size = int(value)
    if not 1 <= size <= MAX_PAGE_SIZE:
        raise argparse.ArgumentTypeError(f"must be between 1 and {MAX_PAGE_SIZE}")
    return size


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="lastfm-archiver",
        description="Archive last.fm listening history.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "API key and username may also come from config.toml or the\n"
            "LASTFM_API_KEY / LASTFM_USER environment variables."
        ),
    )

    parser.add_argument("api_key", nargs="?", help="API Key")
    parser.add_argument("user", nargs="?", help="Username")
    parser.add_argument("database", nargs="?", type=Path, help="Database path")

    parser.add_argument(
        "--config",
        type=Path,
        help="Configuration file (default: ./config.toml or ~/.config/lastfm-archiver/config.toml)",
    )
    parser.add_argument(
        "--init-config",
        action="store_true",
        help="Write a default configuration file and exit",
    )
    parser.add_argument(
        "--page-size",
        type=_page_size,
        help=f"Scrobbles per request (1-{MAX_PAGE_SIZE})",
    )
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        type=str.upper,
        help="Log level (overrides config)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Also write log records to stderr",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Only print errors",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the lastfm-archiver command.

    Returns:
        Exit code (0 for success, 1 for failure, 2 for usage errors)
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.init_config:
        path = config_module.write_default_config(args.config)
        safe_print(f"Configuration file: {path}")
        return 0

    cfg = config_module.load_config(args.config)

    # Positional arguments win over config and environment
    if args.api_key:
        cfg.lastfm.api_key = args.api_key
    if args.user:
        cfg.lastfm.user = args.user
    if args.database:
        cfg.database.path = str(args.database.expanduser())
    if args.page_size:
        cfg.lastfm.page_size = args.page_size
    if args.log_level:
        cfg.logging.level = args.log_level

    if not cfg.lastfm.api_key:
        parser.error("an API key is required (argument, config or LASTFM_API_KEY)")
    if not cfg.lastfm.user:
        parser.error("a username is required (argument, config or LASTFM_USER)")

    log_file = Path(cfg.logging.log_file) if cfg.logging.log_file else None
    try:
        setup_loguru(
            log_file,
            level=cfg.logging.level,
            console_output=cfg.logging.console_output or args.verbose,
        )
    except OSError as e:
        print_error(f"Cannot open log file: {e}")
        return 1
    set_quiet(args.quiet)

    try:
        with requests.Session() as session:
            result = archive(cfg, session=session)
    except LastFMAPIError as e:
        logger.error(f"Last.fm error {e.code}: {e}")
        print_error(str(e))
        return 1
    except (LastFMError, requests.RequestException, sqlite3.Error, OSError) as e:
        logger.exception("Archive failed")
        print_error(str(e))
        return 1

    if not args.quiet:
        safe_print(
            f"Archived {result.plays} plays ({result.pages} pages) to {result.database}",
            style="green",
        )
    return 0


def run() -> None:
    """Console script wrapper."""
    sys.exit(main())


if __name__ == "__main__":
    run()
