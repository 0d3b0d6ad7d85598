"""
Command line entry point.

Usage:
    dupfinder ~/Pictures                              # content duplicates (SHA256)
    dupfinder ~/Pictures --mode name_size             # same name + size, no hashing
    dupfinder ~/Pictures --mode combined --workers 8  # same name + same content
    dupfinder ~/Pictures --csv duplicates.csv         # also write CSV report
    dupfinder ~/Pictures --json > result.json         # machine-readable output

Defaults come from DUPFINDER_* environment variables (see config/settings.py).
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Optional, Sequence

import structlog
from pydantic import ValidationError

from dupfinder.config.exceptions import DupFinderError
from dupfinder.config.logging import configure_logging
from dupfinder.config.settings import DupFinderSettings, get_settings
from dupfinder.models import ComparisonMode, ScanConfig
from dupfinder.report_generator import ReportGenerator
from dupfinder.scanner import DuplicateScanner

logger = structlog.get_logger(__name__)

EXIT_OK = 0
EXIT_SCAN_FAILED = 1
EXIT_USAGE = 2

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def _non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {number}")
    return number


def build_parser(settings: DupFinderSettings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dupfinder",
        description="Find duplicate files by name/size and SHA256 content hash",
    )
    parser.add_argument("directory", type=Path, help="Root directory to scan")
    parser.add_argument(
        "--mode",
        choices=[m.value for m in ComparisonMode],
        default=settings.default_mode.value,
        help=f"Comparison strategy (default: {settings.default_mode.value})",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=settings.default_workers,
        help=f"Concurrent hashing workers (default: {settings.default_workers})",
    )
    parser.add_argument("--min-size", type=int, default=0, help="Skip files smaller than BYTES")
    parser.add_argument("--max-size", type=int, default=None, help="Skip files larger than BYTES")
    parser.add_argument(
        "--exclude-dir",
        action="append",
        default=[],
        metavar="NAME",
        help="Directory name to skip (repeatable)",
    )
    parser.add_argument(
        "--exclude-name",
        action="append",
        default=[],
        metavar="NAME",
        help="File name to skip (repeatable)",
    )
    parser.add_argument("--csv", type=Path, default=None, help="Write CSV report to PATH")
    parser.add_argument("--json", action="store_true", help="Print full result as JSON")
    parser.add_argument(
        "--max-groups",
        type=_non_negative_int,
        default=20,
        help="Groups listed in the console summary (default: 20)",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=settings.log_level,
        help=f"Log level (default: {settings.log_level})",
    )
    parser.add_argument(
        "--log-format",
        choices=["json", "console"],
        default=settings.log_format,
        help="Log output format",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    try:
        settings = get_settings()
    except ValidationError as e:
        print(f"dupfinder: invalid DUPFINDER_* environment:\n{e}", file=sys.stderr)
        return EXIT_USAGE

    try:
        args = build_parser(settings).parse_args(argv)
    except SystemExit as e:
        # argparse exits 2 on bad arguments, 0 on --help
        return e.code

    configure_logging(level=args.log_level, json_format=args.log_format == "json")

    try:
        config = ScanConfig(
            root_path=args.directory,
            mode=ComparisonMode(args.mode),
            workers=args.workers,
            chunk_size=settings.chunk_size,
            min_file_size=args.min_size,
            max_file_size=args.max_size,
            excluded_dir_names=set(args.exclude_dir),
            excluded_filenames=set(args.exclude_name),
        )
    except ValidationError as e:
        print(f"dupfinder: invalid configuration:\n{e}", file=sys.stderr)
        return EXIT_USAGE

    scanner = DuplicateScanner(config=config)
    reports = ReportGenerator()

    try:
        result = asyncio.run(scanner.scan())
        if args.csv is not None:
            reports.generate_csv(result, args.csv)
    except DupFinderError as e:
        logger.error("dedup_scan_failed", error=str(e))
        print(f"dupfinder: {e}", file=sys.stderr)
        return EXIT_SCAN_FAILED

    if args.json:
        print(reports.to_json(result))
    else:
        print(reports.format_summary(result, max_groups=args.max_groups))

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
