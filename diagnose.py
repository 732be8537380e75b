#!/usr/bin/env python3
# ============================================================================
# SERVICE DIAGNOSTICS CLI
# ============================================================================
# EPOCH: 1 - SERVICE DIAGNOSTICS
# STATUS: Tool - Command-line entry point
# PURPOSE: Run the service catalog once and print the report
# CREATED: 18 OCT 2026
# ============================================================================
"""
Service Diagnostics CLI

Runs every probe of a service catalog once and prints a report.

Exit codes:
    0 - every check succeeded
    1 - at least one warning, no errors
    2 - at least one error (or the catalog could not be loaded)

The report goes to stdout (or --output); logs go to stderr.

Usage:
    python diagnose.py
    python diagnose.py --format json --output report.json
    python diagnose.py --service api --service worker
"""

import argparse
import asyncio
import os
import sys
from typing import List, Optional

from core.config import ReportFormat, get_defaults
from core.contracts import CheckStatus
from core.errors import CatalogLoadError
from core.logging import ComponentType, configure_logging, get_logger
from reporting import get_reporter
from services import DiagnosticService

logger = get_logger(__name__, ComponentType.CLI)


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {value}")
    return number


def _positive_float(value: str) -> float:
    number = float(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be greater than 0, got {value}")
    return number


def _non_negative_float(value: str) -> float:
    number = float(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"must not be negative, got {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    defaults = get_defaults()
    parser = argparse.ArgumentParser(
        description="Run point-in-time diagnostics for every service in a catalog",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s
  %(prog)s --catalog catalogs/aime.yaml --format json --output report.json
  %(prog)s --service api --deadline 60 --probe-timeout 5
        """,
    )
    parser.add_argument(
        "--catalog", "-c",
        default=None,
        help=f"Service catalog YAML (default: {defaults.catalog.catalog_path})",
    )
    parser.add_argument(
        "--format", "-f",
        choices=[f.value for f in ReportFormat],
        default=defaults.report.format.value,
        help="Report format (default: %(default)s)",
    )
    parser.add_argument(
        "--output", "-o",
        default=None,
        help="Write the report to a file instead of stdout",
    )
    parser.add_argument(
        "--service", "-s",
        action="append",
        default=None,
        help="Only diagnose this service and its dependencies (repeatable)",
    )
    parser.add_argument(
        "--deadline",
        type=_non_negative_float,
        default=defaults.timeouts.run_deadline_seconds,
        help="Whole-run deadline in seconds (default: %(default)s)",
    )
    parser.add_argument(
        "--probe-timeout",
        type=_positive_float,
        default=None,
        help="Timeout for probes without their own (default: per probe kind)",
    )
    parser.add_argument(
        "--max-parallel",
        type=_positive_int,
        default=defaults.execution.max_parallel,
        help="Max services probed concurrently (default: %(default)s)",
    )
    parser.add_argument(
        "--color",
        choices=["auto", "always", "never"],
        default="auto",
        help="ANSI colour in the text report (default: %(default)s)",
    )
    parser.add_argument(
        "--log-level",
        default=os.environ.get("LOG_LEVEL", "WARNING"),
        help="Log level for stderr (default: %(default)s)",
    )
    parser.add_argument(
        "--list-probes",
        action="store_true",
        help="List registered probe kinds and exit",
    )
    return parser


def _use_color(choice: str, output: Optional[str]) -> bool:
    if choice == "always":
        return True
    if choice == "never" or output:
        return False
    return get_defaults().report.color or sys.stdout.isatty()


def main(argv: Optional[List[str]] = None) -> int:
    """Run diagnostics; returns the process exit code."""
    args = build_parser().parse_args(argv)

    configure_logging(
        level=args.log_level,
        json_output=os.environ.get("LOG_FORMAT", "").lower() == "json",
    )

    service = DiagnosticService()

    if args.list_probes:
        for kind, description in service.catalog_service.list_kinds().items():
            print(f"{kind:<22} {description}")
        return 0

    try:
        catalog = service.load_catalog(args.catalog)
    except CatalogLoadError as e:
        logger.error(f"Cannot load catalog: {e}")
        return CheckStatus.ERROR.exit_code

    try:
        summary = asyncio.run(service.run(
            catalog,
            services=args.service,
            probe_timeout=args.probe_timeout,
            run_deadline=args.deadline,
            max_parallel=args.max_parallel,
        ))
    except KeyError as e:
        logger.error(f"Unknown service: {e}")
        return CheckStatus.ERROR.exit_code

    reporter = get_reporter(args.format, color=_use_color(args.color, args.output))
    reporter.write(summary, args.output)

    if args.output:
        logger.info(f"Report written to {args.output}")

    return summary.exit_code


if __name__ == "__main__":
    sys.exit(main())
