"""Command-line argument parsing for the issue response time report."""

from __future__ import annotations

import argparse
from typing import Optional, Sequence


def _positive_int(value: str) -> int:
    """Parse and validate a positive integer CLI value.

    Raises:
        argparse.ArgumentTypeError: If value is not a positive integer.
    """
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError("must be an integer") from exc

    if parsed <= 0:
        raise argparse.ArgumentTypeError("must be greater than 0")

    return parsed


def _month(value: str) -> int:
    parsed = _positive_int(value)
    if parsed > 12:
        raise argparse.ArgumentTypeError("must be a month number from 1 to 12")
    return parsed


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments for report generation.

    Returns:
        Parsed CLI arguments containing the optional config file, cutoff
        overrides, output directory, request timeout and verbosity.
    """
    parser = argparse.ArgumentParser(
        prog="issue-response-time",
        description=(
            "Measure how quickly maintainers respond to community-filed GitHub "
            "issues and write per-issue and per-repository CSV reports."
        ),
    )

    parser.add_argument(
        "--config",
        default=None,
        help="YAML file overriding repositories, maintainers and cutoff.",
    )
    parser.add_argument(
        "--from-year",
        type=_positive_int,
        default=None,
        help="Only analyze issues created in or after this year.",
    )
    parser.add_argument(
        "--from-month",
        type=_month,
        default=None,
        help="Month (1-12) of --from-year where the analysis window starts.",
    )
    parser.add_argument(
        "--output-dir",
        default=".",
        help="Directory for repo-results-all.csv and repo-summary.csv (default: current directory).",
    )
    parser.add_argument(
        "--timeout",
        type=_positive_int,
        default=30,
        help="Timeout in seconds for each GitHub API request (default: 30).",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )

    return parser.parse_args(argv)
