"""Tests for command-line argument parsing."""

import sys
from pathlib import Path

import pytest

# Add src directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from issue_response_time.cli import parse_args


def test_parse_args_defaults(monkeypatch):
    """Verify CLI parsing succeeds with no arguments and applies defaults."""
    monkeypatch.setattr(sys, "argv", ["issue-response-time"])

    args = parse_args()

    assert args.config is None
    assert args.from_year is None
    assert args.from_month is None
    assert args.output_dir == "."
    assert args.timeout == 30
    assert args.verbose is False


def test_parse_args_with_valid_arguments():
    """Verify CLI parsing reads every supported option."""
    args = parse_args(
        [
            "--config",
            "report.yaml",
            "--from-year",
            "2024",
            "--from-month",
            "11",
            "--output-dir",
            "reports",
            "--timeout",
            "10",
            "--verbose",
        ]
    )

    assert args.config == "report.yaml"
    assert args.from_year == 2024
    assert args.from_month == 11
    assert args.output_dir == "reports"
    assert args.timeout == 10
    assert args.verbose is True


@pytest.mark.parametrize("month", ["0", "13", "march"])
def test_parse_args_with_invalid_month_fails_validation(month):
    """Verify CLI parsing exits with an error for months outside 1-12."""
    with pytest.raises(SystemExit):
        parse_args(["--from-month", month])


def test_parse_args_with_negative_timeout_fails_validation():
    """Verify CLI parsing exits with an error when --timeout is negative."""
    with pytest.raises(SystemExit):
        parse_args(["--timeout", "-1"])
