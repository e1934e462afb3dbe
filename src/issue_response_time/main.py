"""Entry point wiring configuration, GitHub access, analysis and reporting."""

from __future__ import annotations

import logging
import sys
from typing import Optional, Sequence

from .aggregator import ReportAggregator
from .analyzer import RepoAnalyzer
from .cli import parse_args
from .config import load_config
from .errors import (
    AuthenticationError,
    ConfigurationError,
    DataShapeError,
    ResponseTimeError,
    TransportError,
)
from .github_client import GitHubClient
from .issue_filter import IssueFilter
from .report import ConsoleCsvReportSink

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_UNEXPECTED = 1
EXIT_CONFIGURATION = 2
EXIT_AUTHENTICATION = 3
EXIT_TRANSPORT = 4
EXIT_DATA_SHAPE = 5

_EXIT_CODES = (
    (ConfigurationError, EXIT_CONFIGURATION),
    (AuthenticationError, EXIT_AUTHENTICATION),
    (TransportError, EXIT_TRANSPORT),
    (DataShapeError, EXIT_DATA_SHAPE),
)


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s | %(levelname)s | %(message)s",
    )


def _exit_code_for(exc: ResponseTimeError) -> int:
    for error_type, code in _EXIT_CODES:
        if isinstance(exc, error_type):
            return code
    return EXIT_UNEXPECTED


def orchestrate_report_generation(argv: Optional[Sequence[str]] = None) -> int:
    """Run the full report and return a process exit code."""
    try:
        args = parse_args(argv)
        configure_logging(args.verbose)

        config = load_config(
            config_path=args.config,
            from_year=args.from_year,
            from_month=args.from_month,
            output_dir=args.output_dir,
            timeout_seconds=args.timeout,
        )

        client = GitHubClient(config=config)
        login = client.verify_credentials()
        logger.info(
            "Authenticated with GitHub as %s; analyzing %d repositories",
            login or "<installation token>",
            len(config.repositories),
        )

        analyzer = RepoAnalyzer(
            issue_source=client,
            comment_source=client,
            issue_filter=IssueFilter(config.maintainers, config.cutoff),
        )
        aggregator = ReportAggregator(analyzer, sink=ConsoleCsvReportSink(config.output_dir))
        aggregator.run(config.repositories)
    except ResponseTimeError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return _exit_code_for(exc)
    except Exception as exc:  # noqa: BLE001
        logger.exception("Unexpected failure while generating the report")
        print(f"ERROR: unexpected failure: {exc}", file=sys.stderr)
        return EXIT_UNEXPECTED

    return EXIT_OK


def main(argv: Optional[Sequence[str]] = None) -> int:
    return orchestrate_report_generation(argv)


if __name__ == "__main__":
    raise SystemExit(main())
