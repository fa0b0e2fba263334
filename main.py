"""
Review Trend Report

CLI entry point for generating a trend report from a review-session export.
"""

import argparse
import logging
import sys

from src.agents.ingestion import ExportLoader
from src.orchestrator import ReportOrchestrator
from src.utils.console import ConsolePrompter, auto_approve, parse_date
import config.settings as settings


def setup_logging(log_level: str = "INFO"):
    """Configure logging for the entire application."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format=settings.LOG_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(settings.LOG_FILE)
        ]
    )


def _date_argument(value: str):
    date = parse_date(value)
    if date is None:
        raise argparse.ArgumentTypeError(
            f"invalid date {value!r}, expected day/month/year (e.g. 1/2/2021)"
        )
    return date


def _count_argument(value: str) -> int:
    try:
        count = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid count {value!r}")
    if count < 0:
        raise argparse.ArgumentTypeError(f"count must not be negative, got {count}")
    return count


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Review Trend Report - trend frequencies and developer flags",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Fully interactive
  python main.py

  # Report for February 2021, asking only for flag confirmation
  python main.py --csv reviews.csv \\
                 --start-date 1/2/2021 --end-date 1/3/2021 \\
                 --cancellations 3 --output february.txt

Options left out are asked for on the console. Relative report paths are
written under the output directory (TREND_REPORT_OUTPUT).
        """
    )

    parser.add_argument("--csv", help="Path to the reviews CSV export")
    parser.add_argument(
        "--start-date",
        type=_date_argument,
        help="Period start, inclusive (d/m/yyyy)"
    )
    parser.add_argument(
        "--end-date",
        type=_date_argument,
        help="Period end, exclusive (d/m/yyyy)"
    )
    parser.add_argument(
        "--cancellations",
        type=_count_argument,
        help="Number of cancellations in the period"
    )
    parser.add_argument(
        "--output",
        help=f"Target report path; relative paths go under {settings.OUTPUT_ROOT}"
    )
    parser.add_argument(
        "--auto-approve",
        action="store_true",
        help="Accept every flag without asking"
    )
    parser.add_argument(
        "--log-level",
        default=settings.LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help=f"Logging level (default: {settings.LOG_LEVEL})"
    )
    return parser


def main(argv=None):
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    setup_logging(args.log_level)
    logger = logging.getLogger(__name__)

    prompter = ConsolePrompter()
    loader = ExportLoader()

    try:
        start = args.start_date or prompter.ask_start_date()
        end = args.end_date or prompter.ask_end_date(start)
        if args.csv:
            archive = loader.load_archive(args.csv)
        else:
            archive = prompter.ask_archive(loader)

        if args.cancellations is not None:
            cancellations = lambda: args.cancellations
        else:
            cancellations = prompter.ask_cancellations
        confirm = auto_approve if args.auto_approve else prompter.confirm_flags
        target = (lambda: args.output) if args.output else prompter.ask_target

        orchestrator = ReportOrchestrator(loader=loader)
        output_path = orchestrator.run(
            archive=archive,
            start=start,
            end=end,
            cancellations=cancellations,
            confirm=confirm,
            target=target
        )

        print(f"Report written to {output_path}")
        logger.info("Trend report completed successfully")
        sys.exit(0)

    except KeyboardInterrupt:
        logger.warning("Report interrupted by user")
        print("\nReport interrupted")
        sys.exit(1)

    except Exception as e:
        logger.error(f"Report failed: {e}", exc_info=True)
        print(f"\nReport failed: {e}")
        print(f"Check {settings.LOG_FILE} for details")
        sys.exit(1)


if __name__ == "__main__":
    main()
