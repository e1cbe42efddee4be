"""
GCD Credit Updater CLI

Usage:
    # Extract characters from gcd_story, starting after the configured id
    credit-updater characters

    # Resume credits after story 250000
    credit-updater credits --starting-id 250000

    # Extract from migrate_stories (a newer dump) instead of gcd_story
    credit-updater characters --migrate

Environment:
    DATABASE_URL - Async SQLAlchemy URL (required)
    SOURCE_SCHEMA / TARGET_SCHEMA - Schemas for gcd_* and m_* tables
    CHARACTERS_STARTING_STORY_ID / CREDITS_STARTING_STORY_ID - Default resume points
"""
import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from credit_updater import __version__
from credit_updater.core.config import settings
from credit_updater.core.exceptions import PipelineConnectionError
from credit_updater.jobs.update_tasks import extract_characters, extract_credits

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def cmd_extract(args) -> int:
    """Run the extraction task for args.command and return an exit status."""
    task = extract_characters if args.command == "characters" else extract_credits
    try:
        summary = asyncio.run(task(
            starting_id=args.starting_id,
            initial=not args.migrate,
            starting_complete=args.starting_complete,
            total_expected=args.total,
        ))
    except PipelineConnectionError as e:
        logger.error(f"[cli] {e.message}")
        if e.last_item_id is not None:
            logger.error(
                f"[cli] Resume with: credit-updater {args.command} "
                f"--starting-id {e.last_item_id} --starting-complete {e.rows_completed}"
            )
        return 1

    logger.info(
        f"[cli] {args.command}: {summary.processed:,} stories, "
        f"{summary.extracted:,} rows written, {summary.failed:,} failed"
    )
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="credit-updater",
        description="Extract characters and credits from GCD story text fields",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s characters                          # Characters from gcd_story
  %(prog)s credits --starting-id 250000        # Resume credits
  %(prog)s characters --migrate                # Characters from migrate_stories
        """,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("--log-level", default=settings.LOG_LEVEL, help="Log level (default: %(default)s)")
    verbosity.add_argument("-q", "--quiet", dest="log_level", action="store_const", const="WARNING",
                           help="Only log warnings and errors")
    verbosity.add_argument("-v", "--verbose", dest="log_level", action="store_const", const="DEBUG",
                           help="Log debug output")

    subparsers = parser.add_subparsers(dest="command", help="Extraction tasks")

    for name, help_text in (
        ("characters", "Extract characters and appearances"),
        ("credits", "Extract story credits"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("--starting-id", type=int, default=None,
                         help="Last story id already extracted (default: from settings)")
        sub.add_argument("--starting-complete", type=int, default=None,
                         help="Stories already done (default: counted)")
        sub.add_argument("--total", type=int, default=None,
                         help="Total stories expected (default: counted)")
        sub.add_argument("--migrate", action="store_true",
                         help="Read migrate_stories instead of gcd_story")
        sub.set_defaults(func=cmd_extract)

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        sys.exit(1)

    configure_logging(args.log_level)
    sys.exit(args.func(args))


if __name__ == "__main__":
    main()
