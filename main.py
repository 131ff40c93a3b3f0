# main.py

"""Entry point for the catalog_dedupe duplicate finder and merger."""

import argparse
import logging
import sys
from pathlib import Path

from src.config.logging_config import setup_logging
from src.config.settings import Settings

logger = logging.getLogger("catalog_dedupe.main")


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="catalog_dedupe",
        description=(
            "Find near-duplicate products within each brand and merge "
            "them into the oldest record."
        ),
    )
    parser.add_argument(
        "--db",
        default=None,
        dest="db_path",
        help=f"SQLite catalog path (default: {Settings.DB_PATH}).",
    )
    parser.add_argument(
        "-y",
        "--yes",
        "--auto-confirm",
        action="store_true",
        default=Settings.AUTO_CONFIRM,
        dest="auto_confirm",
        help="Merge every group without asking.",
    )
    parser.add_argument(
        "--find",
        action="store_true",
        default=False,
        help="Only list similar product pairs; change nothing.",
    )
    parser.add_argument(
        "--merge",
        nargs=2,
        type=int,
        default=None,
        metavar=("KEEP_ID", "DELETE_ID"),
        help="Manually merge DELETE_ID into KEEP_ID.",
    )
    parser.add_argument(
        "--save-report",
        action="store_true",
        default=False,
        dest="save_report",
        help="Write the run report as JSON to reports/.",
    )
    return parser


def main() -> None:
    """Route to the pair report, a manual merge, or a full dedupe run."""
    log_file = setup_logging()
    logger.info("catalog_dedupe starting, log file: %s", log_file)

    parser = _build_parser()
    args = parser.parse_args()
    db_path = Path(args.db_path) if args.db_path else None

    from src.cli.runner import (
        run_dedupe,
        run_find_duplicates,
        run_merge_pair,
    )

    if args.find:
        exit_code = run_find_duplicates(db_path)
    elif args.merge is not None:
        keep_id, delete_id = args.merge
        exit_code = run_merge_pair(
            keep_id,
            delete_id,
            db_path=db_path,
            auto_confirm=args.auto_confirm,
        )
    else:
        exit_code = run_dedupe(
            db_path=db_path,
            auto_confirm=args.auto_confirm,
            save_report=args.save_report,
        )
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
