# main.py

"""Entry point for the campus_market catalog browser (TUI or headless CLI)."""

import argparse
import asyncio
import logging
import sys

from src.config.logging_config import setup_logging
from src.config.settings import Settings
from src.models.product import Category, Condition
from src.models.query import SortKey

logger = logging.getLogger("campus_market.main")


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    categories = ", ".join(c.value for c in Category)
    conditions = ", ".join(c.value for c in Condition)

    parser = argparse.ArgumentParser(
        prog="campus_market",
        description="Browse and search the campus marketplace catalog.",
        epilog=f"Categories: {categories}. Conditions: {conditions}.",
    )
    parser.add_argument(
        "term",
        nargs="?",
        default=None,
        help="Search term. Omit (with no filters) to launch the TUI.",
    )
    parser.add_argument(
        "-c",
        "--category",
        action="append",
        dest="categories",
        help="Category to include; repeat or comma-separate.",
    )
    parser.add_argument(
        "--condition",
        action="append",
        dest="conditions",
        help="Condition to include; repeat or comma-separate.",
    )
    parser.add_argument("--min-price", type=float, default=None)
    parser.add_argument("--max-price", type=float, default=None)
    parser.add_argument(
        "-l",
        "--location",
        default="",
        help="Match address, city or university.",
    )
    parser.add_argument(
        "--verified",
        action="store_true",
        help="Only listings from verified sellers.",
    )
    parser.add_argument(
        "--available",
        action="store_true",
        help="Hide sold or removed listings.",
    )
    parser.add_argument(
        "--university",
        action="store_true",
        help="Only listings picked up at a university.",
    )
    parser.add_argument(
        "--free",
        action="store_true",
        help="Only free or unpriced listings.",
    )
    parser.add_argument(
        "-s",
        "--sort",
        choices=[k.value for k in SortKey],
        default=SortKey.NEWEST.value,
    )
    parser.add_argument("-p", "--page", type=int, default=1)
    parser.add_argument(
        "--page-size",
        type=int,
        default=Settings.PAGE_SIZE,
        dest="page_size",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=["json", "table"],
        default="json",
        dest="output_format",
        help="Output format (default: json).",
    )
    parser.add_argument(
        "--save",
        action="store_true",
        help="Save the page as JSON under results/.",
    )
    parser.add_argument(
        "--export",
        action="store_true",
        help="Export the page as CSV under results/.",
    )
    parser.add_argument(
        "--suggest",
        default=None,
        metavar="PARTIAL",
        help="Print search suggestions for a partial term and exit.",
    )
    return parser


def _wants_cli(
    args: argparse.Namespace, parser: argparse.ArgumentParser | None = None
) -> bool:
    """Any option moved off its default means a headless run."""
    parser = parser or _build_parser()
    return any(
        value != parser.get_default(name)
        for name, value in vars(args).items()
        if name != "suggest"
    )


def _run_tui() -> None:
    """Launch the interactive Textual TUI."""
    from src.ui.app import CampusMarketApp

    try:
        app = CampusMarketApp()
        app.run()
    except Exception:
        logger.critical("Fatal error during TUI run", exc_info=True)
        raise
    finally:
        logger.info("campus_market TUI shutting down")


def _run_cli(args: argparse.Namespace) -> None:
    """Run one headless query and exit."""
    from src.cli.runner import QueryOptions, cli_query, split_csv

    options = QueryOptions(
        term=args.term or "",
        categories=split_csv(args.categories),
        conditions=split_csv(args.conditions),
        min_price=args.min_price,
        max_price=args.max_price,
        location=args.location,
        verified=args.verified,
        available=args.available,
        university=args.university,
        free=args.free,
        sort=args.sort,
        page=args.page,
        page_size=args.page_size,
    )
    exit_code = asyncio.run(
        cli_query(
            options,
            output_format=args.output_format,
            save=args.save,
            export=args.export,
        )
    )
    sys.exit(exit_code)


def _run_suggest(partial: str) -> None:
    from src.cli.runner import run_suggest

    sys.exit(run_suggest(partial))


def main() -> None:
    """Route to suggestions, the headless CLI, or the TUI."""
    log_file = setup_logging()
    logger.info("campus_market starting — log file: %s", log_file)

    parser = _build_parser()
    args = parser.parse_args()

    if args.suggest is not None:
        _run_suggest(args.suggest)
    elif _wants_cli(args, parser):
        _run_cli(args)
    else:
        _run_tui()


if __name__ == "__main__":
    main()
