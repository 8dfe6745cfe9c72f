"""
Simple Search - Command Line Entry Point

Searches for a query, fetches the top results and saves each page as
markdown and HTML alongside an aggregated summary.
"""

import argparse
import asyncio
import sys
from pathlib import Path

from dotenv import load_dotenv
from pydantic import ValidationError

from simple_search.logger import setup_logging
from simple_search.orchestrator import create_orchestrator
from simple_search.reports import SUMMARY_FILENAME, save_results
from simple_search.settings import Settings, get_settings
from simple_search.types import FetchReport

DEFAULT_PAGES = 5
DEFAULT_MAX_CHARS = 5000


def non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"{value} is not a non-negative integer")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="simple-search",
        description="A simple search and fetch tool",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  simple-search "rust concurrency"
  simple-search "python asyncio" --pages 10 --max-chars 2000
        """,
    )
    parser.add_argument("query", help="Search query")
    parser.add_argument(
        "-p",
        "--pages",
        type=non_negative_int,
        default=DEFAULT_PAGES,
        help=f"Number of pages to fetch (default: {DEFAULT_PAGES})",
    )
    parser.add_argument(
        "-m",
        "--max-chars",
        type=non_negative_int,
        default=DEFAULT_MAX_CHARS,
        help=f"Maximum characters per page (default: {DEFAULT_MAX_CHARS})",
    )
    parser.add_argument(
        "-o",
        "--output-dir",
        default=None,
        help="Directory for fetched pages (default: fetched_pages)",
    )
    return parser


def describe_fetch(report: FetchReport) -> str:
    """One progress line for a fetch task."""
    if report["status"] == "success":
        return (
            f"Fetched {report['url']} in {report['duration']:.2f}s, "
            f"got {report['pages_fetched']} pages"
        )
    if report["status"] == "empty":
        return f"Fetched {report['url']} in {report['duration']:.2f}s, but got no pages"
    return f"Failed to fetch {report['url']} in {report['duration']:.2f}s: {report['error']}"


async def run(args: argparse.Namespace, settings: Settings) -> int:
    orchestrator = create_orchestrator(settings)

    print(
        f"Searching for: '{args.query}' with {args.pages} pages, "
        f"max {args.max_chars} chars per page"
    )

    results = await orchestrator.search_and_fetch_structured(
        args.query, args.pages, args.max_chars
    )

    print(
        f"Found {len(results['fetch_reports'])} links to fetch (requested: {args.pages})"
    )
    for report in results["fetch_reports"]:
        print(describe_fetch(report))

    output_dir = Path(args.output_dir or settings.output_dir)
    written = save_results(results, output_dir)

    page_files = written[:-1]
    for md_path, html_path in zip(page_files[::2], page_files[1::2]):
        print(f"Saved content to {md_path} and {html_path}")

    print(f"Generated search summary at {output_dir / SUMMARY_FILENAME}")
    print(f"Successfully processed {len(results['pages'])} pages")
    return 0


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)

    try:
        settings = get_settings()
    except ValidationError as e:
        print(f"❌ Invalid configuration: {e}", file=sys.stderr)
        return 1

    setup_logging(settings.log_dir)

    try:
        return asyncio.run(run(args, settings))
    except Exception as e:
        print(f"❌ Error during search: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
