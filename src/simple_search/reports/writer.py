"""
Result Persistence Module
Writes fetched pages and the search summary to an output directory
"""

from pathlib import Path

from ..processing import format_summary
from ..types import SearchResults

SUMMARY_FILENAME = "search_summary.txt"


def save_results(results: SearchResults, output_dir: str | Path) -> list[Path]:
    """
    Save every result page as markdown and raw HTML, plus the summary.

    Args:
        results: Search results to save
        output_dir: Directory to write into, created if missing

    Returns:
        Paths written, page files first and the summary last
    """
    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)

    written: list[Path] = []
    for index, page in enumerate(results["pages"]):
        md_path = output_path / f"page_{index}.md"
        html_path = output_path / f"page_{index}.html"

        md_path.write_text(page["content"], encoding="utf-8")
        html_path.write_text(page["html"], encoding="utf-8")
        written.extend([md_path, html_path])

    summary_path = output_path / SUMMARY_FILENAME
    summary_path.write_text(format_summary(results), encoding="utf-8")
    written.append(summary_path)

    return written
