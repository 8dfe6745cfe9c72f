"""
Summary formatting.

Renders search results as the tagged plain-text report handed to readers
(and language models) downstream.
"""

from ..types import ResultPage, SearchResults

SUMMARY_HEADER = "This is the search results page.\n\n"


def format_page(page: ResultPage) -> str:
    """Render a single result page as a <page> block."""
    return (
        "<page>\n"
        f"  <title>{page['title']}</title>\n"
        f"  <url>{page['url']}</url>\n"
        f"  <snippet>{page['snippet']}</snippet>\n"
        f"  <content>{page['content']}</content>\n"
        "</page>\n\n"
    )


def format_summary(results: SearchResults) -> str:
    """
    Render all result pages as a single summary document.

    Args:
        results: Search results to render

    Returns:
        The summary text, one <page> block per result page in rank order
    """
    return SUMMARY_HEADER + "".join(format_page(page) for page in results["pages"])
