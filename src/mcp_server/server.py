"""
Simple Search MCP Server Implementation

Exposes the search-and-fetch pipeline as an MCP tool returning the tagged
search results summary.
"""

from mcp.server.fastmcp import FastMCP

from simple_search import create_orchestrator, setup_logging
from simple_search.settings import get_settings

# Create the FastMCP server instance
mcp = FastMCP("Simple Search")


@mcp.tool()
async def search_and_fetch(query: str, pages: int = 5, max_chars: int = 5000) -> str:
    """
    Search the web and return the cleaned content of the top results.

    Each result is wrapped in a <page> block with <title>, <url>, <snippet>
    and <content> tags. Pages that could not be fetched are left out, so fewer
    blocks than requested may come back.

    Args:
        query: The search query string
        pages: Number of top results to fetch (default: 5)
        max_chars: Maximum non-whitespace characters of content per page (default: 5000)

    Returns:
        The search results summary
    """
    orchestrator = create_orchestrator()
    return await orchestrator.search_and_fetch_summary(query, pages, max_chars)


def main() -> None:
    setup_logging(get_settings().log_dir)
    mcp.run()


if __name__ == "__main__":
    main()
