"""
Search Orchestration Logic

Runs a query through the search provider, fetches every ranked URL
concurrently and aggregates the cleaned pages in rank order.
"""

import logging
import math

from .processing import aggregate_outcomes, build_fetch_reports, format_summary
from .search import RESULTS_PER_PAGE, BraveSearchProvider
from .settings import Settings, get_settings
from .types import SearchProvider, SearchResults
from .web import CrawlConfig, PageFetcher, WebContentFetcher

logger = logging.getLogger(__name__)


def provider_page_count(page_count: int) -> int:
    """Number of provider result pages needed to cover page_count results."""
    return math.ceil(page_count / RESULTS_PER_PAGE)


class SearchOrchestrator:
    """
    Search-and-fetch pipeline.
    The provider and fetcher are injected so either can be swapped or mocked.
    """

    def __init__(
        self,
        *,
        search_provider: SearchProvider,
        web_fetcher: WebContentFetcher,
    ):
        self.search_provider = search_provider
        self.web_fetcher = web_fetcher

    async def search_and_fetch_structured(
        self, query: str, page_count: int, max_chars_per_page: int
    ) -> SearchResults:
        """
        Search for query and fetch the top page_count results.

        Provider errors propagate unchanged. Pages that fail to fetch or come
        back empty are left out of "pages" but remain visible in
        "fetch_reports".

        Args:
            query: The search query
            page_count: Number of ranked results to fetch
            max_chars_per_page: Per-page budget of non-whitespace characters

        Returns:
            Search results with pages in rank order
        """
        if page_count < 0:
            raise ValueError("page_count must not be negative")
        if max_chars_per_page < 0:
            raise ValueError("max_chars_per_page must not be negative")

        provider_pages = provider_page_count(page_count)
        records = await self.search_provider.search(query, provider_pages)
        records = records[:page_count]

        logger.info(f"Found {len(records)} links to fetch (requested: {page_count})")

        outcomes = await self.web_fetcher.fetch_records(records)
        pages = aggregate_outcomes(outcomes, max_chars_per_page)

        logger.info(f"Collected {len(pages)} pages for '{query}'")
        return SearchResults(
            query=query,
            pages=pages,
            fetch_reports=build_fetch_reports(outcomes),
        )

    async def search_and_fetch_summary(
        self, query: str, page_count: int, max_chars_per_page: int
    ) -> str:
        """Search and fetch pages, returning the formatted summary text."""
        results = await self.search_and_fetch_structured(
            query, page_count, max_chars_per_page
        )
        return format_summary(results)


def create_orchestrator(settings: Settings | None = None) -> SearchOrchestrator:
    """Build an orchestrator wired to the Brave provider and the HTTP fetcher."""
    settings = settings or get_settings()

    search_provider = BraveSearchProvider(
        settings.brave_api_key, timeout=settings.search_timeout
    )
    web_fetcher = WebContentFetcher(
        PageFetcher(timeout=settings.fetch_timeout),
        crawl_config=CrawlConfig(
            user_agent=settings.user_agent,
            respect_robots_txt=settings.respect_robots_txt,
        ),
        max_concurrency=settings.max_concurrency,
    )
    return SearchOrchestrator(search_provider=search_provider, web_fetcher=web_fetcher)
