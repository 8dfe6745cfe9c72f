import httpx
from bs4 import BeautifulSoup

from ..types import SearchRecord

BRAVE_SEARCH_URL = "https://api.search.brave.com/res/v1/web/search"

# Results per provider page
RESULTS_PER_PAGE = 10

# Brave rejects offsets above 9
MAX_PAGE_OFFSET = 9


class BraveSearchProvider:
    """Search provider backed by the Brave Search API."""

    def __init__(
        self,
        api_key: str,
        *,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        if not api_key:
            raise ValueError("BRAVE_API_KEY environment variable is required")

        self.api_key = api_key
        self.timeout = timeout
        self._transport = transport

    async def search(self, query: str, pages: int) -> list[SearchRecord]:
        """
        Perform a web search over one or more result pages.

        Args:
            query: The search query string
            pages: Number of provider pages to request (10 results each)

        Returns:
            Search records in rank order

        Raises:
            httpx.HTTPError: If an API request fails
        """
        records: list[SearchRecord] = []
        if pages <= 0:
            return records

        headers = {
            "Accept": "application/json",
            "Accept-Encoding": "gzip",
            "X-Subscription-Token": self.api_key,
        }

        async with httpx.AsyncClient(
            timeout=self.timeout, headers=headers, transport=self._transport
        ) as client:
            for offset in range(min(pages, MAX_PAGE_OFFSET + 1)):
                page_records = await self._search_page(client, query, offset)
                records.extend(page_records)

                # A short page is the last one
                if len(page_records) < RESULTS_PER_PAGE:
                    break

        return records

    async def _search_page(
        self, client: httpx.AsyncClient, query: str, offset: int
    ) -> list[SearchRecord]:
        params = {
            "q": str(query),
            "count": str(RESULTS_PER_PAGE),
            "offset": str(offset),
            "search_lang": "en",
            "country": "US",
            "safesearch": "moderate",
        }

        try:
            response = await client.get(BRAVE_SEARCH_URL, params=params)
            response.raise_for_status()
        except httpx.TimeoutException as e:
            raise httpx.HTTPError("Search request timed out") from e
        except httpx.HTTPStatusError as e:
            raise httpx.HTTPError(
                f"Search API returned status {e.response.status_code}: {e.response.text}"
            ) from e

        data = response.json()

        records: list[SearchRecord] = []
        for result in data.get("web", {}).get("results", []):
            records.append(
                SearchRecord(
                    title=_strip_markup(result.get("title", "")),
                    url=result.get("url", ""),
                    snippet=_strip_markup(result.get("description", "")),
                )
            )
        return records


def _strip_markup(text: str) -> str:
    """Brave highlights query terms with <strong> tags."""
    if "<" not in text:
        return text
    return BeautifulSoup(text, "html.parser").get_text()
