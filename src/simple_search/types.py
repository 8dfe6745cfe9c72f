"""
Common type definitions for the search pipeline.

TypedDict definitions for search records, fetch outcomes and result pages.
"""

from typing import Literal, Protocol, TypedDict

FetchStatus = Literal["success", "empty", "failed"]


class SearchRecord(TypedDict):
    """Individual ranked result from a search provider."""

    title: str
    url: str
    snippet: str


class PageCapture(TypedDict):
    """Raw page captured by the page fetcher."""

    url: str
    status_code: int
    html: str


class FetchOutcome(TypedDict):
    """Terminal outcome of a single-URL fetch task."""

    index: int  # Position of the record in the ranked input
    status: FetchStatus
    record: SearchRecord
    content: str  # Readable text, empty unless status is "success"
    html: str
    error: str | None
    duration: float
    pages_fetched: int


class FetchReport(TypedDict):
    """Per-record fetch status exposed alongside the result pages."""

    index: int
    url: str
    status: FetchStatus
    error: str | None
    duration: float
    pages_fetched: int


class ResultPage(TypedDict):
    """A fetched and cleaned search result."""

    title: str
    url: str
    snippet: str
    content: str
    html: str


class SearchResults(TypedDict):
    """Complete results of a search-and-fetch run."""

    query: str
    pages: list[ResultPage]
    fetch_reports: list[FetchReport]


class SearchProvider(Protocol):
    """Anything that can turn a query into ranked search records."""

    async def search(self, query: str, pages: int) -> list[SearchRecord]: ...
