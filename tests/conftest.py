"""
Shared fixtures for the search pipeline tests.
"""

import asyncio

import pytest

from simple_search.types import PageCapture, SearchRecord


class FakePageFetcher:
    """Page fetcher returning canned captures, with per-URL delays."""

    def __init__(self, responses, delays=None):
        self.responses = responses
        self.delays = delays or {}
        self.calls: list[str] = []
        self.configs = []
        self.completion_order: list[str] = []
        self.in_flight = 0
        self.peak_in_flight = 0

    async def fetch(self, url, config):
        self.calls.append(url)
        self.configs.append(config)
        self.in_flight += 1
        self.peak_in_flight = max(self.peak_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delays.get(url, 0.01))
            result = self.responses[url]
            if isinstance(result, Exception):
                raise result
            return result
        finally:
            self.in_flight -= 1
            self.completion_order.append(url)


class StubTransformer:
    """Transformer that tags the page URL instead of parsing markup."""

    def __init__(self, content_by_url=None):
        self.content_by_url = content_by_url or {}
        self.configs = []

    def transform(self, page, config):
        self.configs.append(config)
        return self.content_by_url.get(page["url"], f"content of {page['url']}")


def capture(url: str, html: str = "<html><body><p>page</p></body></html>"):
    return [PageCapture(url=url, status_code=200, html=html)]


@pytest.fixture
def make_record():
    """Factory for search records."""

    def _make(index: int) -> SearchRecord:
        return SearchRecord(
            title=f"Result {index}",
            url=f"https://site{index}.example.com/page",
            snippet=f"Snippet {index}",
        )

    return _make


@pytest.fixture
def fake_page_fetcher():
    """Factory for FakePageFetcher instances."""
    return FakePageFetcher


@pytest.fixture
def stub_transformer():
    """Factory for StubTransformer instances."""
    return StubTransformer


@pytest.fixture
def make_capture():
    """Factory for single-page capture lists."""
    return capture
