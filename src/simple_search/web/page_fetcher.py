"""
Single-Page Fetcher

Performs constrained page captures: one seed URL, robots.txt aware.
Redirects are followed and the page they land on is captured.
"""

import asyncio
import logging
from urllib import robotparser
from urllib.parse import urlparse

import httpx
from pydantic import BaseModel, ConfigDict, Field

from ..types import PageCapture

DEFAULT_USER_AGENT = "SpiderBot"

logger = logging.getLogger(__name__)


class FetchError(Exception):
    """Raised when a page fetch cannot be attempted or fails in transport."""


class CrawlConfig(BaseModel):
    """
    Limits applied to a single fetch.

    Only the seed page is ever captured, so max_depth and subdomains bound link
    traversal and never change what a single capture returns. max_pages below 1
    skips the fetch entirely.
    """

    model_config = ConfigDict(frozen=True)

    max_depth: int = Field(default=1, ge=0)
    max_pages: int = Field(default=1, ge=0)
    respect_robots_txt: bool = True
    subdomains: bool = False
    delay: int = Field(default=0, ge=0)  # Milliseconds before each page request
    user_agent: str = DEFAULT_USER_AGENT


class PageFetcher:
    """Fetches the seed page of a URL under a CrawlConfig."""

    # Content types we hand on as markup
    TEXT_CONTENT_TYPES = ("html", "xml", "text/")

    def __init__(
        self,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.timeout = timeout
        self._transport = transport

    async def fetch(self, url: str, config: CrawlConfig) -> list[PageCapture]:
        """
        Capture the page at url.

        Only the seed page is captured. An empty list means the fetch ran but
        produced nothing usable (blocked by robots.txt, error status or
        non-text content). Redirects are followed wherever they lead and the
        final URL is reported.

        Args:
            url: The URL to fetch
            config: Crawl limits for this fetch

        Returns:
            Captured pages, at most one

        Raises:
            FetchError: If the URL is invalid or the request fails in transport
        """
        if not self._is_valid_url(url):
            raise FetchError(
                f"Invalid URL format: {url!r}. Must start with http:// or https://"
            )

        if config.max_pages < 1:
            return []

        headers = {"User-Agent": config.user_agent}
        async with httpx.AsyncClient(
            timeout=self.timeout,
            follow_redirects=True,
            headers=headers,
            transport=self._transport,
        ) as client:
            if config.respect_robots_txt and not await self._is_allowed_by_robots(
                client, url, config.user_agent
            ):
                logger.info(f"robots.txt disallows {url} for {config.user_agent}")
                return []

            if config.delay:
                await asyncio.sleep(config.delay / 1000)

            try:
                response = await client.get(url)
            except httpx.RequestError as e:
                raise FetchError(f"Request failed for {url}: {e}") from e

        final_url = str(response.url)
        if final_url != url:
            logger.debug(f"{url} resolved to {final_url}")

        if response.is_error:
            logger.info(
                f"HTTP {response.status_code} {response.reason_phrase} for {url}"
            )
            return []

        content_type = response.headers.get("content-type", "text/html").lower()
        if not any(kind in content_type for kind in self.TEXT_CONTENT_TYPES):
            logger.info(f"Skipping non-text content at {url} ({content_type})")
            return []

        logger.debug(
            f"Captured {final_url}: status {response.status_code}, "
            f"{len(response.content)} bytes"
        )
        return [
            PageCapture(
                url=final_url, status_code=response.status_code, html=response.text
            )
        ]

    def _is_valid_url(self, url: str) -> bool:
        """Check if URL format is valid."""
        return url.startswith(("http://", "https://")) and bool(urlparse(url).netloc)

    async def _is_allowed_by_robots(
        self, client: httpx.AsyncClient, url: str, user_agent: str
    ) -> bool:
        """Check robots.txt for url. Unreachable robots.txt counts as allowed."""
        parsed = urlparse(url)
        robots_url = f"{parsed.scheme}://{parsed.netloc}/robots.txt"
        parser = robotparser.RobotFileParser(robots_url)

        try:
            response = await client.get(robots_url)
        except httpx.RequestError as e:
            logger.debug(f"Could not read {robots_url}: {e}")
            return True

        if response.status_code in (401, 403):
            parser.disallow_all = True
        elif response.is_error:
            parser.allow_all = True
        else:
            parser.parse(response.text.splitlines())

        return parser.can_fetch(user_agent, url)
