"""
Web Content Fetcher

Fans out one fetch task per search record, turns each captured page into
readable text and joins the outcomes back in rank order.
"""

import asyncio
import logging
import time

from ..types import FetchOutcome, FetchStatus, SearchRecord
from .page_fetcher import CrawlConfig, PageFetcher
from .transformer import ContentTransformer, TransformConfig

logger = logging.getLogger(__name__)


class WebContentFetcher:
    """Runs concurrent single-page fetch tasks for ranked search records."""

    def __init__(
        self,
        page_fetcher: PageFetcher | None = None,
        transformer: ContentTransformer | None = None,
        *,
        crawl_config: CrawlConfig | None = None,
        transform_config: TransformConfig | None = None,
        max_concurrency: int | None = None,
    ):
        if max_concurrency is not None and max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1")

        self.page_fetcher = page_fetcher or PageFetcher()
        self.transformer = transformer or ContentTransformer()
        self.crawl_config = crawl_config or CrawlConfig()
        self.transform_config = transform_config or TransformConfig()
        self.max_concurrency = max_concurrency

    async def fetch_record(self, index: int, record: SearchRecord) -> FetchOutcome:
        """
        Fetch a single search record's page and convert it to readable text.

        Never raises for fetch problems: transport errors and transformation
        errors become a "failed" outcome, a fetch without pages becomes "empty".

        Args:
            index: Position of the record in the ranked input
            record: The search record to fetch

        Returns:
            The task's outcome
        """
        url = record["url"]
        start = time.perf_counter()

        try:
            pages = await self.page_fetcher.fetch(url, self.crawl_config)
            if not pages:
                duration = time.perf_counter() - start
                logger.info(f"Fetched {url} in {duration:.2f}s, but got no pages")
                return self._outcome(index, record, "empty", duration)

            page = pages[0]
            content = await asyncio.to_thread(
                self.transformer.transform, page, self.transform_config
            )
        except Exception as e:
            duration = time.perf_counter() - start
            logger.warning(f"Failed to fetch {url} in {duration:.2f}s: {e}")
            return self._outcome(index, record, "failed", duration, error=str(e))

        duration = time.perf_counter() - start
        logger.info(f"Fetched {url} in {duration:.2f}s, got {len(pages)} pages")
        return self._outcome(
            index,
            record,
            "success",
            duration,
            content=content,
            html=page["html"],
            pages_fetched=len(pages),
        )

    async def fetch_records(self, records: list[SearchRecord]) -> list[FetchOutcome]:
        """
        Fetch all records concurrently and wait for every task to finish.

        Args:
            records: Ranked search records

        Returns:
            One outcome per record, in the same order as records
        """
        if not records:
            return []

        logger.info(f"Starting batch fetch of {len(records)} URLs")

        semaphore = (
            asyncio.Semaphore(self.max_concurrency) if self.max_concurrency else None
        )
        tasks = [
            self._run_task(index, record, semaphore)
            for index, record in enumerate(records)
        ]
        results = await asyncio.gather(*tasks, return_exceptions=True)

        outcomes: list[FetchOutcome] = []
        for index, result in enumerate(results):
            if isinstance(result, BaseException):
                if not isinstance(result, Exception):
                    raise result
                logger.warning(f"Fetch task for {records[index]['url']} crashed: {result}")
                outcomes.append(
                    self._outcome(index, records[index], "failed", 0.0, error=str(result))
                )
            else:
                outcomes.append(result)

        success_count = sum(1 for outcome in outcomes if outcome["status"] == "success")
        logger.info(
            f"Batch fetch completed: {success_count} success, "
            f"{len(outcomes) - success_count} without content"
        )
        return outcomes

    async def _run_task(
        self, index: int, record: SearchRecord, semaphore: asyncio.Semaphore | None
    ) -> FetchOutcome:
        if semaphore is None:
            return await self.fetch_record(index, record)
        async with semaphore:
            return await self.fetch_record(index, record)

    def _outcome(
        self,
        index: int,
        record: SearchRecord,
        status: FetchStatus,
        duration: float,
        *,
        content: str = "",
        html: str = "",
        error: str | None = None,
        pages_fetched: int = 0,
    ) -> FetchOutcome:
        """Create a fetch outcome holding a private copy of the record."""
        return FetchOutcome(
            index=index,
            status=status,
            record=SearchRecord(
                title=record["title"], url=record["url"], snippet=record["snippet"]
            ),
            content=content,
            html=html,
            error=error,
            duration=duration,
            pages_fetched=pages_fetched,
        )
