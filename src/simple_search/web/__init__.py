"""
Web Fetching Package

Single-page fetching, markup transformation and concurrent fan-out.
"""

from simple_search.web.content_fetcher import WebContentFetcher
from simple_search.web.page_fetcher import CrawlConfig, FetchError, PageFetcher
from simple_search.web.transformer import ContentTransformer, TransformConfig

__all__ = [
    "ContentTransformer",
    "CrawlConfig",
    "FetchError",
    "PageFetcher",
    "TransformConfig",
    "WebContentFetcher",
]
