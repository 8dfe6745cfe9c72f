"""
Search Package

Provides the search provider used to rank URLs for fetching.
"""

from .web_search import RESULTS_PER_PAGE, BraveSearchProvider

__all__ = ["BraveSearchProvider", "RESULTS_PER_PAGE"]
