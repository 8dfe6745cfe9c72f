"""
Simple Search Package

Searches the web for a query, fetches the top results concurrently and
returns their cleaned, budgeted content in rank order.
"""

from simple_search.logger import setup_logging
from simple_search.orchestrator import SearchOrchestrator, create_orchestrator

__version__ = "0.1.0"
__all__ = ["SearchOrchestrator", "create_orchestrator", "setup_logging"]
