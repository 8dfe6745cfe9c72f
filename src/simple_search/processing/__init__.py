"""
Result processing components.

This package contains focused components for turning fetch outcomes into
results: budgeted truncation, ordered aggregation and summary formatting.
"""

from .aggregator import aggregate_outcomes, build_fetch_reports
from .summary_formatter import format_summary
from .truncator import trim_content

__all__ = [
    "aggregate_outcomes",
    "build_fetch_reports",
    "format_summary",
    "trim_content",
]
