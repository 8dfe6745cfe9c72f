"""
Fetch outcome aggregation.

Joins per-task fetch outcomes back into rank order, drops the ones that
produced no content and applies the per-page content budget.
"""

from ..types import FetchOutcome, FetchReport, ResultPage
from .truncator import trim_content


def _in_rank_order(outcomes: list[FetchOutcome]) -> list[FetchOutcome]:
    return sorted(outcomes, key=lambda outcome: outcome["index"])


def aggregate_outcomes(outcomes: list[FetchOutcome], max_chars: int) -> list[ResultPage]:
    """
    Build result pages from successful fetch outcomes.

    Outcomes are ordered by their original index, not by the order in which
    tasks completed. Empty and failed outcomes are skipped, so the result can
    be shorter than the input.

    Args:
        outcomes: Fetch outcomes in any order
        max_chars: Per-page budget of non-whitespace characters

    Returns:
        Result pages in rank order
    """
    pages: list[ResultPage] = []
    for outcome in _in_rank_order(outcomes):
        if outcome["status"] != "success":
            continue

        record = outcome["record"]
        pages.append(
            ResultPage(
                title=record["title"],
                url=record["url"],
                snippet=record["snippet"],
                content=trim_content(outcome["content"], max_chars),
                html=outcome["html"],
            )
        )

    return pages


def build_fetch_reports(outcomes: list[FetchOutcome]) -> list[FetchReport]:
    """Summarise every outcome, in rank order, without its page payload."""
    return [
        FetchReport(
            index=outcome["index"],
            url=outcome["record"]["url"],
            status=outcome["status"],
            error=outcome["error"],
            duration=outcome["duration"],
            pages_fetched=outcome["pages_fetched"],
        )
        for outcome in _in_rank_order(outcomes)
    ]
