"""
Unit tests for WebContentFetcher.

Tests the single-URL fetch task and the concurrent fan-out, using canned page
fetchers so no network access is needed.
"""

import pytest

from simple_search.web.content_fetcher import WebContentFetcher
from simple_search.web.page_fetcher import CrawlConfig, FetchError
from simple_search.web.transformer import TransformConfig


class TestFetchRecord:
    """Test cases for the single-URL fetch task."""

    @pytest.mark.asyncio
    async def test_success_uses_first_page_only(
        self, make_record, fake_page_fetcher, stub_transformer
    ):
        record = make_record(0)
        pages = [
            {"url": record["url"], "status_code": 200, "html": "<p>first</p>"},
            {"url": record["url"] + "/2", "status_code": 200, "html": "<p>second</p>"},
        ]
        transformer = stub_transformer({record["url"]: "# First"})
        fetcher = WebContentFetcher(
            fake_page_fetcher({record["url"]: pages}), transformer
        )

        outcome = await fetcher.fetch_record(0, record)

        assert outcome["status"] == "success"
        assert outcome["content"] == "# First"
        assert outcome["html"] == "<p>first</p>"
        assert outcome["pages_fetched"] == 2
        assert outcome["record"] == record
        assert outcome["error"] is None
        assert outcome["duration"] >= 0

    @pytest.mark.asyncio
    async def test_no_pages_is_empty(self, make_record, fake_page_fetcher, stub_transformer):
        record = make_record(0)
        fetcher = WebContentFetcher(
            fake_page_fetcher({record["url"]: []}), stub_transformer()
        )

        outcome = await fetcher.fetch_record(0, record)

        assert outcome["status"] == "empty"
        assert outcome["content"] == ""
        assert outcome["pages_fetched"] == 0

    @pytest.mark.asyncio
    async def test_fetch_error_is_failed(
        self, make_record, fake_page_fetcher, stub_transformer
    ):
        record = make_record(0)
        fetcher = WebContentFetcher(
            fake_page_fetcher({record["url"]: FetchError("connection refused")}),
            stub_transformer(),
        )

        outcome = await fetcher.fetch_record(3, record)

        assert outcome["status"] == "failed"
        assert outcome["index"] == 3
        assert "connection refused" in outcome["error"]

    @pytest.mark.asyncio
    async def test_transform_error_is_failed(
        self, make_record, fake_page_fetcher, make_capture
    ):
        record = make_record(0)

        class BrokenTransformer:
            def transform(self, page, config):
                raise ValueError("unparseable")

        fetcher = WebContentFetcher(
            fake_page_fetcher({record["url"]: make_capture(record["url"])}),
            BrokenTransformer(),
        )

        outcome = await fetcher.fetch_record(0, record)

        assert outcome["status"] == "failed"
        assert outcome["error"] == "unparseable"

    @pytest.mark.asyncio
    async def test_outcome_holds_its_own_record_copy(
        self, make_record, fake_page_fetcher, stub_transformer, make_capture
    ):
        record = make_record(0)
        fetcher = WebContentFetcher(
            fake_page_fetcher({record["url"]: make_capture(record["url"])}),
            stub_transformer(),
        )

        outcome = await fetcher.fetch_record(0, record)
        record["title"] = "changed"

        assert outcome["record"]["title"] == "Result 0"

    @pytest.mark.asyncio
    async def test_default_crawl_and_transform_configs(
        self, make_record, fake_page_fetcher, stub_transformer, make_capture
    ):
        """Test that each fetch is a single robots-aware page at depth 1."""
        record = make_record(0)
        page_fetcher = fake_page_fetcher({record["url"]: make_capture(record["url"])})
        transformer = stub_transformer()
        fetcher = WebContentFetcher(page_fetcher, transformer)

        await fetcher.fetch_record(0, record)

        (crawl_config,) = page_fetcher.configs
        assert crawl_config == CrawlConfig(
            max_depth=1,
            max_pages=1,
            respect_robots_txt=True,
            subdomains=False,
            delay=0,
            user_agent="SpiderBot",
        )
        (transform_config,) = transformer.configs
        assert transform_config == TransformConfig(
            return_format="markdown", clean_html=True, main_content=True
        )


class TestFetchRecords:
    """Test cases for the concurrent fan-out."""

    @pytest.mark.asyncio
    async def test_outcomes_follow_input_order_not_completion_order(
        self, make_record, fake_page_fetcher, stub_transformer, make_capture
    ):
        records = [make_record(i) for i in range(3)]
        page_fetcher = fake_page_fetcher(
            {record["url"]: make_capture(record["url"]) for record in records},
            delays={records[0]["url"]: 0.1, records[1]["url"]: 0.05, records[2]["url"]: 0},
        )
        fetcher = WebContentFetcher(page_fetcher, stub_transformer())

        outcomes = await fetcher.fetch_records(records)

        assert page_fetcher.completion_order == [r["url"] for r in reversed(records)]
        assert [outcome["index"] for outcome in outcomes] == [0, 1, 2]
        assert [outcome["record"]["url"] for outcome in outcomes] == [
            r["url"] for r in records
        ]

    @pytest.mark.asyncio
    async def test_waits_for_every_task_despite_failures(
        self, make_record, fake_page_fetcher, stub_transformer, make_capture
    ):
        records = [make_record(i) for i in range(4)]
        responses = {
            records[0]["url"]: FetchError("refused"),
            records[1]["url"]: make_capture(records[1]["url"]),
            records[2]["url"]: [],
            records[3]["url"]: make_capture(records[3]["url"]),
        }
        page_fetcher = fake_page_fetcher(
            responses, delays={records[3]["url"]: 0.05, records[0]["url"]: 0}
        )
        fetcher = WebContentFetcher(page_fetcher, stub_transformer())

        outcomes = await fetcher.fetch_records(records)

        assert [outcome["status"] for outcome in outcomes] == [
            "failed",
            "success",
            "empty",
            "success",
        ]
        assert sorted(page_fetcher.completion_order) == sorted(r["url"] for r in records)

    @pytest.mark.asyncio
    async def test_all_tasks_start_together_by_default(
        self, make_record, fake_page_fetcher, stub_transformer, make_capture
    ):
        records = [make_record(i) for i in range(6)]
        page_fetcher = fake_page_fetcher(
            {record["url"]: make_capture(record["url"]) for record in records}
        )
        fetcher = WebContentFetcher(page_fetcher, stub_transformer())

        await fetcher.fetch_records(records)

        assert page_fetcher.peak_in_flight == 6

    @pytest.mark.asyncio
    async def test_max_concurrency_bounds_in_flight_fetches(
        self, make_record, fake_page_fetcher, stub_transformer, make_capture
    ):
        records = [make_record(i) for i in range(6)]
        page_fetcher = fake_page_fetcher(
            {record["url"]: make_capture(record["url"]) for record in records}
        )
        fetcher = WebContentFetcher(page_fetcher, stub_transformer(), max_concurrency=2)

        outcomes = await fetcher.fetch_records(records)

        assert page_fetcher.peak_in_flight == 2
        assert [outcome["index"] for outcome in outcomes] == list(range(6))
        assert all(outcome["status"] == "success" for outcome in outcomes)

    @pytest.mark.asyncio
    async def test_empty_input(self, fake_page_fetcher, stub_transformer):
        page_fetcher = fake_page_fetcher({})
        fetcher = WebContentFetcher(page_fetcher, stub_transformer())

        assert await fetcher.fetch_records([]) == []
        assert page_fetcher.calls == []

    def test_rejects_non_positive_concurrency(self):
        with pytest.raises(ValueError):
            WebContentFetcher(max_concurrency=0)
