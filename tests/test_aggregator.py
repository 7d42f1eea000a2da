"""
Tests for outcome aggregation and the run summary
"""

import pytest

from pagesweep.crawler.aggregator import aggregate, format_duration, format_success_rate
from pagesweep.crawler.result import CrawlFailure, CrawlSuccess
from pagesweep.extraction.records import PageData


def _success(url):
    return CrawlSuccess(url=url, record=PageData(url=url, status_code=200), status_code=200)


def _failure(url, message="HTTP 404: Not Found", status_code=404):
    return CrawlFailure(url=url, error_message=message, status_code=status_code)


class TestFormatDuration:
    def test_seconds_only(self):
        assert format_duration(0) == "0s"
        assert format_duration(45.9) == "45s"

    def test_minutes(self):
        assert format_duration(60) == "1m 0s"
        assert format_duration(150) == "2m 30s"
        assert format_duration(3725) == "62m 5s"


class TestAggregate:
    def test_empty_run(self):
        report = aggregate([], 0.0)

        assert report.successes == []
        assert report.failures == []
        assert report.summary.total_crawled == 0
        assert report.summary.success_rate == "0%"
        assert report.summary.elapsed_time == "0s"

    def test_partitions_in_order(self):
        outcomes = [_success("https://a.com/1"), _failure("https://a.com/2"), _success("https://a.com/3")]
        report = aggregate(outcomes, 2.5, total_urls_raw=5, total_urls_after_dedup=4,
                           total_urls_after_filter=3, source="list.txt")

        assert [s.url for s in report.successes] == ["https://a.com/1", "https://a.com/3"]
        assert [f.url for f in report.failures] == ["https://a.com/2"]
        assert [r.url for r in report.records] == ["https://a.com/1", "https://a.com/3"]

        summary = report.summary
        assert summary.source == "list.txt"
        assert summary.total_urls_raw == 5
        assert summary.total_urls_after_dedup == 4
        assert summary.total_urls_after_filter == 3
        assert summary.total_crawled == 3
        assert summary.total_success == 2
        assert summary.total_errors == 1
        assert summary.success_rate == "66.7%"
        assert summary.elapsed_seconds == 2.5
        assert summary.crawled_at

    def test_counts_default_to_outcomes(self):
        summary = aggregate([_failure("https://a.com/1")], 0.1).summary
        assert summary.total_urls_raw == 1
        assert summary.total_urls_after_filter == 1
        assert summary.success_rate == "0.0%"

    def test_rejects_unknown_outcomes(self):
        with pytest.raises(TypeError):
            aggregate(["not an outcome"], 0.0)

    def test_outcome_dicts(self):
        assert _success("https://a.com/1").to_dict()['success'] is True
        assert _failure("https://a.com/2").to_dict() == {
            'success': False,
            'error': {
                'url': "https://a.com/2",
                'status_code': 404,
                'error_message': "HTTP 404: Not Found",
            }
        }


def test_format_success_rate():
    assert format_success_rate(0, 0) == "0%"
    assert format_success_rate(1, 2) == "50.0%"
    assert format_success_rate(3, 3) == "100.0%"
