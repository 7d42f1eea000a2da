"""
Tests for metrics collection and progress reporting
"""

import json

from pagesweep.crawler.aggregator import aggregate
from pagesweep.crawler.result import CrawlFailure, CrawlSuccess
from pagesweep.extraction.records import PageData
from pagesweep.monitoring import MetricsCollector, ProgressReporter


class TestMetricsCollector:
    def test_records_pages_and_errors(self):
        collector = MetricsCollector()
        collector.record_page_crawled("https://a.com/1", 0.2, 200, 1000)
        collector.record_page_crawled("https://a.com/2", 0.4, 200, 500)
        collector.record_error("https://a.com/3", "Connection refused")
        collector.record_error("https://a.com/4", "HTTP 404: Not Found", 404)
        collector.record_duplicates_skipped(2)
        collector.record_filtered_out(1)

        metrics = collector.crawl_metrics
        assert metrics.pages_succeeded == 2
        assert metrics.pages_failed == 2
        assert metrics.bytes_downloaded == 1500
        assert metrics.success_rate == 50.0
        assert round(metrics.avg_response_time, 2) == 0.3
        assert metrics.duplicates_skipped == 2
        assert metrics.filtered_out == 1

        snapshot = collector.get_current_snapshot()
        assert snapshot['status_codes'] == {'200': 2, '404': 1}
        assert snapshot['top_errors'] == {"Connection refused": 1, "HTTP 404: Not Found": 1}
        # Snapshot must be JSON-serialisable for export
        json.dumps(snapshot)


class TestProgressReporter:
    def test_item_lines(self, capsys):
        reporter = ProgressReporter()
        success = CrawlSuccess(url="https://a.com/1", record=PageData(url="https://a.com/1", status_code=200),
                               status_code=200)
        failure = CrawlFailure(url="https://a.com/2", error_message="Request timed out")

        reporter.report_item(1, 2, success.url, success)
        reporter.report_item(2, 2, failure.url, failure)

        lines = capsys.readouterr().out.splitlines()
        assert lines == [
            "   [1/2]  + 200 https://a.com/1",
            "   [2/2]  x ERR https://a.com/2",
        ]
        assert reporter.last_completed == 2

    def test_quiet_mode(self, capsys):
        reporter = ProgressReporter(verbose=False)
        failure = CrawlFailure(url="https://a.com/2", error_message="x", status_code=500)
        reporter.report_item(1, 1, failure.url, failure)
        assert capsys.readouterr().out == ""

    def test_final_report(self, capsys):
        summary = aggregate([], 0.0, source="empty").summary
        reporter = ProgressReporter()
        reporter.print_progress_report(summary)

        assert "Raw: 0" in capsys.readouterr().out
        assert reporter.get_final_report(summary) == {'summary': summary.to_dict()}
