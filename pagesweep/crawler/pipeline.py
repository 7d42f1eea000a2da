"""
Crawl Pipeline - dedupe, filter, scheduled fetch+extract and aggregation
"""

import asyncio
import time
import logging
from typing import Any, Callable, Iterable, Optional

import aiohttp

from ..deduplication import URLDeduplicator, filter_urls
from ..error_handler import CrawlConfigError
from ..extraction import extract
from ..monitoring import LogManager, MetricsCollector, ProgressReporter
from .aggregator import aggregate
from .config import CrawlConfig
from .fetcher import FetchFailed, Fetcher
from .result import CrawlFailure, CrawlOutcome, CrawlReport, CrawlSuccess
from .scheduler import run_in_batches

logger = logging.getLogger(__name__)

ItemCallback = Callable[[int, int, str, CrawlOutcome], Any]


class CrawlPipeline:
    """
    Runs one crawl over a URL list

    URL list -> dedupe -> filter -> windows of fetch+extract -> report.
    Monitoring pieces are optional and attached by the builder.
    """

    def __init__(self, config: Optional[CrawlConfig] = None,
                 progress_reporter: Optional[ProgressReporter] = None,
                 metrics_collector: Optional[MetricsCollector] = None,
                 log_manager: Optional[LogManager] = None,
                 on_item_done: Optional[ItemCallback] = None):
        self.config = config or CrawlConfig()
        self.progress_reporter = progress_reporter
        self.metrics_collector = metrics_collector
        self.log_manager = log_manager
        self.on_item_done = on_item_done

    async def crawl_url(self, fetcher: Fetcher, url: str) -> CrawlOutcome:
        """Fetch and extract one URL; every error becomes a CrawlFailure"""
        fetched = await fetcher.fetch_outcome(url)

        if isinstance(fetched, FetchFailed):
            if self.metrics_collector:
                self.metrics_collector.record_error(url, fetched.message, fetched.status_code)
            return CrawlFailure(url=url, error_message=fetched.message, status_code=fetched.status_code)

        try:
            record = extract(self.config.mode, fetched.body, url, fetched.status_code)
        except Exception as e:
            logger.error(f"Failed to extract data from {url}: {e}")
            message = f"Extraction failed: {e}"
            if self.metrics_collector:
                self.metrics_collector.record_error(url, message, fetched.status_code, extraction=True)
            return CrawlFailure(url=url, error_message=message, status_code=fetched.status_code)

        if self.metrics_collector:
            self.metrics_collector.record_page_crawled(
                url, fetched.response_time, fetched.status_code, len(fetched.body)
            )
        return CrawlSuccess(url=url, record=record, status_code=fetched.status_code)

    def _item_done(self, completed: int, total: int, url: str, outcome: CrawlOutcome) -> None:
        if self.progress_reporter:
            self.progress_reporter.report_item(completed, total, url, outcome)
        if self.on_item_done:
            self.on_item_done(completed, total, url, outcome)

    async def run(self, urls: Iterable[str], source: str = "",
                  cancel_event: Optional[asyncio.Event] = None,
                  session: Optional[aiohttp.ClientSession] = None) -> CrawlReport:
        """
        Crawl the URL list

        Raises:
            CrawlConfigError: if the URL list is empty
        """
        raw_urls = list(urls)
        if not raw_urls:
            raise CrawlConfigError("No URLs to crawl")

        deduplicator = URLDeduplicator()
        deduped = deduplicator.dedupe(raw_urls)
        if len(deduped) < len(raw_urls):
            logger.info(f"After dedup: {len(deduped)} unique URLs (of {len(raw_urls)})")

        targets = filter_urls(deduped, self.config.url_filter)
        if self.config.url_filter is not None:
            logger.info(f"After filter ({self.config.url_filter.pattern}): {len(targets)} URLs")

        if self.metrics_collector:
            self.metrics_collector.record_duplicates_skipped(len(raw_urls) - len(deduped))
            self.metrics_collector.record_filtered_out(len(deduped) - len(targets))

        counts = {
            'total_urls_raw': len(raw_urls),
            'total_urls_after_dedup': len(deduped),
            'total_urls_after_filter': len(targets),
            'source': source,
        }

        if not targets:
            logger.info("Nothing to crawl")
            return aggregate([], 0.0, **counts)

        logger.info(f"Crawling {len(targets)} pages "
                    f"(mode: {self.config.mode.value}, concurrency: {self.config.concurrency})")

        if self.log_manager:
            self.log_manager.log_crawl_event(
                'run_started', source=source, urls=len(targets),
                mode=self.config.mode.value, concurrency=self.config.concurrency
            )

        start_time = time.monotonic()
        if session is None:
            async with aiohttp.ClientSession() as own_session:
                outcomes = await self._run_batches(own_session, targets, cancel_event)
        else:
            outcomes = await self._run_batches(session, targets, cancel_event)
        elapsed = time.monotonic() - start_time

        report = aggregate(outcomes, elapsed, **counts)
        summary = report.summary
        logger.info(f"Done in {summary.elapsed_time}: {summary.total_success}/{summary.total_crawled} "
                    f"succeeded ({summary.success_rate}), {summary.total_errors} failed")

        if self.progress_reporter:
            self.progress_reporter.print_progress_report(summary)

        if self.log_manager:
            if self.progress_reporter:
                final_report = self.progress_reporter.get_final_report(summary)
            else:
                final_report = {'summary': summary.to_dict()}
            self.log_manager.export_metrics_json(final_report, "final_crawl_metrics.json")
            self.log_manager.log_crawl_event('run_finished', **summary.to_dict())

        return report

    async def _run_batches(self, session: aiohttp.ClientSession, urls, cancel_event):
        fetcher = Fetcher(session, self.config)
        return await run_in_batches(
            urls,
            self.config.concurrency,
            self.config.delay_ms,
            lambda url: self.crawl_url(fetcher, url),
            self._item_done,
            cancel_event
        )

    def crawl(self, urls: Iterable[str], source: str = "") -> CrawlReport:
        """Blocking wrapper around run()"""
        return asyncio.run(self.run(urls, source=source))
