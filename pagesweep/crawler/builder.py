"""
Crawler Builder - Fluent API for building crawl pipelines
"""

from typing import Optional

from ..monitoring import LogManager, MetricsCollector, ProgressReporter
from .config import CrawlConfig
from .pipeline import CrawlPipeline, ItemCallback


class CrawlerBuilder:
    """Builder for creating crawl pipelines"""

    def __init__(self):
        self._settings = {}
        self._progress = False
        self._verbose = True
        self._metrics = False
        self._log_dir: Optional[str] = None
        self._log_level = "INFO"
        self._on_item_done: Optional[ItemCallback] = None

    def concurrency(self, count: int):
        """Set how many pages are fetched in parallel per window"""
        self._settings['concurrency'] = count
        return self

    def delay_ms(self, ms: int):
        """Set the pause between windows"""
        self._settings['delay_ms'] = ms
        return self

    def timeout_ms(self, ms: int):
        """Set the per-request timeout"""
        self._settings['timeout_ms'] = ms
        return self

    def retry_delay_ms(self, ms: int):
        """Set the pause before the single retry of a failed fetch"""
        self._settings['retry_delay_ms'] = ms
        return self

    def max_redirects(self, count: int):
        """Set how many redirects a fetch may follow"""
        self._settings['max_redirects'] = count
        return self

    def url_filter(self, pattern):
        """Only crawl URLs matching this regular expression"""
        self._settings['url_filter'] = pattern
        return self

    def mode(self, mode):
        """Select generic, product or article extraction"""
        self._settings['mode'] = mode
        return self

    def with_progress(self, enable: bool = True, verbose: bool = True):
        """Print per-item progress and a final report"""
        self._progress = enable
        self._verbose = verbose
        return self

    def with_metrics(self, enable: bool = True):
        """Collect crawl and system metrics"""
        self._metrics = enable
        return self

    def with_logging(self, log_dir: str = "crawl_data/logs", log_level: str = "INFO"):
        """Configure console and file logging for the run"""
        self._log_dir = log_dir
        self._log_level = log_level
        return self

    def on_item_done(self, callback: ItemCallback):
        """Call back after every URL completes"""
        self._on_item_done = callback
        return self

    def build_config(self) -> CrawlConfig:
        return CrawlConfig(**self._settings)

    def build(self) -> CrawlPipeline:
        """Build the configured pipeline"""
        config = self.build_config()
        metrics_collector = MetricsCollector() if self._metrics else None
        progress_reporter = ProgressReporter(metrics_collector, verbose=self._verbose) if self._progress else None
        log_manager = LogManager(self._log_dir, self._log_level) if self._log_dir else None

        return CrawlPipeline(
            config=config,
            progress_reporter=progress_reporter,
            metrics_collector=metrics_collector,
            log_manager=log_manager,
            on_item_done=self._on_item_done,
        )
