import time
import logging
import threading
from collections import Counter, deque
from dataclasses import asdict
from datetime import datetime
from typing import Any, Dict, Optional

import psutil

from .metrics import CrawlMetrics, SystemMetrics

logger = logging.getLogger(__name__)

MB = 1024 * 1024


class MetricsCollector:
    """Collects and aggregates metrics for one crawl run"""

    def __init__(self):
        self.start_time = time.time()

        self.crawl_metrics = CrawlMetrics()
        self.system_metrics = SystemMetrics()

        # Status code / error message tallies
        self.status_codes: Counter = Counter()
        self.error_messages: Counter = Counter()

        self.process = psutil.Process()
        self.initial_network = psutil.net_io_counters()
        self.response_times: deque = deque(maxlen=100)

        self._lock = threading.Lock()

    def record_page_crawled(self, url: str, response_time: float, status_code: int, content_length: int = 0):
        """Record a page that was fetched and extracted"""
        with self._lock:
            self.crawl_metrics.pages_succeeded += 1
            self.crawl_metrics.bytes_downloaded += content_length
            self.response_times.append(response_time)
            self.status_codes[status_code] += 1
            self._update_rates()
        logger.debug(f"Crawled {url} ({status_code}, {content_length} chars, {response_time:.2f}s)")

    def record_error(self, url: str, error_message: str, status_code: Optional[int] = None,
                     extraction: bool = False):
        """Record a URL that ended in failure"""
        with self._lock:
            self.crawl_metrics.pages_failed += 1
            if extraction:
                self.crawl_metrics.extraction_failures += 1
            self.error_messages[error_message] += 1
            if status_code is not None:
                self.status_codes[status_code] += 1
            self._update_rates()
        logger.debug(f"Failed {url}: {error_message}")

    def record_duplicates_skipped(self, count: int):
        with self._lock:
            self.crawl_metrics.duplicates_skipped += count

    def record_filtered_out(self, count: int):
        with self._lock:
            self.crawl_metrics.filtered_out += count

    def collect_system_metrics(self):
        """Sample host and process resource usage"""
        try:
            self.system_metrics.cpu_percent = psutil.cpu_percent(interval=None)
            memory = psutil.virtual_memory()
            self.system_metrics.memory_used_mb = memory.used / MB
            self.system_metrics.memory_percent = memory.percent

            network = psutil.net_io_counters()
            if network is not None and self.initial_network is not None:
                self.system_metrics.network_recv_mb = (network.bytes_recv - self.initial_network.bytes_recv) / MB

            try:
                self.system_metrics.process_rss_mb = self.process.memory_info().rss / MB
                if hasattr(self.process, 'num_fds'):
                    self.system_metrics.open_files = self.process.num_fds()
                else:
                    self.system_metrics.open_files = len(self.process.open_files())
            except (psutil.NoSuchProcess, psutil.AccessDenied):
                self.system_metrics.open_files = 0

        except (psutil.Error, OSError) as e:
            logger.warning(f"Failed to collect system metrics: {e}")

    def _update_rates(self):
        metrics = self.crawl_metrics
        elapsed_time = time.time() - self.start_time

        if elapsed_time > 0:
            metrics.pages_per_second = metrics.pages_succeeded / elapsed_time

        attempted = metrics.pages_succeeded + metrics.pages_failed
        if attempted > 0:
            metrics.success_rate = metrics.pages_succeeded / attempted * 100

        if self.response_times:
            metrics.avg_response_time = sum(self.response_times) / len(self.response_times)

    def get_current_snapshot(self) -> Dict[str, Any]:
        """Current metrics as a JSON-ready dict"""
        with self._lock:
            self.collect_system_metrics()

            return {
                'timestamp': datetime.now().isoformat(),
                'uptime_seconds': time.time() - self.start_time,
                'crawl_metrics': asdict(self.crawl_metrics),
                'system_metrics': asdict(self.system_metrics),
                'status_codes': {str(code): count for code, count in self.status_codes.items()},
                'top_errors': dict(self.error_messages.most_common(10)),
            }
