import logging
from datetime import datetime
from typing import Any, Dict, Optional

from .metrics_collector import MetricsCollector

logger = logging.getLogger(__name__)


class ProgressReporter:
    """Reports per-item crawl progress and the final crawl report"""

    def __init__(self, metrics_collector: Optional[MetricsCollector] = None, verbose: bool = True):
        self.metrics = metrics_collector
        self.verbose = verbose
        self.last_completed = 0

    def report_item(self, completed: int, total: int, url: str, outcome) -> None:
        """Progress callback for the batch scheduler"""
        self.last_completed = completed
        if outcome.success:
            icon, status = '+', outcome.status_code or ''
        else:
            icon, status = 'x', outcome.status_code or 'ERR'
        line = f"   [{completed}/{total}]  {icon} {status} {url}"
        if self.verbose:
            print(line)
        logger.debug(line.strip())

    def print_progress_report(self, summary=None):
        """Print a progress report for the run"""
        print(f"\n{'='*60}")
        print(f"📊 CRAWL REPORT - {datetime.now().strftime('%H:%M:%S')}")
        print(f"{'='*60}")

        if summary is not None:
            print(f"🌐 URLs:")
            print(f"  Raw: {summary.total_urls_raw}")
            print(f"  After dedup: {summary.total_urls_after_dedup}")
            print(f"  After filter: {summary.total_urls_after_filter}")
            print(f"  Success: {summary.total_success}/{summary.total_crawled} ({summary.success_rate})")
            print(f"  Errors: {summary.total_errors}/{summary.total_crawled}")
            print(f"  Elapsed: {summary.elapsed_time}")

        if self.metrics is None:
            return

        snapshot = self.metrics.get_current_snapshot()
        crawl_metrics = snapshot['crawl_metrics']
        system_metrics = snapshot['system_metrics']

        print(f"\n⚡ Performance:")
        print(f"  Pages/second: {crawl_metrics['pages_per_second']:.2f}")
        print(f"  Avg response time: {crawl_metrics['avg_response_time']:.2f}s")
        bytes_mb = crawl_metrics['bytes_downloaded'] / (1024 * 1024)
        print(f"  Downloaded: {bytes_mb:.2f} MB")

        print(f"\n💻 System Resources:")
        print(f"  CPU: {system_metrics['cpu_percent']:.1f}%")
        print(f"  Memory: {system_metrics['memory_used_mb']:.0f} MB ({system_metrics['memory_percent']:.1f}%)")
        print(f"  Process RSS: {system_metrics['process_rss_mb']:.0f} MB, open files: {system_metrics['open_files']}")

        if snapshot['top_errors']:
            print(f"\n❌ Errors:")
            for message, count in snapshot['top_errors'].items():
                print(f"  {count}x {message}")

    def get_final_report(self, summary=None) -> Dict[str, Any]:
        """Generate final crawl report"""
        report: Dict[str, Any] = {}
        if summary is not None:
            report['summary'] = summary.to_dict()
        if self.metrics is not None:
            report['final_snapshot'] = self.metrics.get_current_snapshot()
        return report
