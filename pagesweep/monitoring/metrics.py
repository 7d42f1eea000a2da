from dataclasses import dataclass


@dataclass
class CrawlMetrics:
    """Counters for one crawl run"""
    pages_succeeded: int = 0
    pages_failed: int = 0
    extraction_failures: int = 0   # subset of pages_failed
    duplicates_skipped: int = 0
    filtered_out: int = 0
    bytes_downloaded: int = 0
    pages_per_second: float = 0.0
    success_rate: float = 0.0
    avg_response_time: float = 0.0


@dataclass
class SystemMetrics:
    """Host and process resource usage, sampled on demand"""
    cpu_percent: float = 0.0
    memory_used_mb: float = 0.0
    memory_percent: float = 0.0
    process_rss_mb: float = 0.0
    network_recv_mb: float = 0.0
    open_files: int = 0
