"""
Crawler - bounded-concurrency fetch+extract over a URL list
"""

from .aggregator import aggregate, format_duration
from .builder import CrawlerBuilder
from .config import CrawlConfig
from .fetcher import Fetched, FetchFailed, Fetcher
from .pipeline import CrawlPipeline
from .result import CrawlFailure, CrawlReport, CrawlSuccess, CrawlSummary
from .scheduler import run_in_batches

__all__ = [
    'CrawlPipeline',
    'CrawlerBuilder',
    'CrawlConfig',
    'Fetcher',
    'Fetched',
    'FetchFailed',
    'run_in_batches',
    'aggregate',
    'format_duration',
    'CrawlSuccess',
    'CrawlFailure',
    'CrawlReport',
    'CrawlSummary'
]
