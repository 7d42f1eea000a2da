"""
PageSweep - crawl a site's URL list and extract structured page records
"""

from .crawler import CrawlConfig, CrawlerBuilder, CrawlPipeline
from .deduplication import dedupe_urls, filter_urls
from .error_handler import CrawlConfigError, CrawlError, FetchError, FetchErrorKind, with_retry
from .extraction import CrawlMode, extract

__version__ = "1.0.0"

__all__ = [
    'CrawlConfig',
    'CrawlerBuilder',
    'CrawlPipeline',
    'CrawlMode',
    'dedupe_urls',
    'filter_urls',
    'extract',
    'with_retry',
    'CrawlError',
    'CrawlConfigError',
    'FetchError',
    'FetchErrorKind'
]
