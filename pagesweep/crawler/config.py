import re
from dataclasses import dataclass
from typing import Optional, Pattern, Union

from ..error_handler import CrawlConfigError, RETRY_DELAY_MS
from ..extraction.crawl_mode import CrawlMode


@dataclass(frozen=True)
class CrawlConfig:
    """Configuration for a single crawl run; shared read-only by all tasks"""
    concurrency: int = 5
    delay_ms: int = 500            # pause between windows
    timeout_ms: int = 15000        # per-request timeout
    url_filter: Optional[Union[str, Pattern]] = None
    mode: CrawlMode = CrawlMode.GENERIC
    retry_delay_ms: int = RETRY_DELAY_MS
    max_redirects: int = 5

    def __post_init__(self):
        if isinstance(self.mode, str):
            try:
                object.__setattr__(self, 'mode', CrawlMode(self.mode))
            except ValueError:
                raise CrawlConfigError(f"Unknown crawl mode: {self.mode!r}") from None

        if isinstance(self.concurrency, bool) or not isinstance(self.concurrency, int) or self.concurrency < 1:
            raise CrawlConfigError(f"concurrency must be a positive integer, got {self.concurrency!r}")
        if self.delay_ms < 0:
            raise CrawlConfigError(f"delay_ms must be >= 0, got {self.delay_ms!r}")
        if self.timeout_ms <= 0:
            raise CrawlConfigError(f"timeout_ms must be > 0, got {self.timeout_ms!r}")
        if self.retry_delay_ms < 0:
            raise CrawlConfigError(f"retry_delay_ms must be >= 0, got {self.retry_delay_ms!r}")
        if self.max_redirects < 0:
            raise CrawlConfigError(f"max_redirects must be >= 0, got {self.max_redirects!r}")

        if isinstance(self.url_filter, str):
            try:
                object.__setattr__(self, 'url_filter', re.compile(self.url_filter))
            except re.error as e:
                raise CrawlConfigError(f"Invalid URL filter {self.url_filter!r}: {e}") from None

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000
