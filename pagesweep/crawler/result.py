"""
Crawl Result - Data structures for crawling results
"""

from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional, Union


@dataclass
class CrawlSuccess:
    """A URL that was fetched and extracted"""
    url: str
    record: Any
    status_code: Optional[int] = None

    @property
    def success(self) -> bool:
        return True

    def to_dict(self) -> Dict[str, Any]:
        return {'success': True, 'data': self.record.to_dict()}


@dataclass
class CrawlFailure:
    """A URL that ended in a fetch or extraction error"""
    url: str
    error_message: str
    status_code: Optional[int] = None

    @property
    def success(self) -> bool:
        return False

    def to_dict(self) -> Dict[str, Any]:
        return {
            'success': False,
            'error': {
                'url': self.url,
                'status_code': self.status_code,
                'error_message': self.error_message,
            }
        }


CrawlOutcome = Union[CrawlSuccess, CrawlFailure]


@dataclass(frozen=True)
class CrawlSummary:
    """Statistics for one crawl run"""
    source: str
    total_urls_raw: int
    total_urls_after_dedup: int
    total_urls_after_filter: int
    total_crawled: int
    total_success: int
    total_errors: int
    success_rate: str
    elapsed_time: str
    elapsed_seconds: float
    crawled_at: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class CrawlReport:
    """Everything one pipeline run produces"""
    outcomes: List[CrawlOutcome]
    successes: List[CrawlSuccess] = field(default_factory=list)
    failures: List[CrawlFailure] = field(default_factory=list)
    summary: Optional[CrawlSummary] = None

    @property
    def records(self) -> List[Any]:
        return [s.record for s in self.successes]
