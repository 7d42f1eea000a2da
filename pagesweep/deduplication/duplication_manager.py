import logging
import re
from typing import Dict, Iterable, List, Optional, Pattern, Set, Union

from .url_canonicalizer import canonical_key

logger = logging.getLogger(__name__)


def dedupe_urls(urls: Iterable[str]) -> List[str]:
    """Remove duplicate URLs, keeping the first occurrence of each in order"""
    seen: Set[str] = set()
    unique: List[str] = []
    for url in urls:
        key = canonical_key(url)
        if key not in seen:
            seen.add(key)
            unique.append(url)
    return unique


def filter_urls(urls: Iterable[str], pattern: Optional[Union[str, Pattern]]) -> List[str]:
    """Keep URLs the pattern matches anywhere; no pattern keeps everything"""
    if pattern is None:
        return list(urls)
    if isinstance(pattern, str):
        pattern = re.compile(pattern)
    return [url for url in urls if pattern.search(url)]


class URLDeduplicator:
    """Deduplication with statistics, used once per crawl run"""

    def __init__(self):
        self.seen_keys: Set[str] = set()
        self.stats = {
            'urls_processed': 0,
            'duplicate_urls': 0,
            'unique_urls': 0
        }

    def is_duplicate_url(self, url: str) -> bool:
        key = canonical_key(url)
        self.stats['urls_processed'] += 1
        if key in self.seen_keys:
            self.stats['duplicate_urls'] += 1
            return True
        self.seen_keys.add(key)
        self.stats['unique_urls'] += 1
        return False

    def dedupe(self, urls: Iterable[str]) -> List[str]:
        """Same contract as dedupe_urls, but remembers keys across calls"""
        unique = []
        for url in urls:
            if self.is_duplicate_url(url):
                logger.debug(f"Skipping duplicate URL: {url}")
                continue
            unique.append(url)
        return unique

    def get_deduplication_stats(self) -> Dict[str, float]:
        processed = self.stats['urls_processed']
        return {
            **self.stats,
            'url_dedup_rate': self.stats['duplicate_urls'] / max(processed, 1) * 100
        }
