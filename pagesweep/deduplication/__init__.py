"""
Deduplication module for URL lists
"""

from .duplication_manager import URLDeduplicator, dedupe_urls, filter_urls
from .url_canonicalizer import canonical_key, is_equivalent

__all__ = [
    'URLDeduplicator',
    'dedupe_urls',
    'filter_urls',
    'canonical_key',
    'is_equivalent'
]
