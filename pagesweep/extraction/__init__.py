"""
Extraction engine - turns raw page markup into typed records
"""

from typing import Union

from .crawl_mode import CrawlMode
from .article_extractor import extract_article
from .labels import normalize_label
from .page_extractor import PageExtractor, classify_page, extract_page
from .pricing import parse_price, price_excl_vat
from .product_extractor import extract_product, extract_product_result
from .records import (
    ArticleData,
    ArticleEmbed,
    PageData,
    ProductData,
    ProductScrapeResult,
    ProductVariant,
)

ExtractedRecord = Union[PageData, ProductScrapeResult, ArticleData]


def extract(mode: CrawlMode, html: str, source_url: str, status_code: int = 200) -> ExtractedRecord:
    """Extract the record shape selected by ``mode``"""
    mode = CrawlMode(mode)
    if mode is CrawlMode.GENERIC:
        return extract_page(html, source_url, status_code)
    if mode is CrawlMode.PRODUCT:
        return extract_product_result(html, source_url)
    if mode is CrawlMode.ARTICLE:
        return extract_article(html, source_url)
    raise ValueError(f"Unsupported crawl mode: {mode}")


__all__ = [
    'extract',
    'CrawlMode',
    'ExtractedRecord',
    'PageExtractor',
    'extract_page',
    'extract_product',
    'extract_product_result',
    'extract_article',
    'classify_page',
    'parse_price',
    'price_excl_vat',
    'normalize_label',
    'PageData',
    'ProductData',
    'ProductScrapeResult',
    'ProductVariant',
    'ArticleData',
    'ArticleEmbed',
]
