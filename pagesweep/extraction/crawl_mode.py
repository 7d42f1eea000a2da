from enum import Enum


class CrawlMode(Enum):
    """Which record shape the extraction engine produces for each page"""
    GENERIC = "generic"     # PageData: SEO-style audit of any page
    PRODUCT = "product"     # ProductScrapeResult: product detail pages
    ARTICLE = "article"     # ArticleData: CMS article pages with embeds
