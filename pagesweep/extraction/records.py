"""
Extracted record types, one per crawl mode
"""

from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional


@dataclass
class PageData:
    """Generic page audit record"""
    url: str
    status_code: int
    title: str = ""
    h1: str = ""
    meta_description: str = ""
    meta_keywords: str = ""
    canonical: str = ""
    og_image: str = ""
    content: str = ""
    word_count: int = 0
    images: List[str] = field(default_factory=list)
    internal_links: List[str] = field(default_factory=list)
    external_links_count: int = 0
    json_ld: str = ""
    price: str = ""
    currency: str = ""
    page_type: str = "page"
    crawled_at: str = ""

    @property
    def images_count(self) -> int:
        return len(self.images)

    @property
    def internal_links_count(self) -> int:
        return len(self.internal_links)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['images_count'] = self.images_count
        data['internal_links_count'] = self.internal_links_count
        return data


@dataclass
class BreadcrumbItem:
    title: str
    url: str


@dataclass
class ProductCategory:
    name: str = ""
    url: str = ""


@dataclass
class ProductVariant:
    """
    One purchasable variant of a product

    ``attributes`` holds whatever labelled values the variant row shows
    (colour, article number, size, ...) under canonical keys.
    """
    attributes: Dict[str, str] = field(default_factory=dict)
    price_incl_vat: str = ""
    price_excl_vat: str = ""
    in_stock: bool = False
    status_text: str = ""

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = dict(self.attributes)
        data.update({
            'price_incl_vat': self.price_incl_vat,
            'price_excl_vat': self.price_excl_vat,
            'in_stock': self.in_stock,
            'status_text': self.status_text,
        })
        return data


@dataclass
class ProductData:
    name: str
    url: str
    short_description: str = ""
    long_description: str = ""
    breadcrumb: List[BreadcrumbItem] = field(default_factory=list)
    category: ProductCategory = field(default_factory=ProductCategory)
    parameters: Dict[str, str] = field(default_factory=dict)
    variants: List[ProductVariant] = field(default_factory=list)
    images: List[str] = field(default_factory=list)
    badges: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'url': self.url,
            'short_description': self.short_description,
            'long_description': self.long_description,
            'breadcrumb': [asdict(item) for item in self.breadcrumb],
            'category': asdict(self.category),
            'parameters': dict(self.parameters),
            'variants': [variant.to_dict() for variant in self.variants],
            'images': list(self.images),
            'badges': list(self.badges),
        }


@dataclass
class ProductScrapeResult:
    """A product record with the crawl context it came from"""
    scraped_at: str
    source_url: str
    product: ProductData

    def to_dict(self) -> Dict[str, Any]:
        return {
            'scraped_at': self.scraped_at,
            'source_url': self.source_url,
            'product': self.product.to_dict(),
        }


@dataclass
class ArticleEmbed:
    type: str  # youtube | iframe | unknown
    src: str
    width: Optional[str] = None
    height: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {'type': self.type, 'src': self.src}
        if self.width is not None:
            data['width'] = self.width
        if self.height is not None:
            data['height'] = self.height
        return data


@dataclass
class ArticleData:
    url: str
    title: str = ""
    content_html: str = ""
    content_text: str = ""
    embeds: List[ArticleEmbed] = field(default_factory=list)
    scraped_at: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            'url': self.url,
            'title': self.title,
            'content_html': self.content_html,
            'content_text': self.content_text,
            'embeds': [embed.to_dict() for embed in self.embeds],
            'scraped_at': self.scraped_at,
        }
