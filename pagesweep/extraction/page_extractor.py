"""
Generic page extraction: SEO metadata, main content, links, images,
structured data, price and page type
"""

import json
import logging
import re
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import urlparse

from bs4 import BeautifulSoup

from .html_utils import attr, clean_text, make_absolute, parse_html, utc_timestamp
from .pricing import strip_non_price_chars
from .records import PageData

logger = logging.getLogger(__name__)

# Tried in order to find the main content area
CONTENT_SELECTORS = [
    'main',
    'article',
    '.main-content',
    '.content',
    '#content',
    '.page-content',
]

NOISE_TAGS = ['script', 'style', 'noscript', 'iframe', 'svg', 'nav', 'header', 'footer']

MAX_CONTENT_LENGTH = 2000

ARTICLE_PATH = re.compile(r'/a/[0-9]+/')
CATEGORY_PATHS = [re.compile(r'/c/'), re.compile(r'/choose-')]
PRODUCT_PATH = re.compile(r'/p/')
GALLERY_PATH = re.compile(r'gallery', re.IGNORECASE)

ARTICLE_SCHEMA_TYPES = {'article', 'newsarticle', 'blogposting'}


def load_json_ld(soup: BeautifulSoup) -> Optional[Any]:
    """Parse the first JSON-LD block; None when missing or not valid JSON"""
    script = soup.find(
        'script',
        attrs={'type': lambda value: bool(value) and value.strip().lower() == 'application/ld+json'}
    )
    if script is None:
        return None
    raw = script.string if script.string is not None else script.get_text()
    if not raw or not raw.strip():
        return None
    try:
        return json.loads(raw)
    except ValueError as e:
        logger.debug(f"Ignoring unparseable JSON-LD: {e}")
        return None


def resolve_json_ld_object(data: Any) -> Optional[Dict[str, Any]]:
    """A top-level JSON-LD array resolves to its first object"""
    if isinstance(data, dict):
        return data
    if isinstance(data, list):
        for item in data:
            if isinstance(item, dict):
                return item
    return None


def _json_ld_nodes(obj: Dict[str, Any]) -> List[Dict[str, Any]]:
    nodes = [obj]
    graph = obj.get('@graph')
    if isinstance(graph, list):
        nodes.extend(node for node in graph if isinstance(node, dict))
    return nodes


def resolve_offers(obj: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """The offers node of the first JSON-LD node that has one"""
    if not obj:
        return None
    for node in _json_ld_nodes(obj):
        offers = node.get('offers')
        if isinstance(offers, list):
            offers = next((o for o in offers if isinstance(o, dict)), None)
        if isinstance(offers, dict):
            return offers
    return None


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def extract_price(soup: BeautifulSoup, json_ld: Optional[Dict[str, Any]]) -> Tuple[str, str]:
    """
    Resolve (price, currency)

    Cascade: JSON-LD offers -> itemprop="price" -> .price/.product-price text.
    The first source with a non-empty price wins.
    """
    offers = resolve_offers(json_ld)
    if offers:
        price = _as_text(offers.get('price')) or _as_text(offers.get('lowPrice'))
        if price:
            return price, _as_text(offers.get('priceCurrency'))

    currency = (attr(soup.select_one('[itemprop="priceCurrency"]'), 'content') or "").strip()

    element = soup.select_one('[itemprop="price"]')
    if element is not None:
        price = (attr(element, 'content') or "").strip() or clean_text(element.get_text())
        if price:
            return price, currency

    element = soup.select_one('.price, .product-price')
    if element is not None:
        price = strip_non_price_chars(element.get_text())
        if price:
            return price, currency

    return "", currency


def _schema_types(obj: Dict[str, Any]) -> List[str]:
    value = obj.get('@type')
    if isinstance(value, list):
        return [str(v).lower() for v in value]
    if value is None:
        return []
    return [str(value).lower()]


def classify_page(url: str, json_ld: Optional[Dict[str, Any]]) -> str:
    """
    Page type from the URL path first, then the JSON-LD @type

    Returns one of article, category, product, gallery, page.
    """
    path = urlparse(url).path

    if ARTICLE_PATH.search(path):
        return 'article'
    if any(pattern.search(path) for pattern in CATEGORY_PATHS):
        return 'category'
    if PRODUCT_PATH.search(path):
        return 'product'
    if GALLERY_PATH.search(path):
        return 'gallery'

    if json_ld:
        for node in _json_ld_nodes(json_ld):
            types = _schema_types(node)
            if 'product' in types:
                return 'product'
            if ARTICLE_SCHEMA_TYPES.intersection(types):
                return 'article'

    return 'page'


def extract_content(soup: BeautifulSoup) -> Tuple[str, int]:
    """
    Main text content and its word count

    Removes noise elements from ``soup`` (it is modified in place), takes the
    first non-empty content container and falls back to <body>. The text is
    truncated; the word count is not.
    """
    for tag in soup(NOISE_TAGS):
        tag.decompose()

    text = ""
    for selector in CONTENT_SELECTORS:
        element = soup.select_one(selector)
        if element is not None:
            text = clean_text(element.get_text(' '))
            if text:
                break

    if not text:
        container = soup.body if soup.body is not None else soup
        text = clean_text(container.get_text(' '))

    word_count = len(text.split())
    return text[:MAX_CONTENT_LENGTH], word_count


class PageExtractor:
    """Extracts a PageData record from one page"""

    def __init__(self, base_url: str):
        self.base_url = base_url
        self.host = (urlparse(base_url).hostname or "").lower()

    def extract_images(self, soup: BeautifulSoup) -> List[str]:
        """Absolute image URLs, resolved against the page origin"""
        images = []
        for img in soup.find_all('img', src=True):
            absolute_url = make_absolute(attr(img, 'src'), self.base_url, require_host=False)
            if absolute_url:
                images.append(absolute_url)
        return images

    def extract_links(self, soup: BeautifulSoup) -> Tuple[List[str], int]:
        """Internal link hrefs and the number of external links"""
        internal: List[str] = []
        external_count = 0

        for link in soup.find_all('a', href=True):
            href = attr(link, 'href') or ""
            if not href or href.startswith(('#', 'mailto:', 'tel:')):
                continue

            if href.startswith('/') and not href.startswith('//'):
                internal.append(href)
                continue

            try:
                parsed = urlparse(href)
                link_host = (parsed.hostname or "").lower()
            except ValueError:
                continue
            # Relative and protocol-relative hrefs have no scheme
            if not parsed.scheme:
                continue

            if link_host == self.host:
                internal.append(href)
            else:
                external_count += 1

        return internal, external_count

    def extract(self, html: str, status_code: int = 200) -> PageData:
        soup = parse_html(html)

        json_ld_raw = load_json_ld(soup)
        json_ld = resolve_json_ld_object(json_ld_raw)

        title_tag = soup.find('title')
        h1 = soup.find('h1')

        images = self.extract_images(soup)
        internal_links, external_count = self.extract_links(soup)
        price, currency = extract_price(soup, json_ld)

        page = PageData(
            url=self.base_url,
            status_code=status_code,
            title=title_tag.get_text().strip() if title_tag else "",
            h1=h1.get_text().strip() if h1 else "",
            meta_description=(attr(soup.select_one('meta[name="description"]'), 'content') or "").strip(),
            meta_keywords=(attr(soup.select_one('meta[name="keywords"]'), 'content') or "").strip(),
            canonical=(attr(soup.select_one('link[rel="canonical"]'), 'href') or "").strip(),
            og_image=(attr(soup.select_one('meta[property="og:image"]'), 'content') or "").strip(),
            images=images,
            internal_links=internal_links,
            external_links_count=external_count,
            json_ld=json.dumps(json_ld_raw, ensure_ascii=False, separators=(',', ':')) if json_ld is not None else "",
            price=price,
            currency=currency,
            page_type=classify_page(self.base_url, json_ld),
            crawled_at=utc_timestamp(),
        )

        # Content last: it strips noise elements from the tree
        page.content, page.word_count = extract_content(soup)
        return page


def extract_page(html: str, url: str, status_code: int = 200) -> PageData:
    return PageExtractor(url).extract(html, status_code)
