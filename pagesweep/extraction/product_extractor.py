"""
Product detail page extraction: parameters, variants, images and badges
"""

import copy
from typing import Dict, List, Optional, Tuple

from bs4 import BeautifulSoup, Tag

from .html_utils import attr, clean_text, first_text, make_absolute, parse_html, utc_timestamp
from .labels import normalize_label
from .pricing import price_excl_vat
from .records import (
    BreadcrumbItem,
    ProductCategory,
    ProductData,
    ProductScrapeResult,
    ProductVariant,
)

# Stock indicator colour; the status text itself is not reliable
IN_STOCK_COLOR = '#228b22'

PRICE_SELECTOR = '.price .priceCombTaxValueNumber'
VALUE_SELECTOR = '.s1-buttonRow-txt'


def _labelled_value(element: Tag) -> Tuple[str, str]:
    """
    Split ``LABEL: <span class="s1-buttonRow-txt">VALUE</span>`` into
    (label, value)
    """
    value = first_text(element, VALUE_SELECTOR)
    label_part = copy.copy(element)
    for value_tag in label_part.select(VALUE_SELECTOR):
        value_tag.decompose()
    return clean_text(label_part.get_text()), value


def _collect_attributes(row: Tag, selector: str, fallback_prefix: str,
                        attributes: Dict[str, str]) -> None:
    for element in row.select(selector):
        label, value = _labelled_value(element)
        if not value:
            continue
        key = normalize_label(label) if label else ""
        if not key:
            key = f"{fallback_prefix}_{len(attributes) + 1}"
        attributes[key] = value


def _variant_price(raw: str, variant: ProductVariant) -> None:
    if raw:
        variant.price_incl_vat = raw
        variant.price_excl_vat = price_excl_vat(raw)


def extract_variant(row: Tag) -> ProductVariant:
    variant = ProductVariant()

    _collect_attributes(row, '.s1-buttonRow-val', 'attr', variant.attributes)
    _collect_attributes(row, '.s1-buttonRow-line', 'line', variant.attributes)

    _variant_price(first_text(row, PRICE_SELECTOR), variant)

    stock = row.select_one('.s1-buttonRow-wh')
    if stock is not None:
        style = (attr(stock, 'style') or "").lower()
        variant.in_stock = IN_STOCK_COLOR in style
        variant.status_text = clean_text(stock.get_text())

    return variant


def extract_variants(soup: BeautifulSoup) -> List[ProductVariant]:
    """
    Variant rows of the product

    A page without variant rows but with a displayed price yields one
    implicit variant carrying that price.
    """
    variants = [extract_variant(row) for row in soup.select('.s1-buttonRows .s1-buttonRow')]

    if not variants:
        main_price = first_text(soup, PRICE_SELECTOR)
        if main_price:
            variant = ProductVariant(in_stock=False)
            _variant_price(main_price, variant)
            variants.append(variant)

    return variants


def extract_parameters(soup: BeautifulSoup, source_url: str) -> Tuple[Dict[str, str], ProductCategory]:
    """Parameter table rows keyed by canonical label; the category row is split out"""
    parameters: Dict[str, str] = {}
    category = ProductCategory()

    for row in soup.select('table.tabAdditionalInfo tr'):
        cells = row.find_all(['th', 'td'], recursive=False)
        if len(cells) < 2:
            continue
        raw_key = clean_text(cells[0].get_text())
        key = normalize_label(raw_key)
        value_cell = cells[1]

        if key == 'category':
            link = value_cell.find('a')
            if link is not None:
                category = ProductCategory(
                    name=clean_text(link.get_text()),
                    url=make_absolute(attr(link, 'href'), source_url)
                )
            else:
                category = ProductCategory(name=clean_text(value_cell.get_text()))
            continue

        value = clean_text(value_cell.get_text())
        if key and value:
            parameters[key] = value

    return parameters, category


def extract_breadcrumb(soup: BeautifulSoup, source_url: str) -> List[BreadcrumbItem]:
    breadcrumb = []
    for link in soup.select('ul.breadcrumbs a'):
        title = first_text(link, "span[itemprop='name']") or clean_text(link.get_text())
        if title:
            breadcrumb.append(BreadcrumbItem(title=title, url=make_absolute(attr(link, 'href'), source_url)))
    return breadcrumb


def _canonical_url(soup: BeautifulSoup, source_url: str) -> str:
    canonical: Optional[str] = attr(soup.select_one("link[rel='canonical']"), 'href')
    return canonical.strip() if canonical and canonical.strip() else source_url


def extract_product(html: str, source_url: str) -> ProductData:
    soup = parse_html(html)
    parameters, category = extract_parameters(soup, source_url)

    images = []
    for figure in soup.select('.s1-detailGallery figure[data-full]'):
        image_url = make_absolute(attr(figure, 'data-full'), source_url)
        if image_url:
            images.append(image_url)

    badges = [clean_text(indicator.get_text()) for indicator in soup.select('p.indicators .indicator')]

    return ProductData(
        name=first_text(soup, "h1[itemprop='name']") or first_text(soup, 'h1'),
        url=_canonical_url(soup, source_url),
        short_description=first_text(soup, '.detailShort'),
        long_description=first_text(soup, '.userHTMLContent.ac-product__long-text'),
        breadcrumb=extract_breadcrumb(soup, source_url),
        category=category,
        parameters=parameters,
        variants=extract_variants(soup),
        images=images,
        badges=[badge for badge in badges if badge],
    )


def extract_product_result(html: str, source_url: str) -> ProductScrapeResult:
    return ProductScrapeResult(
        scraped_at=utc_timestamp(),
        source_url=source_url,
        product=extract_product(html, source_url),
    )
