"""
Article page extraction: title, body as HTML and text, embedded media
"""

import re
from typing import Optional

from bs4 import BeautifulSoup, Tag

from .html_utils import attr, clean_text, first_text, parse_html, utc_timestamp
from .records import ArticleData, ArticleEmbed

ARTICLE_BODY_SELECTORS = [
    '.userHTMLContent.faqAnswer',
    'article',
    'main',
]

# Consent/privacy layers move the real source out of src, so it is checked second
IFRAME_SOURCE_ATTRIBUTES = ['data-privacy-src', 'src', 'data-src']

YOUTUBE_HOSTS = ['youtube.com', 'youtube-nocookie.com']

_BARE_NUMBER = re.compile(r'^[0-9]+$')


def iframe_source(iframe: Tag) -> str:
    """First non-empty source attribute of an iframe"""
    for name in IFRAME_SOURCE_ATTRIBUTES:
        value = (attr(iframe, name) or "").strip()
        if value:
            return value
    return ""


def detect_embed_type(src: str) -> str:
    if any(host in src for host in YOUTUBE_HOSTS):
        return 'youtube'
    return 'iframe' if src else 'unknown'


def get_dimension(element: Tag, prop: str) -> Optional[str]:
    """
    Width or height of an element: inline style first, then the attribute

    Bare numeric attribute values get a px unit.
    """
    style = attr(element, 'style') or ""
    match = re.search(rf'(?<![\w-]){prop}\s*:\s*([0-9.]+[a-z%]*)', style, re.IGNORECASE)
    if match:
        return match.group(1)

    value = (attr(element, prop) or "").strip()
    if value:
        return f"{value}px" if _BARE_NUMBER.match(value) else value

    return None


def _article_title(soup: BeautifulSoup) -> str:
    title = first_text(soup, 'h1.faqTitle')
    if title:
        return title
    og_title = (attr(soup.select_one("meta[property='og:title']"), 'content') or "").strip()
    if og_title:
        return og_title
    return first_text(soup, 'h1')


def _article_body(soup: BeautifulSoup) -> Optional[Tag]:
    for selector in ARTICLE_BODY_SELECTORS:
        element = soup.select_one(selector)
        if element is not None:
            return element
    return None


def extract_article(html: str, source_url: str) -> ArticleData:
    soup = parse_html(html)

    canonical = (attr(soup.select_one("link[rel='canonical']"), 'href') or "").strip()
    article = ArticleData(
        url=canonical or source_url,
        title=_article_title(soup),
        scraped_at=utc_timestamp(),
    )

    body = _article_body(soup)
    if body is None:
        return article

    for tag in body(['script', 'style']):
        tag.decompose()

    for iframe in body.find_all('iframe'):
        src = iframe_source(iframe)
        article.embeds.append(ArticleEmbed(
            type=detect_embed_type(src),
            src=src,
            width=get_dimension(iframe, 'width'),
            height=get_dimension(iframe, 'height'),
        ))

    article.content_html = body.decode_contents().strip()
    article.content_text = clean_text(body.get_text(' '))
    return article
