import re
from datetime import datetime, timezone
from typing import Optional
from urllib.parse import urljoin, urlparse

from bs4 import BeautifulSoup, Tag

_WHITESPACE = re.compile(r'\s+')


def parse_html(html: str) -> BeautifulSoup:
    return BeautifulSoup(html or "", 'html.parser')


def clean_text(text: Optional[str]) -> str:
    """Collapse runs of whitespace and trim"""
    if not text:
        return ""
    return _WHITESPACE.sub(' ', text).strip()


def origin_of(url: str) -> str:
    """scheme://host[:port] of an absolute URL, or '' if it has none"""
    parsed = urlparse(url)
    if not parsed.scheme or not parsed.netloc:
        return ""
    return f"{parsed.scheme}://{parsed.netloc}"


def make_absolute(href: Optional[str], base_url: str, require_host: bool = True) -> str:
    """
    Resolve href against the origin of base_url; malformed input gives ''

    With ``require_host=False`` host-less schemes such as data: and blob:
    are kept as they are.
    """
    if not href or not href.strip():
        return ""
    href = href.strip()
    origin = origin_of(base_url)
    try:
        if href.startswith(('http://', 'https://')) or not origin:
            resolved = href
        else:
            resolved = urljoin(origin + '/', href)
        parsed = urlparse(resolved)
    except ValueError:
        return ""
    if not parsed.scheme or (require_host and not parsed.netloc):
        return ""
    return resolved


def attr(element: Optional[Tag], name: str) -> Optional[str]:
    """Attribute value as a string, or None when the element or attribute is missing"""
    if element is None:
        return None
    value = element.get(name)
    if value is None:
        return None
    if isinstance(value, list):  # multi-valued attributes such as class
        value = ' '.join(value)
    return value


def first_text(soup, selector: str) -> str:
    """Whitespace-cleaned text of the first element matching selector"""
    element = soup.select_one(selector)
    return clean_text(element.get_text()) if element is not None else ""


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()
