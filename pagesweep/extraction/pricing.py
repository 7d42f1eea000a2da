"""
Price parsing for the comma-decimal locale used on product pages
("770 €", "1 250,00 €", "1.250,00 €")
"""

import re
from typing import Optional

VAT_RATE = 1.21

_NON_PRICE_CHARS = re.compile(r'[^0-9.,]')
# A period followed by exactly three digits and then a comma or the end
_THOUSANDS_PERIOD = re.compile(r'\.(?=[0-9]{3}(?:,|$))')
_LEADING_NUMBER = re.compile(r'[0-9]+(?:\.[0-9]*)?|\.[0-9]+')


def strip_non_price_chars(raw: Optional[str]) -> str:
    return _NON_PRICE_CHARS.sub('', raw or '')


def parse_price(raw: Optional[str]) -> Optional[float]:
    """
    Parse a displayed price into a number

    Returns:
        The price, or None when the string holds no number. Never 0 for junk.
    """
    digits = strip_non_price_chars(raw)
    if not digits:
        return None
    normalized = _THOUSANDS_PERIOD.sub('', digits).replace(',', '.', 1)
    match = _LEADING_NUMBER.match(normalized)
    if not match:
        return None
    return float(match.group())


def format_price(value: float) -> str:
    return f"{value:.2f}"


def price_excl_vat(raw: Optional[str]) -> str:
    """Price without VAT as a two-decimal string, or '' when unparseable"""
    value = parse_price(raw)
    if value is None:
        return ""
    return format_price(value / VAT_RATE)
