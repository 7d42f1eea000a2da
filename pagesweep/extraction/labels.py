import re
from typing import Dict

# Known parameter labels and the keys they map to
PARAM_KEY_MAP: Dict[str, str] = {
    'category': 'category',
    'diameter': 'diameter',
    'height': 'height',
    'weight': 'weight',
    'number of bulbs': 'bulb_count',
    'max wattage/socket': 'max_wattage',
    'max. wattage/socket': 'max_wattage',
    'material': 'material',
    'color': 'color',
    'colour': 'color',
    'bulb type': 'bulb_type',
    'bulb base': 'bulb_base',
    'ip rating': 'ip_rating',
    'voltage': 'voltage',
    'art.no.': 'art_no',
    'art. no.': 'art_no',
}

_NON_ALNUM = re.compile(r'[^a-z0-9]+')


def to_snake_case(text: str) -> str:
    """'Max. Wattage / Socket' -> 'max_wattage_socket'"""
    return _NON_ALNUM.sub('_', text.lower()).strip('_')


def normalize_label(raw: str) -> str:
    """
    Canonical key for a human-readable field label

    The known-label table is consulted first (ignoring case, surrounding
    whitespace and a trailing colon); anything else is snake-cased.
    """
    lookup = raw.lower().strip()
    if lookup.endswith(':'):
        lookup = lookup[:-1].strip()
    if lookup in PARAM_KEY_MAP:
        return PARAM_KEY_MAP[lookup]
    return to_snake_case(raw)
