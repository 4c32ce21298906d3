"""
Field value coercion

Turns raw cell strings into the typed values a record stores:
- text: trimmed, inner whitespace collapsed
- int: first number in the text, or None
- list: split on ',' or ';', parts trimmed, empties dropped, or None
"""

import re
from typing import Any, List, Optional

from ..catalog import INTEGER, LIST


EMAIL_SHAPE = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')
_GROUPED_INT = re.compile(r'^\d{1,3}(?:[.,\s]\d{3})+$')
_FIRST_INT = re.compile(r'\d+')
_LIST_SPLIT = re.compile(r'[,;]')


def normalize_field(value: Any) -> str:
    """
    Trim and collapse whitespace.

    Returns:
        Normalized string, '' for None/blank
    """
    if value is None:
        return ''
    text = str(value).strip()
    if not text:
        return ''
    return ' '.join(text.split())


def parse_int(value: Any) -> Optional[int]:
    """
    Parse an integer leniently.

    Grouped thousands collapse ("1.200" -> 1200); otherwise the first digit
    run wins, so ranges keep their lower bound ("50-100" -> 50).

    Examples:
        >>> parse_int("ca. 250 Mitarbeiter")
        250
        >>> parse_int("n/a") is None
        True
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value

    text = str(value).strip()
    if not text:
        return None
    if _GROUPED_INT.match(text):
        return int(re.sub(r'\D', '', text))

    match = _FIRST_INT.search(text)
    return int(match.group()) if match else None


def split_list(value: Any) -> Optional[List[str]]:
    """
    Split a delimited cell into parts.

    Returns:
        Non-empty trimmed parts, or None when nothing is left
    """
    if value is None:
        return None
    if isinstance(value, (list, tuple)):
        parts = [normalize_field(v) for v in value]
    else:
        parts = [part.strip() for part in _LIST_SPLIT.split(str(value))]
    parts = [part for part in parts if part]
    return parts or None


def coerce(value: str, kind: str) -> Any:
    """Apply the catalog kind's coercion; None means 'absent'."""
    if kind == INTEGER:
        return parse_int(value)
    if kind == LIST:
        return split_list(value)
    text = normalize_field(value)
    return text or None


def looks_like_email(value: Any) -> bool:
    if not value or not isinstance(value, str):
        return False
    return bool(EMAIL_SHAPE.match(value.strip()))


def normalize_email(value: Optional[str]) -> str:
    """Lowercased, trimmed e-mail ('' for None)."""
    return (value or '').strip().lower()
