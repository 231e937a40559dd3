"""
Helpers that turn loosely-typed Open Library fragments into ``Book`` fields.

Every function here is pure and total: unexpected input degrades to an
empty or sentinel value instead of raising.
"""

from __future__ import annotations

import re
from typing import Any, Iterable, List, Mapping, Optional

from .schemas import DescriptionValue


UNKNOWN_AUTHOR = "Unknown"
NO_YEAR = -1

WORK_PREFIX = "/works/"
AUTHOR_PREFIX = "/authors/"

# A run of exactly four digits, not part of a longer number.
_YEAR_RE = re.compile(r"(?<!\d)(\d{4})(?!\d)")


def extract_description(raw: Any) -> str:
    """Return the description text from either of Open Library's shapes.

    >>> extract_description("A novel")
    'A novel'
    >>> extract_description({"type": "/type/text", "value": "A novel"})
    'A novel'
    >>> extract_description(None)
    ''
    """
    if isinstance(raw, str):
        return raw
    if isinstance(raw, DescriptionValue):
        value = raw.value
    elif isinstance(raw, Mapping):
        value = raw.get("value")
    else:
        return ""
    return value if isinstance(value, str) else ""


def join_author_names(names: Optional[Iterable[Any]]) -> str:
    """Join search-result author names, or ``"Unknown"`` when there are none."""
    cleaned = [n for n in names or [] if isinstance(n, str)]
    return ", ".join(cleaned) if cleaned else UNKNOWN_AUTHOR


def extract_author_ids(entries: Optional[Iterable[Any]]) -> List[str]:
    """Pull bare author ids out of a work's ``authors`` list.

    Each entry looks like ``{"author": {"key": "/authors/OL1A"}, ...}``.
    Entries missing any level of that structure are skipped.
    """
    ids: List[str] = []
    for entry in entries or []:
        if not isinstance(entry, Mapping):
            continue
        author = entry.get("author")
        if not isinstance(author, Mapping):
            continue
        key = author.get("key")
        if isinstance(key, str) and key:
            ids.append(key.replace(AUTHOR_PREFIX, ""))
    return ids


def parse_published_year(text: Optional[str]) -> int:
    """First four-digit run in a free-text date, or ``-1``.

    >>> parse_published_year("March 1st, 1998")
    1998
    >>> parse_published_year("unknown")
    -1
    """
    if not text or not isinstance(text, str):
        return NO_YEAR
    m = _YEAR_RE.search(text)
    return int(m.group(1)) if m else NO_YEAR


def strip_work_prefix(key: str) -> str:
    return key.replace(WORK_PREFIX, "")
