"""Shared string and date heuristics for metadata checks."""

import math
import re
from datetime import datetime, timedelta, timezone
from typing import Iterable, Optional

BAD_NAME_DELIMITERS = re.compile(r"[,;|\r\n]+")

# Locale-neutral layouts accepted as "this title is really a date"
DATE_FORMATS = (
    "%Y-%m-%d",
    "%Y/%m/%d",
    "%Y.%m.%d",
    "%m/%d/%Y",
    "%m-%d-%Y",
    "%d.%m.%Y",
    "%Y-%m-%d %H:%M",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%dT%H:%M:%S%z",
    "%Y-%m-%dT%H:%M:%S.%f",
    "%Y-%m-%dT%H:%M:%S.%f%z",
    "%m/%d/%Y %H:%M",
    "%m/%d/%Y %H:%M:%S",
    "%B %d, %Y",
    "%B %d %Y",
    "%b %d, %Y",
    "%b %d %Y",
    "%d %B %Y",
    "%d %b %Y",
    "%A, %B %d, %Y",
    "%a, %d %b %Y",
    "%Y %B %d",
)


def split_bad_names(raw: Optional[str]) -> tuple[str, ...]:
    """
    Split a delimited bad-name setting into ordered, unique fragments.

    Args:
        raw: Delimited string, e.g. "auto_scan, VTS_01 | untitled"

    Returns:
        Trimmed non-empty fragments in their original order, without
        case-insensitive duplicates
    """
    if not raw:
        return ()

    fragments: list[str] = []
    seen: set[str] = set()
    for part in BAD_NAME_DELIMITERS.split(raw):
        fragment = part.strip()
        key = fragment.casefold()
        if fragment and key not in seen:
            seen.add(key)
            fragments.append(fragment)
    return tuple(fragments)


def is_blank(text: Optional[str]) -> bool:
    return text is None or not text.strip()


def starts_with_any(text: Optional[str], fragments: Iterable[str]) -> bool:
    """Case-insensitive prefix match against any fragment."""
    if text is None:
        return False
    folded = text.casefold()
    return any(folded.startswith(fragment.casefold()) for fragment in fragments)


def contains_any(text: Optional[str], fragments: Iterable[str]) -> bool:
    """Case-insensitive substring match against any fragment."""
    if text is None:
        return False
    folded = text.casefold()
    return any(fragment.casefold() in folded for fragment in fragments)


def is_date(text: Optional[str]) -> bool:
    """
    Check whether text is a calendar date rather than a title.

    Bare numbers such as "1917" or "2012" are titles, not dates.
    """
    if is_blank(text):
        return False

    candidate = text.strip()
    if candidate.isdigit():
        return False

    for fmt in DATE_FORMATS:
        try:
            datetime.strptime(candidate, fmt)
            return True
        except ValueError:
            continue
    return False


def minutes_since_refresh(last_refreshed: Optional[datetime], now: datetime) -> float:
    """Minutes elapsed since the last refresh; never refreshed counts as infinite."""
    if last_refreshed is None:
        return math.inf
    if last_refreshed.tzinfo is None:
        last_refreshed = last_refreshed.replace(tzinfo=timezone.utc)
    return (now - last_refreshed).total_seconds() / 60


def age_cutoff(max_days: int, now: datetime) -> Optional[datetime]:
    """Midnight UTC of today minus max_days, or None when there is no limit."""
    if max_days == -1:
        return None
    today = now.astimezone(timezone.utc).replace(hour=0, minute=0, second=0, microsecond=0)
    return today - timedelta(days=max_days)
