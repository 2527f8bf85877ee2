"""Utility functions for Quill.

This module contains small string and date helpers used by the parsers
and the catalog builder.

Key functions:
    strip_quotes: Remove surrounding quote characters from a value.
    split_list: Split a bracketed or comma-separated list.
    parse_date: Parse a calendar date without depending on the locale.
    parse_non_negative_int: Parse a non-negative integer or return None.
    extract_date_from_name: Extract date from filename prefix.
    is_markdown: Check if a path is a Markdown file.
    is_internal_path: Check if a path has an underscore-prefixed component.
"""

from __future__ import annotations

import re
from datetime import date, datetime
from pathlib import Path

QUOTE_CHARS = "\"'"

# Tried in order after ISO 8601. Month names are matched against the fixed
# English table below rather than strptime's locale-dependent %B/%b.
_NUMERIC_DATE_RE = (
    re.compile(r"^(?P<y>\d{4})[/-](?P<m>\d{1,2})[/-](?P<d>\d{1,2})$"),
    re.compile(r"^(?P<d>\d{1,2})\.(?P<m>\d{1,2})\.(?P<y>\d{4})$"),
    re.compile(r"^(?P<m>\d{1,2})/(?P<d>\d{1,2})/(?P<y>\d{4})$"),
)
_NAMED_DATE_RE = (
    re.compile(r"^(?P<month>[A-Za-z]+)\.?\s+(?P<d>\d{1,2}),?\s+(?P<y>\d{4})$"),
    re.compile(r"^(?P<d>\d{1,2})\s+(?P<month>[A-Za-z]+)\.?,?\s+(?P<y>\d{4})$"),
)
_MONTHS = {
    name: index
    for index, names in enumerate(
        [
            ("january", "jan"),
            ("february", "feb"),
            ("march", "mar"),
            ("april", "apr"),
            ("may",),
            ("june", "jun"),
            ("july", "jul"),
            ("august", "aug"),
            ("september", "sep", "sept"),
            ("october", "oct"),
            ("november", "nov"),
            ("december", "dec"),
        ],
        start=1,
    )
    for name in names
}


def strip_quotes(value: str) -> str:
    """Remove surrounding single or double quotes from a value.

    Args:
        value: Raw value, possibly quoted.

    Returns:
        The value with leading and trailing quote characters removed.

    Examples:
        >>> strip_quotes('"Hello"')
        'Hello'
    """
    return value.strip().strip(QUOTE_CHARS)


def split_list(value: str) -> list[str]:
    """Split a list written as ``[a, b, c]`` or ``a, b, c``.

    Each element is trimmed and quote-stripped; empty elements are dropped.

    Args:
        value: Raw list value.

    Returns:
        List of elements in authored order.

    Examples:
        >>> split_list("[python, 'web']")
        ['python', 'web']
    """
    text = value.strip()
    if text.startswith("[") and text.endswith("]"):
        text = text[1:-1]
    items = (strip_quotes(part) for part in text.split(","))
    return [item for item in items if item]


def parse_date(value: str) -> date | None:
    """Parse a calendar date independently of the current locale.

    Accepted forms are ISO 8601 dates and datetimes (``2024-06-01``,
    ``2024-06-01T10:00:00Z``), ``2024/06/01``, ``01.06.2024``,
    ``06/01/2024`` (month first) and English month names
    (``June 1, 2024``, ``1 Jun 2024``). Surrounding quotes are ignored.

    Args:
        value: Raw date string.

    Returns:
        The parsed date, or None if the value is not recognised.
    """
    text = strip_quotes(value)
    if not text:
        return None

    iso = text[:-1] + "+00:00" if text.endswith("Z") else text
    try:
        return datetime.fromisoformat(iso).date()
    except ValueError:
        pass

    for pattern in _NUMERIC_DATE_RE:
        match = pattern.match(text)
        if match:
            return _safe_date(match.group("y"), match.group("m"), match.group("d"))

    for pattern in _NAMED_DATE_RE:
        match = pattern.match(text)
        if match:
            month = _MONTHS.get(match.group("month").lower())
            if month is None:
                return None
            return _safe_date(match.group("y"), month, match.group("d"))
    return None


def _safe_date(year, month, day) -> date | None:
    try:
        return date(int(year), int(month), int(day))
    except ValueError:
        return None


def parse_non_negative_int(value: str) -> int | None:
    """Parse a non-negative integer.

    Args:
        value: Raw value, possibly quoted.

    Returns:
        The integer, or None if the value is not a non-negative integer.
    """
    text = strip_quotes(value)
    if not (text.isascii() and text.isdigit()):
        return None
    return int(text)


def extract_date_from_name(name: str) -> date | None:
    """Extract a date from a filename with YYYY-MM-DD prefix.

    Args:
        name: Filename stem (without extension).

    Returns:
        date object if a valid date prefix is found, None otherwise.

    Examples:
        >>> extract_date_from_name("2024-01-15-hello-world")
        datetime.date(2024, 1, 15)

        >>> extract_date_from_name("hello-world")
    """
    parts = name.split("-")
    if len(parts) >= 3 and all(p.isdigit() for p in parts[:3]):
        return _safe_date(parts[0], parts[1], parts[2])
    return None


def is_markdown(path: Path) -> bool:
    """Check if a path is a Markdown file.

    Args:
        path: Path to check.

    Returns:
        True if the file has .md extension (case-insensitive).
    """
    return path.suffix.lower() == ".md"


def is_internal_path(path: Path) -> bool:
    """Check if a path is internal (contains components starting with _).

    Internal paths include drafts and partials that are not published.

    Args:
        path: Path to check.

    Returns:
        True if any path component starts with underscore.
    """
    return any(part.startswith("_") for part in path.parts)
