"""Front matter parsing for Quill.

A post document starts with a metadata block between two lines of exactly
three hyphens, followed by free-form markdown:

    ---
    title: "Hello"
    date: 2024-06-01
    tags: [python, web]
    ---
    # Hello
    ...

Key functions and classes:
- split_document: Isolates the metadata block from the body.
- FrontMatterParser: Line-oriented parser producing PostMetadata.
- parse_document: Convenience wrapper running both steps.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import replace

from .errors import MalformedDocumentError
from .models import PostMetadata
from .utils import parse_date, parse_non_negative_int, split_list, strip_quotes

DELIMITER = "---"
_LINE_SPLIT_RE = re.compile(r"\r?\n")


def split_document(text: str, slug: str = "") -> tuple[str, str]:
    """Split a raw document into its front matter block and markdown body.

    Args:
        text: Raw document text.
        slug: Identifier used in error messages.

    Returns:
        Tuple of (front matter text, body text).

    Raises:
        MalformedDocumentError: If the opening or closing delimiter is missing.
    """
    lines = _LINE_SPLIT_RE.split(text)
    if not lines or lines[0].rstrip() != DELIMITER:
        raise MalformedDocumentError("expected front matter delimiter '---' on the first line", slug)
    for index in range(1, len(lines)):
        if lines[index].rstrip() == DELIMITER:
            block = "\n".join(lines[1:index])
            body = "\n".join(lines[index + 1 :])
            return block, body
    raise MalformedDocumentError("front matter block is not closed with '---'", slug)


class FrontMatterParser:
    """Parses a front matter block into PostMetadata.

    Each non-empty line is split on its first colon into a key and a value.
    Keys are case-insensitive and unknown keys are ignored. Lines without a
    colon are skipped. When a field and its alias (``date`` and
    ``publishDate``, for example) both appear, the later line wins.

    Invalid values never raise: an unparsable date or reading time keeps the
    field's default.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, Callable[[PostMetadata, str], PostMetadata]] = {
            "title": self._title,
            "date": self._date,
            "publishdate": self._date,
            "tags": self._tags,
            "summary": self._summary,
            "description": self._summary,
            "readingtime": self._reading_time,
            "readingtimeminutes": self._reading_time,
        }

    @property
    def known_keys(self) -> frozenset[str]:
        return frozenset(self._handlers)

    def parse(self, block: str, slug: str = "") -> PostMetadata:
        """Parse a front matter block.

        Args:
            block: Text between the two delimiter lines.
            slug: Identifier to record on the metadata.

        Returns:
            PostMetadata with every recognized field applied.
        """
        metadata = PostMetadata(slug=slug)
        for line in _LINE_SPLIT_RE.split(block):
            if not line.strip() or ":" not in line:
                continue
            key, value = line.split(":", 1)
            handler = self._handlers.get(key.strip().lower())
            if handler is not None:
                metadata = handler(metadata, value.strip())
        return metadata

    @staticmethod
    def _title(metadata: PostMetadata, value: str) -> PostMetadata:
        return replace(metadata, title=strip_quotes(value))

    @staticmethod
    def _date(metadata: PostMetadata, value: str) -> PostMetadata:
        parsed = parse_date(value)
        if parsed is None:
            return metadata
        return replace(metadata, date=parsed)

    @staticmethod
    def _tags(metadata: PostMetadata, value: str) -> PostMetadata:
        return replace(metadata, tags=tuple(split_list(value)))

    @staticmethod
    def _summary(metadata: PostMetadata, value: str) -> PostMetadata:
        return replace(metadata, summary=strip_quotes(value))

    @staticmethod
    def _reading_time(metadata: PostMetadata, value: str) -> PostMetadata:
        parsed = parse_non_negative_int(value)
        if parsed is None:
            return metadata
        return replace(metadata, reading_time=parsed)


def parse_document(
    text: str, slug: str = "", parser: FrontMatterParser | None = None
) -> tuple[PostMetadata, str]:
    """Split a raw document and parse its front matter.

    Args:
        text: Raw document text.
        slug: Identifier of the document.
        parser: Optional custom parser.

    Returns:
        Tuple of (metadata, markdown body).

    Raises:
        MalformedDocumentError: If the document has no delimited front matter.
    """
    block, body = split_document(text, slug)
    metadata = (parser or FrontMatterParser()).parse(block, slug)
    return metadata, body
