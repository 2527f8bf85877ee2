"""Data model for Quill.

Key classes:
- PostMetadata: Metadata parsed from a post's front matter.
- Post: Metadata plus the rendered HTML body.
- CatalogEntry: Lightweight record written by the catalog build step.
- PaginatedView: One page of an ordered post collection.

All classes are frozen dataclasses; a Post or view handed to a caller is a
snapshot that is never mutated in place.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date
from typing import Any

from .utils import parse_date, split_list

DEFAULT_READING_TIME = 3
# Sentinel for a missing or unparsable publish date.
NO_DATE = date.min


@dataclass(frozen=True)
class PostMetadata:
    """Metadata parsed from a post's front matter.

    Attributes:
        slug: Unique identifier of the post within its corpus.
        title: Title with surrounding quotes removed; empty when absent.
        date: Publish date, NO_DATE when absent or unparsable.
        tags: Tags in authored order.
        summary: Optional summary; None when absent.
        reading_time: Estimated reading time in minutes.
    """

    slug: str = ""
    title: str = ""
    date: date = NO_DATE
    tags: tuple[str, ...] = ()
    summary: str | None = None
    reading_time: int = DEFAULT_READING_TIME


@dataclass(frozen=True)
class Post:
    """A fully processed blog post.

    Attributes:
        slug: Unique identifier of the post.
        title: Post title.
        date: Publish date.
        tags: Tags in authored order.
        summary: Optional summary.
        reading_time: Estimated reading time in minutes.
        body: Markdown body with the duplicate opening heading removed.
        content: Rendered HTML.
    """

    slug: str
    title: str
    date: date
    tags: tuple[str, ...]
    summary: str | None
    reading_time: int
    body: str
    content: str

    @classmethod
    def from_metadata(cls, metadata: PostMetadata, body: str, content: str) -> Post:
        """Combine parsed metadata with a transformed body."""
        return cls(
            slug=metadata.slug,
            title=metadata.title,
            date=metadata.date,
            tags=metadata.tags,
            summary=metadata.summary,
            reading_time=metadata.reading_time,
            body=body,
            content=content,
        )


@dataclass(frozen=True)
class CatalogEntry:
    """A lightweight metadata record produced by the catalog build step.

    Attributes:
        identifier: Post slug, used to fetch the full document.
        title: Post title.
        date: Publish date.
        tags: Tags as a single comma-delimited string.
        description: Summary or description text.
    """

    identifier: str
    title: str = ""
    date: date = NO_DATE
    tags: str = ""
    description: str = ""

    @property
    def tag_list(self) -> list[str]:
        return split_list(self.tags)

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "date": self.date.isoformat(),
            "tags": self.tags,
            "description": self.description,
            "identifier": self.identifier,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CatalogEntry:
        """Build an entry from a JSON object.

        Args:
            data: Mapping with at least an ``identifier`` key.

        Returns:
            CatalogEntry instance.

        Raises:
            KeyError: If ``identifier`` is missing.
        """
        return cls(
            identifier=str(data["identifier"]),
            title=str(data.get("title") or ""),
            date=parse_date(str(data.get("date") or "")) or NO_DATE,
            tags=str(data.get("tags") or ""),
            description=str(data.get("description") or ""),
        )


@dataclass(frozen=True)
class PaginatedView:
    """A window over an ordered collection of posts.

    Attributes:
        items: Posts on the current page.
        current_page: 1-based page number after clamping.
        total_pages: ceil(total_items / page_size); 0 for an empty collection.
        total_items: Number of posts in the whole collection.
        page_size: Maximum posts per page.
    """

    items: tuple[Post, ...] = field(default_factory=tuple)
    current_page: int = 1
    total_pages: int = 0
    total_items: int = 0
    page_size: int = 5

    @property
    def has_previous(self) -> bool:
        return self.current_page > 1

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages

    @classmethod
    def build(cls, posts: Sequence[Post], page: int, page_size: int) -> PaginatedView:
        """Slice an ordered sequence into the requested page.

        The page number is clamped into ``[1, total_pages]`` so out-of-range
        requests land on the nearest valid page.

        Args:
            posts: Ordered posts.
            page: Requested 1-based page number.
            page_size: Maximum posts per page.

        Returns:
            PaginatedView for the clamped page.

        Raises:
            ValueError: If page_size is less than 1.
        """
        if page_size < 1:
            raise ValueError(f"page_size must be at least 1, got {page_size}")
        total_items = len(posts)
        total_pages = math.ceil(total_items / page_size)
        current = max(1, min(page, total_pages))
        start = (current - 1) * page_size
        return cls(
            items=tuple(posts[start : start + page_size]),
            current_page=current,
            total_pages=total_pages,
            total_items=total_items,
            page_size=page_size,
        )
