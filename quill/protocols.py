"""Protocol definitions for Quill.

The repository depends on these interfaces rather than on concrete
classes, so the source of raw markdown and the source of the post list can
be swapped (filesystem, HTTP, in-memory fakes in tests).
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .models import CatalogEntry


@runtime_checkable
class PostFetcher(Protocol):
    """Protocol for retrieving the raw markdown of a post."""

    @abstractmethod
    def fetch(self, slug: str) -> str:
        """Return the raw document text for a post.

        Args:
            slug: Post identifier.

        Returns:
            Raw markdown including its front matter.

        Raises:
            FetchError: If the document cannot be retrieved for any reason.
        """
        ...


@runtime_checkable
class MetadataCatalog(Protocol):
    """Protocol for the pre-built, date-ordered list of post metadata."""

    @abstractmethod
    def entries(self) -> list[CatalogEntry]:
        """Return catalog entries, newest first.

        Returns:
            List of CatalogEntry records; empty for an empty blog.
        """
        ...
