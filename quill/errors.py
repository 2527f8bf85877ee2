"""Exception types shared across Quill."""

from __future__ import annotations


class QuillError(Exception):
    """Base class for all errors raised by Quill."""


class MalformedDocumentError(QuillError, ValueError):
    """Raised when a markdown document lacks its front matter delimiters.

    Attributes:
        slug: Identifier of the offending document, when known.
        message: Human-readable error message.
    """

    def __init__(self, message: str, slug: str = ""):
        self.slug = slug
        self.message = message
        super().__init__(f"{slug}: {message}" if slug else message)


class FetchError(QuillError):
    """Raised when the raw markdown for a post cannot be retrieved.

    Every cause (missing file, HTTP status, network failure) is reported
    with this single type so callers can treat them identically.

    Attributes:
        slug: Identifier of the post that could not be fetched.
        message: Human-readable error message.
        original_error: The underlying exception, if any.
    """

    def __init__(
        self,
        slug: str,
        message: str,
        original_error: Exception | None = None,
    ):
        self.slug = slug
        self.message = message
        self.original_error = original_error
        super().__init__(f"{slug}: {message}")


class CatalogError(QuillError):
    """Raised when a catalog cannot be built or loaded."""
