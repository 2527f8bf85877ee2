"""Quill blog post pipeline.

This package turns a directory of markdown posts with front matter into
cached, date-ordered and paginated collections of rendered posts.
A companion build step scans the same corpus ahead of time and writes a
JSON catalog of post metadata, which the repository reads instead of a
hardcoded list of post identifiers.

The main entry point is the CLI module, which provides commands for building
the catalog and for listing and showing posts.

Architecture:
- frontmatter: isolates and parses the metadata block of a document.
- renderers: drops the duplicate opening heading and renders markdown to HTML.
- repository: fetches, parses, caches and paginates posts.
- catalog: builds and loads the sorted metadata catalog.
- fetchers: filesystem and HTTP sources of raw markdown.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
