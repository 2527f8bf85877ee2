"""Post repository for Quill.

The repository is the single owner of the in-memory post cache. It asks the
catalog which posts exist, fetches each document through a PostFetcher,
parses and renders it, and serves the result as date-ordered and paginated
views.

Cache states:
- EMPTY: initially and after clear_cache().
- POPULATED: after the first list_all() of a cache generation.

Population is single-flight: concurrent list_all() calls on an EMPTY cache
share one build instead of each fetching every post.
"""

from __future__ import annotations

import logging
import threading

from .collections import PostCollection
from .errors import FetchError, MalformedDocumentError
from .frontmatter import FrontMatterParser, parse_document
from .models import CatalogEntry, PaginatedView, Post
from .protocols import MetadataCatalog, PostFetcher
from .renderers import ContentTransformer

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 5


class PostRepository:
    """Fetches, parses, caches and paginates blog posts.

    Attributes:
        fetcher: Source of raw markdown documents.
        catalog: Source of the ordered post identifiers.
        parser: Front matter parser.
        transformer: Markdown body transformer.
    """

    def __init__(
        self,
        fetcher: PostFetcher,
        catalog: MetadataCatalog,
        parser: FrontMatterParser | None = None,
        transformer: ContentTransformer | None = None,
    ):
        self.fetcher = fetcher
        self.catalog = catalog
        self.parser = parser or FrontMatterParser()
        self.transformer = transformer or ContentTransformer()
        self._cache: PostCollection | None = None
        self._generation = 0
        self._lock = threading.Lock()

    @property
    def is_cached(self) -> bool:
        return self._cache is not None

    @property
    def generation(self) -> int:
        """Number of times the cache has been cleared."""
        return self._generation

    def list_all(self) -> PostCollection:
        """Return every available post, newest first.

        The first call of a cache generation fetches and parses every post
        named by the catalog; later calls return the same cached collection.
        A post that cannot be fetched or parsed is logged and left out.

        Returns:
            PostCollection ordered by publish date, newest first.
        """
        cached = self._cache
        if cached is not None:
            return cached
        with self._lock:
            if self._cache is not None:
                return self._cache
            self._cache = self._load_all()
            logger.debug("Post cache populated (generation %d)", self._generation)
            return self._cache

    def get_by_slug(self, slug: str) -> Post | None:
        """Fetch and parse a single post.

        The cache is not consulted, so the result reflects the current
        content of the document.

        Args:
            slug: Post identifier.

        Returns:
            The Post, or None if it cannot be fetched or is malformed.
        """
        try:
            return self._load_post(slug)
        except FetchError as exc:
            logger.warning("Could not find blog post %s: %s", slug, exc.message)
        except MalformedDocumentError as exc:
            logger.warning("Blog post %s is malformed: %s", slug, exc.message)
        except Exception:
            logger.exception("Unexpected error loading blog post %s", slug)
        return None

    def paginate(self, page: int = 1, page_size: int = DEFAULT_PAGE_SIZE) -> PaginatedView:
        """Return one page of the cached, date-ordered posts.

        Args:
            page: Requested 1-based page; clamped into the valid range.
            page_size: Posts per page.

        Returns:
            PaginatedView for the clamped page.

        Raises:
            ValueError: If page_size is less than 1.
        """
        return self.list_all().paginate(page, page_size)

    def posts_with_tag(self, tag: str) -> PostCollection:
        return self.list_all().with_tag(tag)

    def list_metadata(self) -> list[CatalogEntry]:
        """Return catalog metadata without fetching any post content."""
        return self.catalog.entries()

    def clear_cache(self) -> None:
        """Discard cached posts so the next list_all() reloads everything."""
        with self._lock:
            self._cache = None
            self._generation += 1
        logger.debug("Post cache cleared (generation %d)", self._generation)

    def _load_all(self) -> PostCollection:
        entries = self.catalog.entries()
        posts: list[Post] = []
        for entry in entries:
            try:
                posts.append(self._load_post(entry.identifier))
            except FetchError as exc:
                logger.warning("Error loading post %s: %s", entry.identifier, exc.message)
            except MalformedDocumentError as exc:
                logger.warning("Skipping malformed post %s: %s", entry.identifier, exc.message)
            except Exception:
                logger.exception("Unexpected error loading post %s", entry.identifier)
        logger.info("Loaded %d of %d catalogued posts", len(posts), len(entries))
        return PostCollection(posts).sorted()

    def _load_post(self, slug: str) -> Post:
        raw = self.fetcher.fetch(slug)
        metadata, body = parse_document(raw, slug, self.parser)
        cleaned, content = self.transformer.transform(body)
        return Post.from_metadata(metadata, cleaned, content)
