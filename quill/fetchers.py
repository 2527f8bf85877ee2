"""Sources of raw post markdown.

Key classes:
- FileSystemFetcher: Reads ``<content_dir>/<slug>.md`` from disk.
- HttpFetcher: Downloads ``<base_url>/<slug>.md`` with httpx.

Both raise FetchError for every failure so callers can treat a missing file
and a network error the same way.
"""

from __future__ import annotations

import logging
from pathlib import Path
from urllib.parse import urlparse

import httpx

from .errors import FetchError

logger = logging.getLogger(__name__)

TIMEOUT = 10  # seconds
ALLOWED_SCHEMES = {"http", "https"}
POST_SUFFIX = ".md"


class FileSystemFetcher:
    """Reads post documents from a content directory.

    Attributes:
        content_dir: Directory holding ``<slug>.md`` files.
    """

    def __init__(self, content_dir: Path):
        self.content_dir = Path(content_dir)

    def path_for(self, slug: str) -> Path:
        """Resolve the file path for a slug.

        Raises:
            FetchError: If the slug is not a usable path or would resolve
                outside the content directory.
        """
        try:
            root = self.content_dir.resolve()
            target = (root / f"{slug}{POST_SUFFIX}").resolve()
        except (OSError, ValueError) as exc:
            raise FetchError(slug, f"invalid post path: {exc}", exc) from exc
        if root not in target.parents:
            raise FetchError(slug, "slug resolves outside the content directory")
        return target

    def fetch(self, slug: str) -> str:
        path = self.path_for(slug)
        logger.debug("Reading post %s from %s", slug, path)
        try:
            return path.read_text(encoding="utf-8-sig")
        except FileNotFoundError as exc:
            raise FetchError(slug, f"post not found at {path}", exc) from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise FetchError(slug, f"could not read {path}: {exc}", exc) from exc


class HttpFetcher:
    """Downloads post documents from a web host.

    Attributes:
        base_url: URL of the directory serving ``<slug>.md`` files.
        timeout: Request timeout in seconds.
    """

    def __init__(
        self,
        base_url: str,
        client: httpx.Client | None = None,
        timeout: float = TIMEOUT,
    ):
        parsed = urlparse(base_url)
        if parsed.scheme not in ALLOWED_SCHEMES:
            raise ValueError(f"Scheme '{parsed.scheme}' is not allowed. Use http or https.")
        if not parsed.hostname:
            raise ValueError("URL must have a valid hostname.")
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = client

    def url_for(self, slug: str) -> str:
        return f"{self.base_url}/{slug}{POST_SUFFIX}"

    def fetch(self, slug: str) -> str:
        url = self.url_for(slug)
        logger.debug("Fetching post %s from %s", slug, url)
        try:
            if self._client is not None:
                response = self._client.get(url, timeout=self.timeout)
            else:
                with httpx.Client(follow_redirects=True, timeout=self.timeout) as client:
                    response = client.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            raise FetchError(slug, f"HTTP {status} for {url}", exc) from exc
        except httpx.HTTPError as exc:
            raise FetchError(slug, f"request to {url} failed: {exc}", exc) from exc
        except httpx.InvalidURL as exc:
            raise FetchError(slug, f"invalid URL {url!r}: {exc}", exc) from exc
        return response.text.removeprefix("\ufeff")
