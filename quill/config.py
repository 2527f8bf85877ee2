"""Project configuration for Quill.

Key functions:
- load_config: Loads settings from quill.yaml, applying defaults.
- create_repository: Wires a fetcher, catalog and repository from settings.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from .catalog import JsonCatalog
from .fetchers import FileSystemFetcher, HttpFetcher
from .repository import PostRepository

CONFIG_FILENAME = "quill.yaml"

DEFAULT_CONFIG = {
    "content_dir": "content/posts",
    "catalog_path": "catalog.json",
    "page_size": 5,
    "base_url": "",
    "log_level": "WARNING",
}


def load_config(project_root: Path) -> dict[str, Any]:
    """Load configuration from quill.yaml.

    Args:
        project_root: Root directory of the project.

    Returns:
        Dictionary containing configuration values, with defaults applied.
    """
    config_path = project_root / CONFIG_FILENAME
    config = DEFAULT_CONFIG.copy()
    if config_path.exists():
        with open(config_path, encoding="utf-8") as f:
            loaded = yaml.safe_load(f) or {}
            if isinstance(loaded, dict):
                config.update(loaded)
    return config


def resolve_path(project_root: Path, value: str | Path) -> Path:
    path = Path(value)
    return path if path.is_absolute() else project_root / path


def create_repository(config: dict[str, Any], project_root: Path) -> PostRepository:
    """Build a PostRepository from configuration.

    Posts are read from ``content_dir`` unless ``base_url`` is set, in which
    case they are downloaded from ``<base_url>/<slug>.md``.

    Args:
        config: Configuration as returned by load_config.
        project_root: Directory relative paths are resolved against.

    Returns:
        A repository with an empty cache.
    """
    base_url = str(config.get("base_url") or "")
    if base_url:
        fetcher = HttpFetcher(base_url)
    else:
        fetcher = FileSystemFetcher(resolve_path(project_root, config["content_dir"]))
    catalog = JsonCatalog(resolve_path(project_root, config["catalog_path"]))
    return PostRepository(fetcher, catalog)
