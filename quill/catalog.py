"""Post metadata catalog for Quill.

The catalog is a JSON list of lightweight metadata records, one per post,
ordered newest first. It is produced once ahead of time by scanning the
markdown corpus (``quill catalog``) and read by the repository to learn
which posts exist and in which order.

Key functions and classes:
- build_catalog: Scan a content directory and return sorted entries.
- write_catalog: Serialize entries to a JSON file.
- JsonCatalog: MetadataCatalog backed by a JSON file.
- StaticCatalog: MetadataCatalog backed by an in-memory list.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from dataclasses import replace
from datetime import date, datetime
from pathlib import Path
from typing import Any

import yaml

from .errors import CatalogError, MalformedDocumentError
from .frontmatter import FrontMatterParser, split_document
from .models import NO_DATE, CatalogEntry
from .utils import (
    extract_date_from_name,
    is_internal_path,
    is_markdown,
    parse_date,
    split_list,
)

logger = logging.getLogger(__name__)


class StaticCatalog:
    """Catalog over a fixed list of entries, kept in the given order."""

    def __init__(self, entries: Iterable[CatalogEntry] = ()):
        self._entries = list(entries)

    def entries(self) -> list[CatalogEntry]:
        return list(self._entries)


class JsonCatalog:
    """Catalog loaded from a JSON file written by write_catalog.

    A missing file is treated as an empty blog. The file is read on every
    call to entries(), so a rebuilt catalog is picked up after the
    repository cache is cleared.

    Attributes:
        path: Location of the JSON file.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def entries(self) -> list[CatalogEntry]:
        """Load catalog entries.

        Returns:
            Entries in file order.

        Raises:
            CatalogError: If the file is not a JSON list of entry objects.
        """
        if not self.path.exists():
            logger.info("Catalog %s does not exist; treating blog as empty", self.path)
            return []
        try:
            with open(self.path, encoding="utf-8") as f:
                payload = json.load(f)
        except json.JSONDecodeError as exc:
            raise CatalogError(f"{self.path}: invalid JSON: {exc}") from exc
        if not isinstance(payload, list):
            raise CatalogError(f"{self.path}: expected a JSON list of entries")
        try:
            return [CatalogEntry.from_dict(item) for item in payload]
        except (KeyError, TypeError, AttributeError) as exc:
            raise CatalogError(f"{self.path}: invalid catalog entry: {exc}") from exc


def build_catalog(content_dir: Path) -> list[CatalogEntry]:
    """Scan a content directory and build catalog entries.

    Every ``*.md`` file below ``content_dir`` is read, except files and
    directories whose name starts with an underscore. Files without a
    front matter block are skipped with a warning.

    Args:
        content_dir: Directory holding the markdown corpus.

    Returns:
        Entries sorted by date, newest first. Entries sharing a date keep
        path order.

    Raises:
        CatalogError: If two files share the same identifier.
    """
    content_dir = Path(content_dir)
    if not content_dir.exists():
        logger.warning("Content directory %s does not exist", content_dir)
        return []

    entries: list[CatalogEntry] = []
    seen: dict[str, Path] = {}
    for path in sorted(content_dir.rglob("*")):
        if path.is_dir() or not is_markdown(path):
            continue
        if is_internal_path(path.relative_to(content_dir)):
            continue
        entry = _entry_for_file(path, content_dir)
        if entry is None:
            continue
        if entry.identifier in seen:
            raise CatalogError(
                f"Duplicate post identifier '{entry.identifier}': "
                f"{seen[entry.identifier]} and {path}"
            )
        seen[entry.identifier] = path
        entries.append(entry)

    entries.sort(key=lambda e: e.date, reverse=True)
    logger.info("Catalogued %d posts from %s", len(entries), content_dir)
    return entries


def write_catalog(entries: Iterable[CatalogEntry], path: Path) -> Path:
    """Write catalog entries to a JSON file.

    Args:
        entries: Entries to serialize, in catalog order.
        path: Output file; parent directories are created.

    Returns:
        The path written.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = [entry.to_dict() for entry in entries]
    path.write_text(json.dumps(payload, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    return path


def _entry_for_file(path: Path, content_dir: Path) -> CatalogEntry | None:
    """Build one catalog entry, or None if the file has no front matter."""
    identifier = path.relative_to(content_dir).with_suffix("").as_posix()
    try:
        text = path.read_text(encoding="utf-8-sig")
        block, _ = split_document(text, identifier)
    except MalformedDocumentError as exc:
        logger.warning("Skipping %s: %s", path, exc.message)
        return None
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Skipping %s: could not read file: %s", path, exc)
        return None

    data = _load_yaml(block, path)
    if data is None:
        metadata = FrontMatterParser().parse(block, identifier)
        entry = CatalogEntry(
            identifier=identifier,
            title=metadata.title,
            date=metadata.date,
            tags=", ".join(metadata.tags),
            description=metadata.summary or "",
        )
    else:
        entry = CatalogEntry(
            identifier=identifier,
            title=_as_text(_first_present(data, "title")),
            date=_as_date(_first_present(data, "date", "publishDate")),
            tags=_as_tags(_first_present(data, "tags")),
            description=_as_text(_first_present(data, "description", "summary")),
        )

    if entry.date == NO_DATE:
        from_name = extract_date_from_name(path.stem)
        if from_name is not None:
            entry = replace(entry, date=from_name)
    return entry


def _load_yaml(block: str, path: Path) -> dict[str, Any] | None:
    try:
        data = yaml.safe_load(block) if block.strip() else {}
    except yaml.YAMLError as exc:
        logger.debug("Front matter of %s is not valid YAML (%s); using line parser", path, exc)
        return None
    if not isinstance(data, dict):
        return None
    return {str(k): v for k, v in data.items()}


def _first_present(data: dict[str, Any], *keys: str) -> Any:
    lowered = {k.lower(): v for k, v in data.items()}
    for key in keys:
        value = lowered.get(key.lower())
        if value not in (None, ""):
            return value
    return None


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _as_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if value is None:
        return NO_DATE
    return parse_date(str(value)) or NO_DATE


def _as_tags(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return ", ".join(str(item).strip() for item in value if str(item).strip())
    return ", ".join(split_list(str(value)))
