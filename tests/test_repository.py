"""Tests for PostRepository caching, ordering and fault tolerance."""

import threading
import time
from datetime import date

from quill.catalog import StaticCatalog
from quill.errors import FetchError
from quill.fetchers import FileSystemFetcher
from quill.models import CatalogEntry
from quill.repository import PostRepository


class FakeFetcher:
    """In-memory fetcher that records every fetch."""

    def __init__(self, documents, delay=0.0):
        self.documents = dict(documents)
        self.calls = []
        self.delay = delay
        self._lock = threading.Lock()

    def fetch(self, slug):
        with self._lock:
            self.calls.append(slug)
        if self.delay:
            time.sleep(self.delay)
        if slug not in self.documents:
            raise FetchError(slug, "resource not found")
        return self.documents[slug]


def doc(title, published, tags="", extra=""):
    return (
        f'---\ntitle: "{title}"\ndate: {published}\ntags: [{tags}]\n{extra}---\n'
        f"# {title}\n\nBody of {title}.\n"
    )


def make_repository(documents, order=None, delay=0.0):
    slugs = order if order is not None else list(documents)
    catalog = StaticCatalog(CatalogEntry(identifier=slug) for slug in slugs)
    fetcher = FakeFetcher(documents, delay=delay)
    return PostRepository(fetcher, catalog), fetcher


def test_list_all_orders_by_date_descending():
    repository, _ = make_repository(
        {
            "jan": doc("Jan", "2024-01-01"),
            "jun": doc("Jun", "2024-06-01"),
            "dec": doc("Dec", "2023-12-01"),
        }
    )
    posts = repository.list_all()
    assert [p.date for p in posts] == [date(2024, 6, 1), date(2024, 1, 1), date(2023, 12, 1)]


def test_list_all_builds_posts_with_rendered_content():
    repository, _ = make_repository(
        {"hello": doc("Hello", "2024-06-01", tags="python, web", extra="summary: Hi\n")}
    )
    post = repository.list_all()[0]
    assert post.slug == "hello"
    assert post.title == "Hello"
    assert post.tags == ("python", "web")
    assert post.summary == "Hi"
    assert post.reading_time == 3
    assert post.body.startswith("\nBody of Hello.")
    assert "<p>Body of Hello.</p>" in post.content
    assert "<h1" not in post.content


def test_list_all_is_cached_until_cleared():
    repository, fetcher = make_repository(
        {"a": doc("A", "2024-01-01"), "b": doc("B", "2024-01-02")}
    )
    assert repository.is_cached is False
    first = repository.list_all()
    second = repository.list_all()
    assert first is second
    assert fetcher.calls == ["a", "b"]
    assert repository.is_cached is True

    repository.clear_cache()
    assert repository.is_cached is False
    assert repository.generation == 1
    third = repository.list_all()
    assert third is not first
    assert fetcher.calls == ["a", "b", "a", "b"]


def test_clear_cache_picks_up_changed_content():
    repository, fetcher = make_repository({"a": doc("Old", "2024-01-01")})
    assert repository.list_all()[0].title == "Old"
    fetcher.documents["a"] = doc("New", "2024-01-01")
    assert repository.list_all()[0].title == "Old"
    repository.clear_cache()
    assert repository.list_all()[0].title == "New"


def test_failed_fetch_skips_only_that_post(caplog):
    repository, _ = make_repository(
        {"a": doc("A", "2024-01-01"), "c": doc("C", "2024-01-03")},
        order=["c", "missing", "a"],
    )
    with caplog.at_level("WARNING", logger="quill.repository"):
        posts = repository.list_all()
    assert [p.slug for p in posts] == ["c", "a"]
    assert any("missing" in rec.getMessage() for rec in caplog.records)


def test_malformed_document_is_skipped_in_batch(caplog):
    repository, _ = make_repository(
        {"good": doc("Good", "2024-01-01"), "bad": "# No front matter\n"}
    )
    with caplog.at_level("WARNING", logger="quill.repository"):
        posts = repository.list_all()
    assert [p.slug for p in posts] == ["good"]
    assert any("bad" in rec.getMessage() for rec in caplog.records)


def test_empty_catalog_gives_empty_blog():
    repository, fetcher = make_repository({})
    assert len(repository.list_all()) == 0
    view = repository.paginate(1, 5)
    assert view.items == ()
    assert view.total_pages == 0
    assert fetcher.calls == []


def test_misordered_catalog_is_resorted_and_ties_keep_catalog_order():
    repository, _ = make_repository(
        {
            "old": doc("Old", "2020-01-01"),
            "tie-b": doc("Tie B", "2024-01-01"),
            "tie-a": doc("Tie A", "2024-01-01"),
        },
        order=["old", "tie-b", "tie-a"],
    )
    assert [p.slug for p in repository.list_all()] == ["tie-b", "tie-a", "old"]


def test_get_by_slug_found_and_not_found(caplog):
    repository, _ = make_repository({"a": doc("A", "2024-01-01"), "bad": "nope"})
    assert repository.get_by_slug("a").title == "A"
    with caplog.at_level("WARNING", logger="quill.repository"):
        assert repository.get_by_slug("missing") is None
        assert repository.get_by_slug("bad") is None
    messages = [rec.getMessage() for rec in caplog.records]
    assert any("missing" in m for m in messages)
    assert any("malformed" in m for m in messages)


def test_get_by_slug_does_not_populate_cache():
    repository, _ = make_repository({"a": doc("A", "2024-01-01")})
    repository.get_by_slug("a")
    assert repository.is_cached is False


class BrokenFetcher(FakeFetcher):
    """Fetcher whose storage fails for some slugs with a non-fetch error."""

    def __init__(self, documents, broken):
        super().__init__(documents)
        self.broken = set(broken)

    def fetch(self, slug):
        if slug in self.broken:
            raise OSError("disk gone")
        return super().fetch(slug)


def test_unexpected_fetch_error_skips_only_that_post(caplog):
    catalog = StaticCatalog(CatalogEntry(identifier=slug) for slug in ["a", "b"])
    fetcher = BrokenFetcher({"a": doc("A", "2024-01-01")}, broken=["b"])
    repository = PostRepository(fetcher, catalog)
    with caplog.at_level("WARNING", logger="quill.repository"):
        posts = repository.list_all()
    assert [p.slug for p in posts] == ["a"]
    assert any("post b" in rec.getMessage() for rec in caplog.records)


def test_get_by_slug_returns_none_on_unexpected_error(tmp_path):
    fetcher = BrokenFetcher({}, broken=["b"])
    repository = PostRepository(fetcher, StaticCatalog())
    assert repository.get_by_slug("b") is None

    on_disk = PostRepository(FileSystemFetcher(tmp_path), StaticCatalog())
    assert on_disk.get_by_slug("bad\x00slug") is None


def test_paginate_seven_posts():
    documents = {f"p{i}": doc(f"P{i}", f"2024-01-{10 - i:02d}") for i in range(7)}
    repository, fetcher = make_repository(documents)

    page1 = repository.paginate(1, 5)
    assert len(page1.items) == 5
    assert (page1.has_next, page1.has_previous) == (True, False)

    page2 = repository.paginate(2, 5)
    assert len(page2.items) == 2
    assert (page2.has_next, page2.has_previous) == (False, True)

    clamped = repository.paginate(99, 5)
    assert clamped.current_page == 2
    assert clamped.items == page2.items
    # All three pages come from one cached population.
    assert len(fetcher.calls) == 7


def test_posts_with_tag_and_list_metadata():
    repository, fetcher = make_repository(
        {"a": doc("A", "2024-01-01", tags="python"), "b": doc("B", "2024-01-02", tags="web")}
    )
    metadata = repository.list_metadata()
    assert [e.identifier for e in metadata] == ["a", "b"]
    assert fetcher.calls == []
    assert [p.slug for p in repository.posts_with_tag("python")] == ["a"]


def test_concurrent_list_all_populates_once():
    documents = {f"p{i}": doc(f"P{i}", "2024-01-01") for i in range(5)}
    repository, fetcher = make_repository(documents, delay=0.01)
    results = []

    def worker():
        results.append(repository.list_all())

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(fetcher.calls) == 5
    assert all(result is results[0] for result in results)
