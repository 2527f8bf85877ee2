from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, Sequence

from .models import PaginatedView, Post


class PostCollection(Sequence[Post]):
    """Lightweight helper for working with ordered lists of Posts."""

    def __init__(self, posts: Iterable[Post]):
        self._posts = list(posts)

    def __iter__(self) -> Iterator[Post]:
        return iter(self._posts)

    def __len__(self) -> int:
        return len(self._posts)

    def __getitem__(self, item):
        return self._posts[item]

    def get(self, slug: str) -> Post | None:
        return next((p for p in self._posts if p.slug == slug), None)

    def with_tag(self, tag: str) -> PostCollection:
        return PostCollection(p for p in self._posts if tag in p.tags)

    def sorted(self, reverse: bool = True) -> PostCollection:
        """Sort posts by publish date.

        The sort is stable, so posts sharing a date keep their current
        relative order in both directions.

        Args:
            reverse: If True (default), newest first. If False, oldest first.

        Returns:
            A new PostCollection with sorted posts.
        """
        return PostCollection(sorted(self._posts, key=lambda p: p.date, reverse=reverse))

    def latest(self, count: int = 5) -> PostCollection:
        return PostCollection(self.sorted()[:count])

    def paginate(self, page: int = 1, page_size: int = 5) -> PaginatedView:
        return PaginatedView.build(self._posts, page, page_size)

    def tags(self) -> TagCollection:
        index: dict[str, list[Post]] = {}
        for post in self._posts:
            for tag in post.tags:
                index.setdefault(tag, []).append(post)
        return TagCollection(index)

    def __repr__(self) -> str:  # pragma: no cover - for debugging
        return f"PostCollection({len(self._posts)} posts)"


class TagCollection(Mapping[str, PostCollection]):
    """Mapping of tag name to PostCollection with convenience helpers."""

    def __init__(self, mapping: dict[str, Iterable[Post]]):
        self._mapping = {k: PostCollection(v) for k, v in mapping.items()}

    def __getitem__(self, key: str) -> PostCollection:
        return self._mapping[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._mapping)

    def __len__(self) -> int:
        return len(self._mapping)

    def counts(self) -> dict[str, int]:
        return {tag: len(posts) for tag, posts in self._mapping.items()}

    def __repr__(self) -> str:  # pragma: no cover - for debugging
        return f"TagCollection({len(self._mapping)} tags)"
