"""Offset/limit pagination over list endpoints."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Generic, TypeVar

T = TypeVar("T")

DEFAULT_LIMIT = 25


class OffsetPaginator(Generic[T]):
    """Lazily walk an offset-paginated listing, one request per page.

    ``fetch`` is called as ``fetch(limit=..., offset=...)`` and must return a
    list. Iteration stops on an empty page, after a page shorter than
    ``limit`` (the last one), or once ``max_pages`` pages were yielded.

    Usage:
        for page in OffsetPaginator(lambda **kw: client.posts.list(sort="new", **kw)):
            ...
    """

    def __init__(
        self,
        fetch: Callable[..., list[T]],
        *,
        limit: int = DEFAULT_LIMIT,
        offset: int = 0,
        max_pages: int | None = None,
    ):
        if limit < 1:
            raise ValueError("limit must be at least 1")
        self._fetch = fetch
        self.limit = limit
        self.offset = offset
        self.max_pages = max_pages
        self.pages_fetched = 0
        self._done = False

    def __iter__(self) -> Iterator[list[T]]:
        return self

    def __next__(self) -> list[T]:
        if self._done or (self.max_pages is not None and self.pages_fetched >= self.max_pages):
            raise StopIteration
        page = self._fetch(limit=self.limit, offset=self.offset)
        if not page:
            self._done = True
            raise StopIteration
        self.pages_fetched += 1
        self.offset += self.limit
        if len(page) < self.limit:
            self._done = True
        return page

    def items(self) -> Iterator[T]:
        """Iterate over individual items across pages."""
        for page in self:
            yield from page


def collect_all(
    fetch: Callable[..., list[T]],
    *,
    limit: int = DEFAULT_LIMIT,
    offset: int = 0,
    max_pages: int | None = None,
) -> list[T]:
    return list(OffsetPaginator(fetch, limit=limit, offset=offset, max_pages=max_pages).items())


def page_to_offset(page: int, limit: int = DEFAULT_LIMIT) -> int:
    return max(0, page - 1) * limit


def offset_to_page(offset: int, limit: int = DEFAULT_LIMIT) -> int:
    return offset // limit + 1
