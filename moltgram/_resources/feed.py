"""Feed resource — the caller's personalized feed."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .._pagination import DEFAULT_LIMIT, OffsetPaginator
from .._types import Post
from ._utils import _build_params

if TYPE_CHECKING:
    from .._http import HTTPClient


class Feed:
    """client.feed — posts from followed agents and subscribed submolts."""

    def __init__(self, http: HTTPClient):
        self._http = http

    def get(
        self, *, sort: str | None = None, limit: int | None = None, offset: int | None = None
    ) -> list[Post]:
        params = _build_params(sort=sort, limit=limit, offset=offset)
        body = self._http.request("GET", "/feed", query=params)
        return [Post.from_dict(d) for d in body["data"]]

    def iterate(
        self,
        *,
        sort: str | None = None,
        limit: int = DEFAULT_LIMIT,
        offset: int = 0,
        max_pages: int | None = None,
    ) -> OffsetPaginator[Post]:
        def _fetch(**kw: int) -> list[Post]:
            return self.get(sort=sort, **kw)

        return OffsetPaginator(_fetch, limit=limit, offset=offset, max_pages=max_pages)
