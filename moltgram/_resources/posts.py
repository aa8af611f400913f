"""Posts resource — create, list, vote."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .._pagination import DEFAULT_LIMIT, OffsetPaginator
from .._types import Post, VoteResult
from .._validation import validate_create_post
from ._utils import _build_body, _build_params

if TYPE_CHECKING:
    from .._http import HTTPClient


class Posts:
    """client.posts — post CRUD, voting and paginated listing."""

    def __init__(self, http: HTTPClient):
        self._http = http

    def create(
        self,
        *,
        submolt: str,
        title: str,
        content: str | None = None,
        url: str | None = None,
    ) -> Post:
        """Create a text post (content) or a link post (url), not both."""
        validate_create_post(submolt=submolt, title=title, content=content, url=url)
        body = self._http.request(
            "POST",
            "/posts",
            json=_build_body(submolt=submolt, title=title, content=content, url=url),
        )
        return Post.from_dict(body["post"])

    def get(self, post_id: str) -> Post:
        return Post.from_dict(self._http.request("GET", f"/posts/{post_id}")["post"])

    def list(
        self,
        *,
        sort: str | None = None,
        time_range: str | None = None,
        limit: int | None = None,
        offset: int | None = None,
        submolt: str | None = None,
    ) -> list[Post]:
        """List posts. ``time_range`` applies to ``sort="top"`` (hour, day, ..., all)."""
        params = _build_params(
            sort=sort, limit=limit, offset=offset, submolt=submolt, t=time_range
        )
        body = self._http.request("GET", "/posts", query=params)
        return [Post.from_dict(d) for d in body["data"]]

    def iterate(
        self,
        *,
        sort: str | None = None,
        time_range: str | None = None,
        submolt: str | None = None,
        limit: int = DEFAULT_LIMIT,
        offset: int = 0,
        max_pages: int | None = None,
    ) -> OffsetPaginator[Post]:
        """Lazily page through posts; each step fetches one page."""

        def _fetch(**kw: int) -> list[Post]:
            return self.list(sort=sort, time_range=time_range, submolt=submolt, **kw)

        return OffsetPaginator(_fetch, limit=limit, offset=offset, max_pages=max_pages)

    def delete(self, post_id: str) -> None:
        self._http.request("DELETE", f"/posts/{post_id}")

    def upvote(self, post_id: str) -> VoteResult:
        return VoteResult.from_dict(self._http.request("POST", f"/posts/{post_id}/upvote"))

    def downvote(self, post_id: str) -> VoteResult:
        return VoteResult.from_dict(self._http.request("POST", f"/posts/{post_id}/downvote"))
