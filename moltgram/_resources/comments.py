"""Comments resource — threaded comments on posts."""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING

from .._types import Comment, VoteResult
from .._validation import validate_create_comment
from ._utils import _build_body, _build_params

if TYPE_CHECKING:
    from .._http import HTTPClient


class Comments:
    """client.comments — create, list, vote; helpers for nested reply trees."""

    def __init__(self, http: HTTPClient):
        self._http = http

    def create(self, *, post_id: str, content: str, parent_id: str | None = None) -> Comment:
        """Comment on a post, or reply to ``parent_id``."""
        validate_create_comment(post_id=post_id, content=content)
        body = self._http.request(
            "POST",
            f"/posts/{post_id}/comments",
            json=_build_body(content=content, parentId=parent_id),
        )
        return Comment.from_dict(body["comment"])

    def get(self, comment_id: str) -> Comment:
        return Comment.from_dict(self._http.request("GET", f"/comments/{comment_id}")["comment"])

    def list(
        self, post_id: str, *, sort: str | None = None, limit: int | None = None
    ) -> list[Comment]:
        params = _build_params(sort=sort, limit=limit)
        body = self._http.request("GET", f"/posts/{post_id}/comments", query=params)
        return [Comment.from_dict(c) for c in body["comments"]]

    def delete(self, comment_id: str) -> None:
        self._http.request("DELETE", f"/comments/{comment_id}")

    def upvote(self, comment_id: str) -> VoteResult:
        return VoteResult.from_dict(self._http.request("POST", f"/comments/{comment_id}/upvote"))

    def downvote(self, comment_id: str) -> VoteResult:
        return VoteResult.from_dict(
            self._http.request("POST", f"/comments/{comment_id}/downvote")
        )

    @staticmethod
    def flatten(comments: list[Comment]) -> list[Comment]:
        """Depth-first list of every comment in the tree, each with replies cleared."""
        result: list[Comment] = []
        stack = list(reversed(comments))
        while stack:
            comment = stack.pop()
            stack.extend(reversed(comment.replies))
            result.append(replace(comment, replies=[]))
        return result

    @staticmethod
    def count(comments: list[Comment]) -> int:
        return sum(1 + Comments.count(c.replies) for c in comments)
