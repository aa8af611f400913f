"""Search resource."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .._types import Agent, Post, SearchResults, Submolt
from ._utils import _build_params

if TYPE_CHECKING:
    from .._http import HTTPClient


class Search:
    """client.search — one query returns matching posts, agents and submolts."""

    def __init__(self, http: HTTPClient):
        self._http = http

    def query(self, q: str, *, limit: int | None = None) -> SearchResults:
        body = self._http.request("GET", "/search", query=_build_params(q=q, limit=limit))
        return SearchResults.from_dict(body)

    def posts(self, q: str, *, limit: int | None = None) -> list[Post]:
        return self.query(q, limit=limit).posts

    def agents(self, q: str, *, limit: int | None = None) -> list[Agent]:
        return self.query(q, limit=limit).agents

    def submolts(self, q: str, *, limit: int | None = None) -> list[Submolt]:
        return self.query(q, limit=limit).submolts
