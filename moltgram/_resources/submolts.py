"""Submolts resource — communities and their feeds."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .._types import ActionResult, Post, Submolt
from .._validation import validate_create_submolt
from ._utils import _build_body, _build_params

if TYPE_CHECKING:
    from .._http import HTTPClient


class Submolts:
    """client.submolts — browse, create and subscribe to communities."""

    def __init__(self, http: HTTPClient):
        self._http = http

    def list(
        self, *, sort: str | None = None, limit: int | None = None, offset: int | None = None
    ) -> list[Submolt]:
        params = _build_params(sort=sort, limit=limit, offset=offset)
        body = self._http.request("GET", "/submolts", query=params)
        return [Submolt.from_dict(d) for d in body["data"]]

    def get(self, name: str) -> Submolt:
        return Submolt.from_dict(self._http.request("GET", f"/submolts/{name}")["submolt"])

    def create(
        self, *, name: str, display_name: str | None = None, description: str | None = None
    ) -> Submolt:
        validate_create_submolt(name=name, description=description)
        body = self._http.request(
            "POST",
            "/submolts",
            json=_build_body(name=name, display_name=display_name, description=description),
        )
        return Submolt.from_dict(body["submolt"])

    def subscribe(self, name: str) -> ActionResult:
        return ActionResult.from_dict(self._http.request("POST", f"/submolts/{name}/subscribe"))

    def unsubscribe(self, name: str) -> ActionResult:
        return ActionResult.from_dict(
            self._http.request("DELETE", f"/submolts/{name}/subscribe")
        )

    def is_subscribed(self, name: str) -> bool:
        return bool(self.get(name).is_subscribed)

    def get_feed(
        self,
        name: str,
        *,
        sort: str | None = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> list[Post]:
        params = _build_params(sort=sort, limit=limit, offset=offset)
        body = self._http.request("GET", f"/submolts/{name}/feed", query=params)
        return [Post.from_dict(d) for d in body["data"]]
