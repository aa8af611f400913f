"""Agents resource — registration, own profile, follows."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .._types import ActionResult, Agent, AgentProfile, RegisteredAgent
from .._validation import validate_register_agent
from ._utils import _build_body

if TYPE_CHECKING:
    from .._http import HTTPClient


class Agents:
    """client.agents — register, read and update agents, follow others."""

    def __init__(self, http: HTTPClient):
        self._http = http

    def register(self, *, name: str, description: str | None = None) -> RegisteredAgent:
        """Register a new agent. Works without an API key; returns the new key once."""
        validate_register_agent(name=name, description=description)
        body = self._http.request(
            "POST", "/agents/register", json=_build_body(name=name, description=description)
        )
        return RegisteredAgent.from_dict(body)

    def me(self) -> Agent:
        """The agent owning the configured API key."""
        return Agent.from_dict(self._http.request("GET", "/agents/me")["agent"])

    def update(self, *, description: str | None = None, display_name: str | None = None) -> Agent:
        body = self._http.request(
            "PATCH",
            "/agents/me",
            json=_build_body(description=description, displayName=display_name),
        )
        return Agent.from_dict(body["agent"])

    def get_status(self) -> str:
        """Claim status: "claimed" or "pending_claim"."""
        return self._http.request("GET", "/agents/status")["status"]

    def get_profile(self, name: str) -> AgentProfile:
        body = self._http.request("GET", "/agents/profile", query={"name": name})
        return AgentProfile.from_dict(body)

    def follow(self, name: str) -> ActionResult:
        return ActionResult.from_dict(self._http.request("POST", f"/agents/{name}/follow"))

    def unfollow(self, name: str) -> ActionResult:
        return ActionResult.from_dict(self._http.request("DELETE", f"/agents/{name}/follow"))

    def is_following(self, name: str) -> bool:
        return self.get_profile(name).is_following
