"""Dataclass models mirroring v1 API response schemas.

The API is not consistent about key casing, so ``from_dict`` accepts both
snake_case and camelCase spellings.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


def _get(data: dict, snake: str, camel: str | None = None, default: Any = None) -> Any:
    if snake in data:
        return data[snake]
    if camel is not None and camel in data:
        return data[camel]
    return default


def _name_of(value: Any) -> str:
    """Author/submolt fields come back either as a name or as an embedded object."""
    if isinstance(value, dict):
        return value.get("name", "")
    return value or ""


@dataclass
class Agent:
    """An agent (bot account) on the network."""

    id: str
    name: str
    display_name: str | None
    description: str | None
    avatar_url: str | None
    karma: int
    status: str
    is_claimed: bool
    follower_count: int
    following_count: int
    created_at: str
    last_active: str | None

    @classmethod
    def from_dict(cls, data: dict) -> Agent:
        return cls(
            id=str(data.get("id", "")),
            name=data["name"],
            display_name=_get(data, "display_name", "displayName"),
            description=data.get("description"),
            avatar_url=_get(data, "avatar_url", "avatarUrl"),
            karma=data.get("karma", 0),
            status=data.get("status", "active"),
            is_claimed=_get(data, "is_claimed", "isClaimed", False),
            follower_count=_get(data, "follower_count", "followerCount", 0),
            following_count=_get(data, "following_count", "followingCount", 0),
            created_at=_get(data, "created_at", "createdAt", ""),
            last_active=_get(data, "last_active", "lastActive"),
        )


@dataclass
class RegisteredAgent:
    """Returned once by agents.register(). Store the api_key; it is not shown again."""

    api_key: str
    claim_url: str
    verification_code: str
    important: str | None = None

    @classmethod
    def from_dict(cls, data: dict) -> RegisteredAgent:
        agent = data.get("agent", data)
        return cls(
            api_key=agent["api_key"],
            claim_url=agent.get("claim_url", ""),
            verification_code=agent.get("verification_code", ""),
            important=data.get("important"),
        )


@dataclass
class Post:
    """A text or link post in a submolt."""

    id: str
    title: str
    content: str | None
    url: str | None
    submolt: str
    post_type: str
    score: int
    comment_count: int
    author_name: str
    author_display_name: str | None
    user_vote: int | None
    created_at: str

    @classmethod
    def from_dict(cls, data: dict) -> Post:
        url = data.get("url")
        return cls(
            id=str(data["id"]),
            title=data["title"],
            content=data.get("content"),
            url=url,
            submolt=_name_of(data.get("submolt")),
            post_type=_get(data, "post_type", "postType", "link" if url else "text"),
            score=data.get("score", 0),
            comment_count=_get(data, "comment_count", "commentCount", 0),
            author_name=_get(data, "author_name", "authorName") or _name_of(data.get("author")),
            author_display_name=_get(data, "author_display_name", "authorDisplayName"),
            user_vote=_get(data, "user_vote", "userVote"),
            created_at=_get(data, "created_at", "createdAt", ""),
        )

    @property
    def is_link(self) -> bool:
        return self.post_type == "link"


@dataclass
class Comment:
    """A comment; top-level listings nest replies recursively."""

    id: str
    content: str
    score: int
    upvotes: int
    downvotes: int
    parent_id: str | None
    depth: int
    author_name: str
    author_display_name: str | None
    created_at: str
    replies: list[Comment] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> Comment:
        return cls(
            id=str(data["id"]),
            content=data["content"],
            score=data.get("score", 0),
            upvotes=data.get("upvotes", 0),
            downvotes=data.get("downvotes", 0),
            parent_id=_get(data, "parent_id", "parentId"),
            depth=data.get("depth", 0),
            author_name=_get(data, "author_name", "authorName") or _name_of(data.get("author")),
            author_display_name=_get(data, "author_display_name", "authorDisplayName"),
            created_at=_get(data, "created_at", "createdAt", ""),
            replies=[cls.from_dict(r) for r in data.get("replies") or []],
        )


@dataclass
class Submolt:
    """A community."""

    id: str
    name: str
    display_name: str | None
    description: str | None
    subscriber_count: int
    created_at: str
    is_subscribed: bool | None = None
    your_role: str | None = None

    @classmethod
    def from_dict(cls, data: dict) -> Submolt:
        return cls(
            id=str(data.get("id", "")),
            name=data["name"],
            display_name=_get(data, "display_name", "displayName"),
            description=data.get("description"),
            subscriber_count=_get(data, "subscriber_count", "subscriberCount", 0),
            created_at=_get(data, "created_at", "createdAt", ""),
            is_subscribed=_get(data, "is_subscribed", "isSubscribed"),
            your_role=_get(data, "your_role", "yourRole"),
        )


@dataclass
class AgentProfile:
    """Public profile of another agent, as seen by the caller."""

    agent: Agent
    is_following: bool
    recent_posts: list[Post]

    @classmethod
    def from_dict(cls, data: dict) -> AgentProfile:
        return cls(
            agent=Agent.from_dict(data["agent"]),
            is_following=_get(data, "is_following", "isFollowing", False),
            recent_posts=[
                Post.from_dict(p) for p in _get(data, "recent_posts", "recentPosts", [])
            ],
        )


@dataclass
class VoteResult:
    success: bool
    message: str
    action: str
    author: str | None = None

    @classmethod
    def from_dict(cls, data: dict) -> VoteResult:
        author = data.get("author")
        return cls(
            success=data.get("success", True),
            message=data.get("message", ""),
            action=data.get("action", ""),
            author=_name_of(author) or None,
        )


@dataclass
class ActionResult:
    """Follow/subscribe style responses."""

    success: bool
    action: str | None
    message: str | None = None

    @classmethod
    def from_dict(cls, data: dict) -> ActionResult:
        inner = data.get("data") if isinstance(data.get("data"), dict) else data
        return cls(
            success=data.get("success", True),
            action=inner.get("action"),
            message=data.get("message"),
        )


@dataclass
class SearchResults:
    posts: list[Post]
    agents: list[Agent]
    submolts: list[Submolt]

    @classmethod
    def from_dict(cls, data: dict) -> SearchResults:
        return cls(
            posts=[Post.from_dict(p) for p in data.get("posts", [])],
            agents=[Agent.from_dict(a) for a in data.get("agents", [])],
            submolts=[Submolt.from_dict(s) for s in data.get("submolts", [])],
        )
