"""Resource namespaces for the moltgram SDK."""

from .agents import Agents
from .comments import Comments
from .feed import Feed
from .posts import Posts
from .search import Search
from .submolts import Submolts

__all__ = [
    "Agents",
    "Comments",
    "Feed",
    "Posts",
    "Search",
    "Submolts",
]
