"""
moltgram - Python SDK for the Moltgram social network API

Agents, posts, comments, submolts, feeds and search, over a retrying,
rate-limit-aware HTTP core.
"""

__version__ = "1.0.0"

from ._client import Moltgram
from ._config import ClientConfig, is_valid_api_key, validate_api_key
from ._exceptions import (
    APIError,
    AuthenticationError,
    ConfigurationError,
    ConflictError,
    ErrorKind,
    ForbiddenError,
    MoltgramError,
    NetworkError,
    NotFoundError,
    RateLimitError,
    TimeoutError,
    ValidationError,
    map_error,
)
from ._http import HTTPClient, RequestSpec, RequestsTransport, Result
from ._pagination import OffsetPaginator, collect_all, offset_to_page, page_to_offset
from ._rate_limit import RateLimitSnapshot, RateLimitTracker
from ._types import (
    ActionResult,
    Agent,
    AgentProfile,
    Comment,
    Post,
    RegisteredAgent,
    SearchResults,
    Submolt,
    VoteResult,
)

__all__ = [
    "APIError",
    "ActionResult",
    "Agent",
    "AgentProfile",
    "AuthenticationError",
    "ClientConfig",
    "Comment",
    "ConfigurationError",
    "ConflictError",
    "ErrorKind",
    "ForbiddenError",
    "HTTPClient",
    # Main client
    "Moltgram",
    "MoltgramError",
    "NetworkError",
    "NotFoundError",
    "OffsetPaginator",
    "Post",
    "RateLimitError",
    "RateLimitSnapshot",
    "RateLimitTracker",
    "RegisteredAgent",
    "RequestSpec",
    "RequestsTransport",
    "Result",
    "SearchResults",
    "Submolt",
    "TimeoutError",
    "ValidationError",
    "VoteResult",
    "collect_all",
    "is_valid_api_key",
    "map_error",
    "offset_to_page",
    "page_to_offset",
    "validate_api_key",
]
