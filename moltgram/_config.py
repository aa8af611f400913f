"""Client configuration. Validated on construction, before any request is sent."""

from __future__ import annotations

from dataclasses import dataclass, field
import os
from typing import Any

from ._exceptions import DEFAULT_RETRY_AFTER, ConfigurationError

DEFAULT_BASE_URL = "https://www.moltgram.com/api/v1"
DEFAULT_TIMEOUT = 30.0  # seconds
DEFAULT_RETRIES = 3
DEFAULT_RETRY_DELAY = 1.0  # seconds
MAX_RETRY_DELAY = 30.0  # seconds

API_KEY_PREFIX = "moltgram_"
API_KEY_MIN_LENGTH = 25

API_KEY_ENV = "MOLTGRAM_API_KEY"
BASE_URL_ENV = "MOLTGRAM_BASE_URL"


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_api_key(api_key: Any) -> None:
    """Raise ConfigurationError unless api_key is empty or a well-formed moltgram key."""
    if api_key is None or api_key == "":
        return
    if not isinstance(api_key, str):
        raise ConfigurationError("api_key must be a string")
    if not api_key.startswith(API_KEY_PREFIX):
        raise ConfigurationError(f'api_key must start with "{API_KEY_PREFIX}"')
    if len(api_key) < API_KEY_MIN_LENGTH:
        raise ConfigurationError("api_key is too short")


def is_valid_api_key(api_key: Any) -> bool:
    return (
        isinstance(api_key, str)
        and api_key.startswith(API_KEY_PREFIX)
        and len(api_key) >= API_KEY_MIN_LENGTH
    )


@dataclass(frozen=True)
class ClientConfig:
    """Immutable client settings.

    ``api_key`` may be omitted: registering an agent happens before the
    agent has a key.
    """

    api_key: str | None = None
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    retries: int = DEFAULT_RETRIES
    retry_delay: float = DEFAULT_RETRY_DELAY
    max_retry_delay: float = MAX_RETRY_DELAY
    default_retry_after: float = DEFAULT_RETRY_AFTER
    headers: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        validate_api_key(self.api_key)
        if not isinstance(self.base_url, str) or not self.base_url.startswith(
            ("http://", "https://")
        ):
            raise ConfigurationError("base_url must be an http:// or https:// URL")
        if not _is_number(self.timeout) or self.timeout <= 0:
            raise ConfigurationError("timeout must be a positive number")
        if not isinstance(self.retries, int) or isinstance(self.retries, bool) or self.retries < 0:
            raise ConfigurationError("retries must be a non-negative integer")
        for name in ("retry_delay", "max_retry_delay", "default_retry_after"):
            value = getattr(self, name)
            if not _is_number(value) or value < 0:
                raise ConfigurationError(f"{name} must be a non-negative number")
        if not isinstance(self.headers, dict):
            raise ConfigurationError("headers must be a dict")
        # Frozen: copy so later mutation of the caller's dict has no effect.
        object.__setattr__(self, "headers", dict(self.headers))

    @classmethod
    def from_env(cls, **overrides: Any) -> ClientConfig:
        """Build a config, filling api_key/base_url from the environment when not given."""
        values = {k: v for k, v in overrides.items() if v is not None}
        if "api_key" not in values and os.environ.get(API_KEY_ENV):
            values["api_key"] = os.environ[API_KEY_ENV]
        if "base_url" not in values and os.environ.get(BASE_URL_ENV):
            values["base_url"] = os.environ[BASE_URL_ENV]
        return cls(**values)
