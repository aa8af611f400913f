"""Process-local record of the most recently observed rate-limit window."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timezone
import logging

logger = logging.getLogger(__name__)

LIMIT_HEADER = "X-RateLimit-Limit"
REMAINING_HEADER = "X-RateLimit-Remaining"
RESET_HEADER = "X-RateLimit-Reset"


@dataclass(frozen=True)
class RateLimitSnapshot:
    """Quota state as reported by one response."""

    limit: int
    remaining: int
    reset_at: datetime


def parse_rate_limit_headers(headers: Mapping[str, str]) -> RateLimitSnapshot | None:
    """Build a snapshot from response headers, or None if any of the three is missing or bad."""
    limit = headers.get(LIMIT_HEADER)
    remaining = headers.get(REMAINING_HEADER)
    reset = headers.get(RESET_HEADER)
    if not (limit and remaining and reset):
        return None
    try:
        return RateLimitSnapshot(
            limit=int(limit),
            remaining=int(remaining),
            reset_at=datetime.fromtimestamp(int(reset), tz=timezone.utc),
        )
    except (ValueError, OverflowError, OSError):
        logger.debug("Ignoring malformed rate-limit headers: %s/%s/%s", limit, remaining, reset)
        return None


class RateLimitTracker:
    """Holds at most one snapshot. Updates replace it; nothing is merged.

    The snapshot is frozen and swapped with a single assignment, so concurrent
    readers see either the old or the new one, never a mix. With racing
    responses the last writer wins.
    """

    def __init__(self) -> None:
        self._snapshot: RateLimitSnapshot | None = None

    def update(self, headers: Mapping[str, str]) -> bool:
        snapshot = parse_rate_limit_headers(headers)
        if snapshot is None:
            return False
        self._snapshot = snapshot
        return True

    @property
    def snapshot(self) -> RateLimitSnapshot | None:
        return self._snapshot

    @property
    def remaining(self) -> int | None:
        snapshot = self._snapshot
        return snapshot.remaining if snapshot is not None else None

    @property
    def reset_at(self) -> datetime | None:
        snapshot = self._snapshot
        return snapshot.reset_at if snapshot is not None else None

    @property
    def is_exhausted(self) -> bool:
        snapshot = self._snapshot
        return snapshot is not None and snapshot.remaining <= 0
