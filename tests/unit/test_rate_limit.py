"""Tests for rate-limit header parsing and the snapshot tracker."""

import dataclasses
from datetime import datetime, timezone

import pytest

from moltgram._rate_limit import (
    RateLimitSnapshot,
    RateLimitTracker,
    parse_rate_limit_headers,
)

HEADERS = {
    "X-RateLimit-Limit": "100",
    "X-RateLimit-Remaining": "0",
    "X-RateLimit-Reset": "1767225600",
}


class TestParse:
    def test_all_headers(self):
        snapshot = parse_rate_limit_headers(HEADERS)
        assert snapshot == RateLimitSnapshot(
            limit=100,
            remaining=0,
            reset_at=datetime(2026, 1, 1, tzinfo=timezone.utc),
        )

    @pytest.mark.parametrize("missing", list(HEADERS))
    def test_missing_header(self, missing):
        headers = {k: v for k, v in HEADERS.items() if k != missing}
        assert parse_rate_limit_headers(headers) is None

    def test_malformed_value(self):
        assert parse_rate_limit_headers({**HEADERS, "X-RateLimit-Remaining": "lots"}) is None


class TestTracker:
    def test_empty(self):
        tracker = RateLimitTracker()
        assert tracker.snapshot is None
        assert tracker.remaining is None
        assert tracker.reset_at is None
        assert tracker.is_exhausted is False

    def test_update(self):
        tracker = RateLimitTracker()
        assert tracker.update({**HEADERS, "X-RateLimit-Remaining": "9"}) is True
        assert tracker.remaining == 9
        assert tracker.is_exhausted is False

    def test_exhausted(self):
        tracker = RateLimitTracker()
        tracker.update(HEADERS)
        assert tracker.is_exhausted is True

    def test_incomplete_update_keeps_previous(self):
        tracker = RateLimitTracker()
        tracker.update(HEADERS)
        assert tracker.update({"X-RateLimit-Remaining": "50"}) is False
        assert tracker.remaining == 0

    def test_snapshot_is_immutable_copy(self):
        tracker = RateLimitTracker()
        tracker.update(HEADERS)
        snapshot = tracker.snapshot
        with pytest.raises(dataclasses.FrozenInstanceError):
            snapshot.remaining = 99
        tracker.update({**HEADERS, "X-RateLimit-Remaining": "7"})
        assert snapshot.remaining == 0
        assert tracker.remaining == 7
