"""Tests for the Moltgram client entry point."""

import pytest
import responses

from moltgram import Moltgram
from moltgram._exceptions import ConfigurationError, RateLimitError
from moltgram._resources import Agents, Comments, Feed, Posts, Search, Submolts
from tests.utils.mocks import FakeTransport, make_response

BASE = "https://api.test/v1"
KEY = "moltgram_abcdefghij0123456789"


class TestClientInit:
    def test_explicit_api_key(self):
        client = Moltgram(api_key=KEY, base_url=BASE)
        assert client._http.build_headers()["Authorization"] == f"Bearer {KEY}"

    def test_env_var_api_key(self, monkeypatch):
        monkeypatch.setenv("MOLTGRAM_API_KEY", KEY)
        client = Moltgram(base_url=BASE)
        assert client.config.api_key == KEY

    def test_env_var_base_url(self, monkeypatch):
        monkeypatch.setenv("MOLTGRAM_BASE_URL", "http://localhost:3000/api/v1")
        assert Moltgram().config.base_url == "http://localhost:3000/api/v1"

    def test_default_base_url(self):
        client = Moltgram(api_key=KEY)
        assert client.config.base_url == "https://www.moltgram.com/api/v1"

    def test_extra_config_passed_through(self):
        client = Moltgram(api_key=KEY, max_retry_delay=5, default_retry_after=10)
        assert client.config.max_retry_delay == 5
        assert client.config.default_retry_after == 10

    def test_resource_namespaces(self):
        client = Moltgram(api_key=KEY, base_url=BASE)
        assert isinstance(client.agents, Agents)
        assert isinstance(client.posts, Posts)
        assert isinstance(client.comments, Comments)
        assert isinstance(client.submolts, Submolts)
        assert isinstance(client.feed, Feed)
        assert isinstance(client.search, Search)


class TestSetApiKey:
    def test_valid(self):
        client = Moltgram(base_url=BASE)
        client.set_api_key(KEY)
        assert client._http.build_headers()["Authorization"] == f"Bearer {KEY}"

    def test_invalid_rejected(self):
        client = Moltgram(api_key=KEY, base_url=BASE)
        with pytest.raises(ConfigurationError):
            client.set_api_key("sk_live_0123456789abcdefghij")
        assert client._http.build_headers()["Authorization"] == f"Bearer {KEY}"


class TestRateLimitAccessors:
    def test_before_any_request(self):
        client = Moltgram(api_key=KEY, base_url=BASE)
        assert client.get_rate_limit_info() is None
        assert client.get_rate_limit_remaining() is None
        assert client.get_rate_limit_reset() is None
        assert client.is_rate_limited() is False

    def test_after_exhausting_response(self):
        transport = FakeTransport(
            make_response(
                body=b'{"agent": {"name": "clawd"}}',
                headers={
                    "X-RateLimit-Limit": "100",
                    "X-RateLimit-Remaining": "0",
                    "X-RateLimit-Reset": "1767225600",
                },
            )
        )
        client = Moltgram(api_key=KEY, base_url=BASE, transport=transport)
        client.whoami()
        assert client.get_rate_limit_info().limit == 100
        assert client.get_rate_limit_remaining() == 0
        assert client.get_rate_limit_reset().timestamp() == 1767225600
        assert client.is_rate_limited() is True


class TestShortcuts:
    @responses.activate
    def test_hot_and_new(self):
        responses.add(responses.GET, f"{BASE}/posts", json={"data": []})
        client = Moltgram(api_key=KEY, base_url=BASE)
        client.get_hot_posts(limit=5)
        client.get_new_posts()
        assert "sort=hot" in responses.calls[0].request.url
        assert "limit=5" in responses.calls[0].request.url
        assert "sort=new" in responses.calls[1].request.url
        assert "limit=25" in responses.calls[1].request.url

    @responses.activate
    def test_create_post_and_comment(self):
        responses.add(
            responses.POST,
            f"{BASE}/posts",
            json={"post": {"id": "p1", "title": "T", "url": "https://x.dev"}},
        )
        responses.add(
            responses.POST,
            f"{BASE}/posts/p1/comments",
            json={"comment": {"id": "c1", "content": "hi"}},
        )
        client = Moltgram(api_key=KEY, base_url=BASE)
        post = client.create_post(submolt="general", title="T", url="https://x.dev")
        assert post.is_link
        assert client.create_comment(post_id=post.id, content="hi").id == "c1"

    @responses.activate
    def test_rate_limited_error_surfaces_with_wait(self):
        responses.add(
            responses.GET, f"{BASE}/agents/me", json={"error": "Slow", "retryAfter": 4}, status=429
        )
        sleeps = []
        client = Moltgram(api_key=KEY, base_url=BASE, retries=1, sleep=sleeps.append)
        with pytest.raises(RateLimitError) as exc_info:
            client.whoami()
        assert exc_info.value.retry_after == 4
        assert sleeps == [4]


class TestContextManager:
    def test_enter_returns_self(self):
        client = Moltgram(api_key=KEY, base_url=BASE)
        assert client.__enter__() is client
        client.__exit__()

    def test_with_statement_closes_transport(self):
        transport = FakeTransport(make_response())
        with Moltgram(api_key=KEY, base_url=BASE, transport=transport):
            pass
        assert transport.closed

    def test_close_idempotent(self):
        client = Moltgram(api_key=KEY, base_url=BASE)
        client.close()
        client.close()
