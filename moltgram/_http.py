"""Request executor: auth, timeout, error mapping, rate-limit tracking and retry."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from contextlib import closing
from dataclasses import dataclass, field
from datetime import datetime, timezone
import json as jsonlib
import logging
import time
from typing import Any, Protocol
from urllib.parse import urlencode

import requests
from urllib3.exceptions import ReadTimeoutError

from . import __version__
from ._config import ClientConfig, validate_api_key
from ._exceptions import (
    APIError,
    MoltgramError,
    NetworkError,
    RateLimitError,
    TimeoutError,
    is_retryable,
    map_error,
)
from ._rate_limit import RateLimitSnapshot, RateLimitTracker

logger = logging.getLogger(__name__)

USER_AGENT = f"moltgram-python/{__version__}"
METHODS = frozenset({"GET", "POST", "PATCH", "DELETE"})
CHUNK_SIZE = 1024

Query = Mapping[str, Any]


@dataclass(frozen=True)
class RequestSpec:
    """One outbound call."""

    method: str
    path: str
    query: Query | None = None
    json: Any = None
    headers: Mapping[str, str] | None = None

    def __post_init__(self) -> None:
        method = self.method.upper()
        if method not in METHODS:
            raise ValueError(f"Unsupported HTTP method: {self.method}")
        if not self.path.startswith("/"):
            raise ValueError(f"Path must start with '/': {self.path!r}")
        object.__setattr__(self, "method", method)


@dataclass
class Result:
    """Outcome of one execute() call: parsed body on success, typed error otherwise."""

    data: Any = None
    error: MoltgramError | None = None
    attempts: int = field(default=1, compare=False)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Any:
        if self.error is not None:
            raise self.error
        return self.data


class Transport(Protocol):
    """What the executor needs from an HTTP library."""

    def send(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str],
        json: Any,
        timeout: float,
    ) -> requests.Response: ...

    def close(self) -> None: ...


class RequestsTransport:
    """Transport backed by a pooled requests.Session.

    Responses are streamed so the executor reads the body itself and must
    close the response to hand the connection back to the pool.
    """

    def __init__(self, session: requests.Session | None = None):
        self._session = session or requests.Session()

    def send(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str],
        json: Any,
        timeout: float,
    ) -> requests.Response:
        return self._session.request(
            method, url, headers=dict(headers), json=json, timeout=timeout, stream=True
        )

    def close(self) -> None:
        self._session.close()


def _format_query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _is_read_timeout(exc: requests.RequestException) -> bool:
    # requests re-raises body read timeouts as ConnectionError(ReadTimeoutError)
    return any(isinstance(arg, ReadTimeoutError) for arg in exc.args)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class HTTPClient:
    """Executes API requests and returns a Result instead of raising for API failures.

    Retries network failures, 5xx and 429 responses up to ``config.retries``
    extra attempts. A 429 waits exactly the server's ``retryAfter``; other
    retries back off exponentially from ``config.retry_delay``, capped at
    ``config.max_retry_delay``.

    Args:
        config: Validated client configuration.
        transport: HTTP transport; defaults to a requests.Session wrapper.
        sleep: Called with the backoff delay in seconds between attempts.
        clock: Returns the current UTC time, used for ``RateLimitError.reset_at``.
        monotonic: Clock for the per-attempt deadline (covers connect, headers and body).
        on_retry: Optional hook called as ``on_retry(attempt, error, delay)``
            before each backoff sleep.
    """

    def __init__(
        self,
        config: ClientConfig,
        *,
        transport: Transport | None = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], datetime] = _utcnow,
        monotonic: Callable[[], float] = time.monotonic,
        on_retry: Callable[[int, MoltgramError, float], None] | None = None,
    ):
        self._config = config
        self._api_key = config.api_key or None
        self._base_url = config.base_url.rstrip("/")
        self._transport = transport or RequestsTransport()
        self._sleep = sleep
        self._clock = clock
        self._monotonic = monotonic
        self._on_retry = on_retry
        self._rate_limits = RateLimitTracker()

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def rate_limits(self) -> RateLimitTracker:
        return self._rate_limits

    def set_api_key(self, api_key: str) -> None:
        """Swap the credential used for subsequent requests."""
        validate_api_key(api_key)
        self._api_key = api_key or None

    def get_rate_limit_snapshot(self) -> RateLimitSnapshot | None:
        return self._rate_limits.snapshot

    # -- request building -------------------------------------------------

    def build_url(self, path: str, query: Query | None = None) -> str:
        """Join base URL and path; drop None-valued params, keep empty strings."""
        url = f"{self._base_url}{path}"
        if query:
            pairs = [(k, _format_query_value(v)) for k, v in query.items() if v is not None]
            if pairs:
                url = f"{url}?{urlencode(pairs)}"
        return url

    def build_headers(
        self, overrides: Mapping[str, str] | None = None, *, has_body: bool = False
    ) -> dict[str, str]:
        """Static headers, then per-call overrides (case-insensitive), then auth."""
        headers: dict[str, str] = {}

        def put(name: str, value: str) -> None:
            for existing in [k for k in headers if k.lower() == name.lower()]:
                del headers[existing]
            headers[name] = value

        put("User-Agent", USER_AGENT)
        put("Accept", "application/json")
        if has_body:
            put("Content-Type", "application/json")
        for name, value in self._config.headers.items():
            put(name, value)
        for name, value in (overrides or {}).items():
            put(name, value)
        if self._api_key:
            put("Authorization", f"Bearer {self._api_key}")
        return headers

    # -- execution --------------------------------------------------------

    def execute(
        self,
        method: str,
        path: str,
        *,
        query: Query | None = None,
        json: Any = None,
        headers: Mapping[str, str] | None = None,
    ) -> Result:
        """Send one logical request (with retries) and return its Result."""
        spec = RequestSpec(method=method, path=path, query=query, json=json, headers=headers)
        return self.execute_spec(spec)

    def execute_spec(self, spec: RequestSpec) -> Result:
        url = self.build_url(spec.path, spec.query)
        headers = self.build_headers(spec.headers, has_body=spec.json is not None)
        max_attempts = self._config.retries + 1
        logger.debug("%s %s", spec.method, url)

        attempt = 0
        while True:
            try:
                data = self._send_once(spec.method, url, headers, spec.json)
            except MoltgramError as exc:
                error = exc
            else:
                return Result(data=data, attempts=attempt + 1)

            if attempt == max_attempts - 1 or not is_retryable(error):
                return Result(error=error, attempts=attempt + 1)

            delay = self._backoff(attempt, error)
            logger.warning(
                "%s %s failed (attempt %d/%d): %s; retrying in %.1fs",
                spec.method,
                url,
                attempt + 1,
                max_attempts,
                error.message,
                delay,
            )
            if self._on_retry is not None:
                self._on_retry(attempt + 1, error, delay)
            self._sleep(delay)
            attempt += 1

    def request(
        self,
        method: str,
        path: str,
        *,
        query: Query | None = None,
        json: Any = None,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        """Like execute(), but return the parsed body or raise the typed error."""
        return self.execute(method, path, query=query, json=json, headers=headers).unwrap()

    def _backoff(self, attempt: int, error: MoltgramError) -> float:
        if isinstance(error, RateLimitError):
            return error.retry_after
        return min(self._config.retry_delay * (2**attempt), self._config.max_retry_delay)

    def _send_once(self, method: str, url: str, headers: dict[str, str], body: Any) -> Any:
        timeout = self._config.timeout
        deadline = self._monotonic() + timeout
        try:
            resp = self._transport.send(method, url, headers=headers, json=body, timeout=timeout)
        except requests.Timeout as e:
            raise TimeoutError(
                f"Request to {url} timed out after {timeout:g}s", timeout=timeout
            ) from e
        except requests.ConnectionError as e:
            raise NetworkError(f"Network error: {e!s}") from e
        except requests.RequestException as e:
            raise APIError(f"Request to {url} failed: {e!s}") from e

        with closing(resp):
            self._rate_limits.update(resp.headers)
            content = self._read_body(resp, url, deadline)
            if 200 <= resp.status_code < 300:
                return self._parse_success(resp, content)
            raise map_error(
                resp.status_code,
                self._parse_error_body(content),
                now=self._clock(),
                default_retry_after=self._config.default_retry_after,
            )

    def _read_body(self, resp: requests.Response, url: str, deadline: float) -> bytes:
        # requests applies the timeout per socket read; the deadline bounds the whole call
        timeout = self._config.timeout
        expired = TimeoutError(
            f"Reading response from {url} timed out after {timeout:g}s", timeout=timeout
        )
        chunks = []
        try:
            for chunk in resp.iter_content(chunk_size=CHUNK_SIZE):
                if self._monotonic() > deadline:
                    raise expired
                chunks.append(chunk)
        except requests.Timeout as e:
            raise expired from e
        except requests.RequestException as e:
            if _is_read_timeout(e):
                raise expired from e
            raise NetworkError(f"Network error: {e!s}") from e
        return b"".join(chunks)

    @staticmethod
    def _parse_success(resp: requests.Response, content: bytes) -> Any:
        if not content:
            return {}
        try:
            return jsonlib.loads(content)
        except ValueError:
            logger.debug("Non-JSON success body (HTTP %d)", resp.status_code)
            return {"success": True}

    @staticmethod
    def _parse_error_body(content: bytes) -> Any:
        if not content:
            return None
        try:
            return jsonlib.loads(content)
        except ValueError:
            logger.debug("Failed to parse error body: %s", content[:200])
            return None

    def close(self) -> None:
        self._transport.close()
