"""Unit tests for GitHub HTTP client and helpers.

Tests the shared HTTP client singleton, rate limit parsing,
error response processing and the language cache.
"""

from __future__ import annotations

import httpx
import pytest

from app.services.github.cache import (
    cached_github_call,
    clear_all_caches,
    get_cache_stats,
    languages_cache,
)
from app.services.github.exceptions import GitHubAPIError, RemoteUnavailable
from app.services.github.helpers import RateLimitInfo, handle_error_response
from app.services.github.http_client import close_github_client, get_github_client


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _make_response(
    status_code: int = 200,
    json_data: object = None,
    headers: dict[str, str] | None = None,
) -> httpx.Response:
    """Build a fake httpx.Response."""
    return httpx.Response(
        status_code=status_code,
        json=json_data,
        headers=headers or {},
    )


# ═══════════════════════════════════════════════════════════════════════════
# RateLimitInfo
# ═══════════════════════════════════════════════════════════════════════════


class TestRateLimitInfo:
    """Tests for rate limit header parsing."""

    def test_extracts_remaining_and_reset(self):
        resp = _make_response(
            headers={
                "X-RateLimit-Remaining": "42",
                "X-RateLimit-Reset": "1700000000",
            }
        )
        info = RateLimitInfo(resp)
        assert info.remaining == "42"
        assert info.reset_timestamp == 1700000000
        assert info.is_exhausted is False

    def test_detects_exhausted(self):
        resp = _make_response(headers={"X-RateLimit-Remaining": "0"})
        assert RateLimitInfo(resp).is_exhausted is True

    def test_missing_headers(self):
        info = RateLimitInfo(_make_response(headers={}))
        assert info.remaining is None
        assert info.reset_timestamp is None
        assert info.is_exhausted is False


# ═══════════════════════════════════════════════════════════════════════════
# handle_error_response
# ═══════════════════════════════════════════════════════════════════════════


class TestHandleErrorResponse:
    """Tests for centralized GitHub API error handling."""

    def test_2xx_does_nothing(self):
        handle_error_response(_make_response(status_code=200), "octocat")
        handle_error_response(_make_response(status_code=204), "octocat")

    def test_errors_are_remote_unavailable(self):
        with pytest.raises(RemoteUnavailable):
            handle_error_response(_make_response(status_code=500), "octocat")
        assert issubclass(RemoteUnavailable, GitHubAPIError)

    def test_401_raises_auth_error(self):
        with pytest.raises(RemoteUnavailable, match="Invalid or expired") as exc_info:
            handle_error_response(_make_response(status_code=401), "octocat")
        assert exc_info.value.status_code == 401

    def test_404_raises_not_found(self):
        with pytest.raises(RemoteUnavailable, match="not found: ghost"):
            handle_error_response(_make_response(status_code=404), "ghost")

    def test_403_with_rate_limit_exhausted(self):
        resp = _make_response(
            status_code=403,
            headers={"X-RateLimit-Remaining": "0", "X-RateLimit-Reset": "1700000000"},
        )
        with pytest.raises(RemoteUnavailable, match="rate limit") as exc_info:
            handle_error_response(resp, "octocat")
        assert exc_info.value.rate_limit_reset == 1700000000

    def test_429_is_rate_limit(self):
        resp = _make_response(status_code=429, headers={"X-RateLimit-Reset": "1700000000"})
        with pytest.raises(RemoteUnavailable, match="rate limit") as exc_info:
            handle_error_response(resp, "octocat")
        assert exc_info.value.status_code == 429

    def test_403_without_rate_limit_raises_forbidden(self):
        resp = _make_response(status_code=403, headers={"X-RateLimit-Remaining": "50"})
        with pytest.raises(RemoteUnavailable, match="forbidden") as exc_info:
            handle_error_response(resp, "octocat/private")
        assert exc_info.value.rate_limit_reset is None

    def test_500_raises_generic_error(self):
        with pytest.raises(RemoteUnavailable, match="500"):
            handle_error_response(_make_response(status_code=500), "octocat")


# ═══════════════════════════════════════════════════════════════════════════
# HTTP Client Singleton
# ═══════════════════════════════════════════════════════════════════════════


class TestGitHubHttpClient:
    """Tests for the shared HTTP client singleton."""

    @pytest.mark.asyncio
    async def test_client_returns_async_client(self):
        import app.services.github.http_client as mod

        original = mod._client
        mod._client = None
        try:
            client = get_github_client()
            assert isinstance(client, httpx.AsyncClient)
            assert client.timeout.connect == 5.0
            await close_github_client()
            assert mod._client is None
        finally:
            mod._client = original

    @pytest.mark.asyncio
    async def test_returns_same_instance(self):
        import app.services.github.http_client as mod

        original = mod._client
        mod._client = None
        try:
            a = get_github_client()
            b = get_github_client()
            assert a is b
            await close_github_client()
        finally:
            mod._client = original

    @pytest.mark.asyncio
    async def test_close_without_client_is_noop(self):
        import app.services.github.http_client as mod

        original = mod._client
        mod._client = None
        try:
            await close_github_client()
            assert mod._client is None
        finally:
            mod._client = original


# ═══════════════════════════════════════════════════════════════════════════
# Cache utilities
# ═══════════════════════════════════════════════════════════════════════════


class TestCacheUtilities:
    """Tests for cache management functions."""

    def test_clear_all_caches(self):
        languages_cache["test_key"] = {"Python": 1}
        assert len(languages_cache) == 1
        clear_all_caches()
        assert len(languages_cache) == 0

    def test_get_cache_stats_returns_sizes(self):
        stats = get_cache_stats()
        assert stats["languages"]["size"] == 0
        assert stats["languages"]["maxsize"] == 2000

    @pytest.mark.asyncio
    async def test_exceptions_are_not_cached(self):
        calls = 0

        class Fetcher:
            @cached_github_call(languages_cache)
            async def fetch(self, owner: str, repo: str) -> dict[str, int]:
                nonlocal calls
                calls += 1
                if calls == 1:
                    raise RemoteUnavailable("boom")
                return {"Go": 10}

        fetcher = Fetcher()
        with pytest.raises(RemoteUnavailable):
            await fetcher.fetch("octocat", "a")
        assert await fetcher.fetch("octocat", "a") == {"Go": 10}
        assert await fetcher.fetch("octocat", "a") == {"Go": 10}
        assert calls == 2

    @pytest.mark.asyncio
    async def test_key_ignores_instance(self):
        calls = 0

        class Fetcher:
            @cached_github_call(languages_cache)
            async def fetch(self, owner: str, repo: str) -> dict[str, int]:
                nonlocal calls
                calls += 1
                return {"Go": 10}

        await Fetcher().fetch("octocat", "a")
        await Fetcher().fetch("octocat", "a")
        await Fetcher().fetch("octocat", "b")
        assert calls == 2
