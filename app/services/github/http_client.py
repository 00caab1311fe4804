"""
Shared HTTP client for GitHub API operations.

A single pooled AsyncClient serves every GitHubAnalyticsClient instance, so
the language fan-out of a sync reuses connections instead of paying a TLS
handshake per repository. Auth headers are passed per request, never stored
on the client.
"""

import logging

import httpx

from app.config import settings

logger = logging.getLogger(__name__)

# Module-level singleton client
_client: httpx.AsyncClient | None = None


def get_github_client() -> httpx.AsyncClient:
    """
    Get or create the shared HTTP client for GitHub API calls.

    Every request is bounded by settings.github_request_timeout; a timeout
    surfaces as httpx.TimeoutException and is converted to RemoteUnavailable
    by the caller.
    """
    global _client
    if _client is None or _client.is_closed:
        _client = httpx.AsyncClient(
            timeout=httpx.Timeout(settings.github_request_timeout, connect=5.0),
            limits=httpx.Limits(max_connections=20, max_keepalive_connections=10),
            http2=True,
        )
        logger.debug("Created new GitHub HTTP client with connection pooling")
    return _client


async def close_github_client() -> None:
    """Close the shared HTTP client. Called on app shutdown."""
    global _client
    if _client is not None and not _client.is_closed:
        await _client.aclose()
        _client = None
        logger.debug("Closed GitHub HTTP client")
