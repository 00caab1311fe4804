"""
GitHub API helper utilities.

Rate limit parsing and error response handling shared by every client call.
"""

import logging

import httpx

from app.services.github.exceptions import RemoteUnavailable

logger = logging.getLogger(__name__)


class RateLimitInfo:
    """Rate limit information from GitHub API response."""

    def __init__(self, response: httpx.Response) -> None:
        self.remaining = response.headers.get("X-RateLimit-Remaining")
        self.reset = response.headers.get("X-RateLimit-Reset")

    @property
    def reset_timestamp(self) -> int | None:
        """Get reset timestamp as integer, or None if not available."""
        return int(self.reset) if self.reset else None

    @property
    def is_exhausted(self) -> bool:
        """Check if rate limit is exhausted."""
        return self.remaining is not None and int(self.remaining) == 0


def handle_error_response(response: httpx.Response, resource: str) -> None:
    """
    Raise for any non-2xx response from the GitHub API.

    Args:
        response: The HTTP response from GitHub API
        resource: What was requested, for error context (e.g. "octocat" or "octocat/hello")

    Raises:
        RemoteUnavailable: For authentication, authorization, rate limit or other API errors
    """
    if response.is_success:
        return

    rate_info = RateLimitInfo(response)

    if response.status_code == 401:
        raise RemoteUnavailable("Invalid or expired GitHub token", 401)
    elif response.status_code == 404:
        raise RemoteUnavailable(f"GitHub resource not found: {resource}", 404)
    elif response.status_code in (403, 429):
        if rate_info.is_exhausted or response.status_code == 429:
            raise RemoteUnavailable(
                "GitHub API rate limit exceeded",
                response.status_code,
                rate_limit_reset=rate_info.reset_timestamp,
            )
        raise RemoteUnavailable(f"GitHub API forbidden: {resource}", 403)

    raise RemoteUnavailable(
        f"GitHub API error: {response.status_code} ({resource})", response.status_code
    )
