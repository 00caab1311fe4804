"""Exceptions for the GitHub service."""


class GitHubAPIError(Exception):
    """Error from GitHub API."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        rate_limit_reset: int | None = None,
    ):
        self.message = message
        self.status_code = status_code
        self.rate_limit_reset = rate_limit_reset  # Unix timestamp when rate limit resets
        super().__init__(message)


class RemoteUnavailable(GitHubAPIError):
    """A GitHub call failed: non-2xx response, network error or timeout.

    Raised by every client operation. Whether it is fatal is decided by the
    caller: profile and repository listing failures abort a sync, while
    per-repository language and activity failures are absorbed.
    """
