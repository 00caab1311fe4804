"""
GitHub service package.

Usage: `from app.services.github import GitHubAnalyticsClient, RemoteUnavailable`

Module structure:
- client.py: GitHubAnalyticsClient (profile, repositories, languages, activity, calendar)
- http_client.py: Shared pooled httpx client
- helpers.py: Rate limit handling and error utilities
- cache.py: TTL cache for per-repository language histograms
- types.py: Remote records
- exceptions.py: Custom exceptions
- constants.py: API constants, language colors, GraphQL query
"""

from app.services.github.cache import clear_all_caches as clear_github_caches
from app.services.github.cache import get_cache_stats as get_github_cache_stats
from app.services.github.client import GitHubAnalyticsClient, calculate_language_percentages
from app.services.github.constants import GITHUB_LANGUAGE_COLORS, language_color
from app.services.github.exceptions import GitHubAPIError, RemoteUnavailable
from app.services.github.helpers import RateLimitInfo, handle_error_response
from app.services.github.http_client import close_github_client
from app.services.github.types import RemoteProfile, RemoteRepository

__all__ = [
    # Client (main entry point)
    "GitHubAnalyticsClient",
    # HTTP client lifecycle
    "close_github_client",
    # Cache management
    "clear_github_caches",
    "get_github_cache_stats",
    # Utilities
    "calculate_language_percentages",
    "handle_error_response",
    "language_color",
    "RateLimitInfo",
    # Exceptions
    "GitHubAPIError",
    "RemoteUnavailable",
    # Types
    "RemoteProfile",
    "RemoteRepository",
    # Constants
    "GITHUB_LANGUAGE_COLORS",
]
