"""
GitHub API client for profile analytics.

Provides every remote read a sync needs:
- Account profile
- Owned repositories (all pages)
- Language breakdown across repositories
- Recent public activity
- Daily contribution counts (GraphQL)

Failure policy: each call raises RemoteUnavailable on error. fetch_languages,
fetch_recent_activity and fetch_contribution_counts absorb errors themselves
(logged, not propagated); profile and repository listing failures reach the
caller.
"""

import asyncio
import logging
from collections.abc import Iterable
from datetime import UTC, date, datetime, time
from typing import Any

import httpx

from app.config import settings
from app.services.github.cache import cached_github_call, languages_cache
from app.services.github.constants import API_VERSION, CONTRIBUTION_CALENDAR_QUERY
from app.services.github.exceptions import RemoteUnavailable
from app.services.github.helpers import handle_error_response
from app.services.github.http_client import get_github_client
from app.services.github.types import RemoteProfile, RemoteRepository

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 100


def calculate_language_percentages(histograms: Iterable[dict[str, int]]) -> dict[str, float]:
    """
    Convert per-repository byte histograms into a percentage breakdown.

    Bytes are summed per language across all histograms, then each language's
    share of the grand total is rounded to two decimals. Ordered by descending
    percentage; equal percentages keep first-seen order.

    Returns an empty dict when there are no bytes at all.
    """
    totals: dict[str, int] = {}
    for histogram in histograms:
        for language, byte_count in histogram.items():
            totals[language] = totals.get(language, 0) + byte_count

    total_bytes = sum(totals.values())
    if total_bytes <= 0:
        return {}

    percentages = {
        language: round(byte_count / total_bytes * 100, 2)
        for language, byte_count in totals.items()
    }
    ordered = sorted(percentages.items(), key=lambda item: item[1], reverse=True)
    return dict(ordered)


class GitHubAnalyticsClient:
    """
    Read-only GitHub client bound to one user's access token.

    A new instance is created per sync request; the token is never shared
    between users. Uses the shared HTTP client singleton for connection pooling.
    """

    def __init__(
        self,
        token: str,
        *,
        page_size: int | None = None,
        max_concurrency: int | None = None,
        base_url: str | None = None,
        graphql_url: str | None = None,
    ):
        self.token = token
        self.page_size = min(page_size or settings.github_page_size, MAX_PAGE_SIZE)
        self.max_concurrency = max_concurrency or settings.github_language_concurrency
        self.base_url = (base_url or settings.github_api_url).rstrip("/")
        self.graphql_url = graphql_url or settings.github_graphql_url
        self._headers = {
            "Authorization": f"Bearer {token}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": API_VERSION,
        }

    async def _request(
        self,
        method: str,
        url: str,
        resource: str,
        **kwargs: Any,
    ) -> httpx.Response:
        """Send one request; any failure becomes RemoteUnavailable."""
        client = get_github_client()
        try:
            response = await client.request(
                method,
                url,
                headers=self._headers,
                timeout=settings.github_request_timeout,
                **kwargs,
            )
        except httpx.TimeoutException as e:
            raise RemoteUnavailable(f"GitHub request timed out: {resource}") from e
        except httpx.RequestError as e:
            raise RemoteUnavailable(f"GitHub request failed: {resource} ({e})") from e

        handle_error_response(response, resource)
        return response

    @staticmethod
    def _json(response: httpx.Response, resource: str) -> Any:
        """Decode a 2xx body; a body that is not JSON becomes RemoteUnavailable."""
        try:
            return response.json()
        except ValueError as e:
            raise RemoteUnavailable(f"Invalid JSON from GitHub: {resource}") from e

    def _normalize_profile(self, data: dict[str, Any]) -> RemoteProfile:
        """Convert GitHub API response to RemoteProfile dataclass."""
        return RemoteProfile(
            github_id=data["id"],
            login=data["login"],
            name=data.get("name"),
            avatar_url=data.get("avatar_url"),
            html_url=data.get("html_url"),
            bio=data.get("bio"),
            location=data.get("location"),
            company=data.get("company"),
            blog=data.get("blog") or None,
            public_repos=data.get("public_repos", 0),
            public_gists=data.get("public_gists", 0),
            followers=data.get("followers", 0),
            following=data.get("following", 0),
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
            hireable=data.get("hireable"),
        )

    def _normalize_repo(self, data: dict[str, Any]) -> RemoteRepository:
        """Convert GitHub API response to RemoteRepository dataclass."""
        owner = (data.get("owner") or {}).get("login") or data["full_name"].split("/", 1)[0]
        return RemoteRepository(
            github_id=data["id"],
            name=data["name"],
            full_name=data["full_name"],
            owner=owner,
            description=data.get("description"),
            html_url=data.get("html_url", ""),
            language=data.get("language"),
            stargazers_count=data.get("stargazers_count", 0),
            watchers_count=data.get("watchers_count", 0),
            forks_count=data.get("forks_count", 0),
            size=data.get("size", 0),
            visibility=data.get("visibility") or ("private" if data.get("private") else "public"),
            default_branch=data.get("default_branch", "main"),
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
            pushed_at=data.get("pushed_at"),
            topics=list(data.get("topics") or []),
        )

    async def fetch_authenticated_user(self) -> tuple[RemoteProfile, list[str]]:
        """
        Fetch the account that owns the token, plus its granted OAuth scopes.

        Used to validate a token before it is stored.
        """
        response = await self._request("GET", f"{self.base_url}/user", "authenticated user")
        scopes_header = response.headers.get("X-OAuth-Scopes", "")
        scopes = [s.strip() for s in scopes_header.split(",") if s.strip()]
        return self._normalize_profile(self._json(response, "authenticated user")), scopes

    async def fetch_profile(self, handle: str) -> RemoteProfile:
        """
        Fetch a user profile by login.

        Raises:
            RemoteUnavailable: On any non-2xx response, network error or timeout
        """
        response = await self._request("GET", f"{self.base_url}/users/{handle}", handle)
        return self._normalize_profile(self._json(response, handle))

    async def fetch_repositories(self, handle: str) -> list[RemoteRepository]:
        """
        Fetch every repository owned by the account.

        Pages through the listing at page_size per page until a page comes back
        short. All pages are accumulated before returning; a failed page aborts
        the whole listing.

        Raises:
            RemoteUnavailable: If any page request fails
        """
        repositories: list[RemoteRepository] = []
        page = 1

        while True:
            resource = f"{handle} repositories (page {page})"
            response = await self._request(
                "GET",
                f"{self.base_url}/users/{handle}/repos",
                resource,
                params={
                    "type": "owner",
                    "sort": "updated",
                    "per_page": self.page_size,
                    "page": page,
                },
            )
            data: list[dict[str, Any]] = self._json(response, resource)
            repositories.extend(self._normalize_repo(r) for r in data)

            if len(data) < self.page_size:
                break
            page += 1

        logger.debug(f"Fetched {len(repositories)} repositories for {handle} in {page} page(s)")
        return repositories

    @cached_github_call(languages_cache)
    async def fetch_repo_languages(self, owner: str, repo: str) -> dict[str, int]:
        """
        Fetch the language byte histogram for a single repository.

        Results are cached for 1 hour - language breakdown rarely changes.
        """
        response = await self._request(
            "GET",
            f"{self.base_url}/repos/{owner}/{repo}/languages",
            f"{owner}/{repo}",
        )
        data: dict[str, int] = self._json(response, f"{owner}/{repo}")
        return data or {}

    async def fetch_languages(self, repositories: list[RemoteRepository]) -> dict[str, float]:
        """
        Language percentage breakdown across all repositories.

        One request per repository, at most max_concurrency in flight. A
        repository whose request fails is skipped and logged; the breakdown is
        computed from the remaining ones.

        Returns:
            Mapping of language -> percentage of total bytes (2 decimals),
            empty when no bytes were collected
        """
        if not repositories:
            return {}

        semaphore = asyncio.Semaphore(self.max_concurrency)

        async def fetch_with_limit(repo: RemoteRepository) -> dict[str, int] | None:
            async with semaphore:
                try:
                    return await self.fetch_repo_languages(repo.owner, repo.name)
                except (RemoteUnavailable, ValueError) as e:
                    logger.warning(f"Skipping languages for {repo.full_name}: {e}")
                    return None

        results = await asyncio.gather(*(fetch_with_limit(r) for r in repositories))
        histograms = [h for h in results if h is not None]

        skipped = len(results) - len(histograms)
        if skipped:
            logger.warning(
                f"Language breakdown built from {len(histograms)}/{len(results)} repositories "
                f"({skipped} skipped)"
            )

        return calculate_language_percentages(histograms)

    async def fetch_recent_activity(self, handle: str) -> list[dict[str, Any]]:
        """
        Fetch the account's most recent public events.

        Best-effort: on failure logs a warning and returns an empty list.
        """
        try:
            response = await self._request(
                "GET",
                f"{self.base_url}/users/{handle}/events/public",
                f"{handle} events",
                params={"per_page": settings.github_events_per_page},
            )
            events: list[dict[str, Any]] = self._json(response, f"{handle} events")
        except (RemoteUnavailable, ValueError) as e:
            logger.warning(f"Failed to get recent activity for {handle}: {e}")
            return []

        return events

    async def fetch_contribution_counts(
        self,
        handle: str,
        start: date,
        end: date,
    ) -> dict[date, int] | None:
        """
        Fetch daily contribution counts between start and end (inclusive).

        Uses the GraphQL contributionCalendar; the window must not exceed one
        year. Best-effort: returns None on any failure so the caller can fall
        back to another source.
        """
        variables = {
            "login": handle,
            "from": datetime.combine(start, time.min, tzinfo=UTC).isoformat(),
            "to": datetime.combine(end, time.max, tzinfo=UTC).isoformat(),
        }

        try:
            response = await self._request(
                "POST",
                self.graphql_url,
                f"{handle} contribution calendar",
                json={"query": CONTRIBUTION_CALENDAR_QUERY, "variables": variables},
            )
            payload: dict[str, Any] = self._json(response, f"{handle} contribution calendar")
        except (RemoteUnavailable, ValueError) as e:
            logger.warning(f"Failed to get contribution calendar for {handle}: {e}")
            return None

        if payload.get("errors"):
            logger.warning(
                f"Contribution calendar query for {handle} returned errors: {payload['errors']}"
            )
            return None

        user = (payload.get("data") or {}).get("user")
        if not user:
            logger.warning(f"Contribution calendar query found no user {handle}")
            return None

        calendar = (user.get("contributionsCollection") or {}).get("contributionCalendar") or {}

        counts: dict[date, int] = {}
        for week in calendar.get("weeks") or []:
            for day in week.get("contributionDays") or []:
                try:
                    day_date = date.fromisoformat(day["date"])
                except (KeyError, TypeError, ValueError):
                    continue
                if start <= day_date <= end:
                    counts[day_date] = int(day.get("contributionCount") or 0)

        return counts

