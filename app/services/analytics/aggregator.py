"""
Builds one consolidated analytics result for a GitHub account.

Fetch order:
1. Profile, repositories and recent activity concurrently.
2. Language breakdown and contribution calendar concurrently, once the
   repositories are known.

Profile or repository failures abort the build with RemoteUnavailable. The
remaining sources degrade to empty data on their own.
"""

import asyncio
import logging
from datetime import UTC, date, datetime, timedelta
from typing import Any

from app.config import settings
from app.services.analytics.calendar import build_contribution_days, count_events_by_day
from app.services.analytics.types import AnalyticsResult, ContributionDay
from app.services.github.client import GitHubAnalyticsClient
from app.services.github.types import RemoteRepository

logger = logging.getLogger(__name__)


def select_top_repositories(
    repositories: list[RemoteRepository],
    limit: int = 10,
) -> list[RemoteRepository]:
    """
    Starred repositories ordered by descending star count.

    Repositories with no stars are excluded. Equal star counts keep their
    input order.
    """
    starred = [r for r in repositories if r.stargazers_count > 0]
    starred.sort(key=lambda r: r.stargazers_count, reverse=True)
    return starred[:limit]


async def build_contributions(
    client: GitHubAnalyticsClient,
    handle: str,
    recent_activity: list[dict[str, Any]],
    *,
    today: date | None = None,
    window_days: int | None = None,
) -> list[ContributionDay]:
    """
    Daily contribution days for the trailing window ending today (UTC).

    Prefers the GraphQL contribution calendar; when that is unavailable the
    recent public events are bucketed by day instead.
    """
    window_days = window_days or settings.contribution_window_days
    end_date = today or datetime.now(UTC).date()
    start_date = end_date - timedelta(days=window_days - 1)

    counts = await client.fetch_contribution_counts(handle, start_date, end_date)
    if counts is None:
        logger.info(f"Contribution calendar for {handle} built from recent public events")
        counts = count_events_by_day(recent_activity)

    return build_contribution_days(counts, end_date, window_days)


async def build_snapshot(
    handle: str,
    client: GitHubAnalyticsClient,
    *,
    top_limit: int | None = None,
    today: date | None = None,
) -> AnalyticsResult:
    """
    Gather and reduce everything a sync persists for `handle`.

    Raises:
        RemoteUnavailable: If the profile or repository listing cannot be fetched
    """
    profile, repositories, recent_activity = await asyncio.gather(
        client.fetch_profile(handle),
        client.fetch_repositories(handle),
        client.fetch_recent_activity(handle),
    )

    languages, contributions = await asyncio.gather(
        client.fetch_languages(repositories),
        build_contributions(client, handle, recent_activity, today=today),
    )

    total_stars = sum(r.stargazers_count for r in repositories)
    total_forks = sum(r.forks_count for r in repositories)
    total_watchers = sum(r.watchers_count for r in repositories)

    logger.info(
        f"Built analytics for {handle}: {len(repositories)} repos, "
        f"{len(languages)} languages, {total_stars} stars"
    )

    return AnalyticsResult(
        profile=profile,
        repositories=repositories,
        languages=languages,
        total_stars=total_stars,
        total_forks=total_forks,
        total_watchers=total_watchers,
        top_repositories=select_top_repositories(
            repositories, top_limit or settings.top_repositories_limit
        ),
        recent_activity=recent_activity,
        contributions=contributions,
    )
