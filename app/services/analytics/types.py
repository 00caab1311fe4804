"""Data types produced by the analytics pipeline."""

from dataclasses import dataclass, field
from datetime import date
from typing import Any

from app.services.github.types import RemoteProfile, RemoteRepository


@dataclass
class ContributionDay:
    """Activity for one calendar day."""

    date: date
    count: int
    level: int  # 0-4 intensity bucket


@dataclass
class CalendarMonth:
    """A month label anchored at the week where that month starts."""

    name: str  # Short month name, e.g. "Jan"
    week_index: int


@dataclass
class CalendarLayout:
    """Contribution days arranged as Sunday-first weeks for heatmap rendering."""

    weeks: list[list[ContributionDay]] = field(default_factory=list)
    months: list[CalendarMonth] = field(default_factory=list)
    total_contributions: int = 0


@dataclass
class AnalyticsResult:
    """Everything a single sync gathered for one account."""

    profile: RemoteProfile
    repositories: list[RemoteRepository]
    languages: dict[str, float]
    total_stars: int
    total_forks: int
    total_watchers: int
    top_repositories: list[RemoteRepository]
    recent_activity: list[dict[str, Any]]
    contributions: list[ContributionDay]
