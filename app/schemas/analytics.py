"""Pydantic schemas for GitHub connection, sync and analytics endpoints."""

from datetime import date, datetime

from pydantic import BaseModel, Field


class GitHubConnectionStatus(BaseModel):
    """Response for GET /github/connection."""

    connected: bool
    github_login: str | None = None
    scopes: list[str] = Field(default_factory=list)
    connected_at: datetime | None = None
    encryption_enabled: bool


class GitHubConnectRequest(BaseModel):
    """Request body for PUT /github/connection."""

    access_token: str = Field(min_length=1, max_length=255)


class GitHubConnectResponse(GitHubConnectionStatus):
    """Response for PUT /github/connection."""

    scope_warning: str | None = None


class SyncStats(BaseModel):
    total_repos: int
    total_stars: int
    total_forks: int
    languages: int  # Number of distinct languages


class SyncResponse(BaseModel):
    """Response for POST /github/sync."""

    success: bool
    message: str
    data: SyncStats


class RepositoryOut(BaseModel):
    github_id: int
    name: str
    full_name: str
    owner: str
    description: str | None
    html_url: str
    language: str | None
    stargazers_count: int
    watchers_count: int
    forks_count: int
    size: int
    visibility: str
    default_branch: str
    created_at: str | None
    updated_at: str | None
    pushed_at: str | None = None
    topics: list[str] = Field(default_factory=list)


class LanguageShare(BaseModel):
    name: str
    percentage: float
    color: str


class ContributionDayOut(BaseModel):
    date: date
    count: int
    level: int


class CalendarMonthOut(BaseModel):
    name: str
    week_index: int


class ContributionCalendarOut(BaseModel):
    weeks: list[list[ContributionDayOut]]
    months: list[CalendarMonthOut]
    total_contributions: int


class GitHubAnalyticsResponse(BaseModel):
    """Response for GET /github/sync: the stored snapshot, decoded."""

    public_repos: int
    public_gists: int
    followers: int
    following: int
    total_stars: int
    total_forks: int
    total_watchers: int
    repositories: list[RepositoryOut]
    top_repositories: list[RepositoryOut]
    languages: dict[str, float]
    language_breakdown: list[LanguageShare]
    contributions: list[ContributionDayOut]
    calendar: ContributionCalendarOut
    sync_status: str
    sync_error: str | None = None
    last_sync_at: datetime | None = None
