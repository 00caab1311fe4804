"""Data types for GitHub API responses."""

from dataclasses import dataclass, field


@dataclass
class RemoteProfile:
    """A GitHub account as returned by GET /users/{login} at fetch time."""

    github_id: int
    login: str
    name: str | None
    avatar_url: str | None
    html_url: str | None
    bio: str | None
    location: str | None
    company: str | None
    blog: str | None
    public_repos: int
    public_gists: int
    followers: int
    following: int
    created_at: str | None  # ISO 8601 timestamps, kept as GitHub sends them
    updated_at: str | None
    hireable: bool | None = None


@dataclass
class RemoteRepository:
    """Normalized repository owned by the synced account."""

    github_id: int
    name: str
    full_name: str
    owner: str
    description: str | None
    html_url: str
    language: str | None  # Primary language tag
    stargazers_count: int
    watchers_count: int
    forks_count: int
    size: int  # KB, as reported by GitHub
    visibility: str
    default_branch: str
    created_at: str | None
    updated_at: str | None
    pushed_at: str | None = None
    topics: list[str] = field(default_factory=list)
