"""Pydantic schemas for API request/response validation."""

from app.schemas.analytics import (
    GitHubAnalyticsResponse,
    GitHubConnectionStatus,
    GitHubConnectRequest,
    GitHubConnectResponse,
    SyncResponse,
    SyncStats,
)
from app.schemas.resume import (
    ResumeCreate,
    ResumeRead,
    ResumeSummary,
    ResumeUpdate,
)

__all__ = [
    "GitHubAnalyticsResponse",
    "GitHubConnectRequest",
    "GitHubConnectResponse",
    "GitHubConnectionStatus",
    "ResumeCreate",
    "ResumeRead",
    "ResumeSummary",
    "ResumeUpdate",
    "SyncResponse",
    "SyncStats",
]
