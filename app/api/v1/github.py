"""
GitHub connection and analytics sync endpoints.
"""

import logging
import time
from dataclasses import asdict

from fastapi import APIRouter, HTTPException, status

from app.api.deps import CurrentUser, DbSession
from app.config import settings
from app.core.encryption import token_encryption
from app.core.exceptions import NotFoundError
from app.domain import github_connection_ops, github_snapshot_ops, user_ops
from app.models.github_connection import GitHubConnection
from app.schemas.analytics import (
    GitHubAnalyticsResponse,
    GitHubConnectionStatus,
    GitHubConnectRequest,
    GitHubConnectResponse,
    LanguageShare,
    SyncResponse,
    SyncStats,
)
from app.services.analytics import (
    decode_contributions,
    decode_languages,
    decode_repositories,
    layout_calendar,
    select_top_repositories,
)
from app.services.analytics.sync import snapshot_sync_service
from app.services.github import RemoteUnavailable, language_color

router = APIRouter(prefix="/github", tags=["github"])
logger = logging.getLogger(__name__)


def _connection_status(connection: GitHubConnection | None) -> GitHubConnectionStatus:
    if connection is None:
        return GitHubConnectionStatus(
            connected=False,
            encryption_enabled=token_encryption.is_enabled,
        )
    return GitHubConnectionStatus(
        connected=True,
        github_login=connection.github_login,
        scopes=connection.scopes.split(",") if connection.scopes else [],
        connected_at=connection.created_at,
        encryption_enabled=token_encryption.is_enabled,
    )


def remote_error_to_http(e: RemoteUnavailable) -> HTTPException:
    """Map a failed GitHub call to the response reported to the client."""
    if e.rate_limit_reset:
        reset_in = max(0, e.rate_limit_reset - int(time.time()))
        minutes = reset_in // 60
        return HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"{e.message}. Rate limit resets in {minutes} minutes.",
        )
    return HTTPException(
        status_code=status.HTTP_502_BAD_GATEWAY,
        detail=f"Failed to sync GitHub data: {e.message}",
    )


@router.get("/connection", response_model=GitHubConnectionStatus)
async def get_connection(
    current_user: CurrentUser,
    db: DbSession,
) -> GitHubConnectionStatus:
    """Whether a GitHub token is stored for the current user."""
    connection = await github_connection_ops.get_by_user_id(db, current_user.id)
    return _connection_status(connection)


@router.put("/connection", response_model=GitHubConnectResponse)
async def connect_github(
    data: GitHubConnectRequest,
    current_user: CurrentUser,
    db: DbSession,
) -> GitHubConnectResponse:
    """
    Store a GitHub access token for the current user.

    The token is validated against GitHub first, then encrypted at rest. The
    account it belongs to becomes the user's GitHub handle for syncs.
    """
    validation = await github_connection_ops.validate_token(data.access_token)
    if not validation["valid"]:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid GitHub token: {validation['error']}",
        )

    connection = await github_connection_ops.save(
        db,
        current_user.id,
        data.access_token,
        github_login=validation["username"],
        github_id=validation["github_id"],
        scopes=validation["scopes"],
    )
    await user_ops.update(
        db,
        current_user,
        {
            "github_username": validation["username"],
            "github_id": str(validation["github_id"]),
            "display_name": current_user.display_name or validation["name"],
            "location": current_user.location or validation.get("location"),
            "company": current_user.company or validation.get("company"),
        },
    )
    logger.info(f"User {current_user.id} connected GitHub account {validation['username']}")

    return GitHubConnectResponse(
        **_connection_status(connection).model_dump(),
        scope_warning=validation.get("scope_warning"),
    )


@router.delete("/connection", status_code=status.HTTP_204_NO_CONTENT)
async def disconnect_github(
    current_user: CurrentUser,
    db: DbSession,
) -> None:
    """Remove the stored GitHub token. Synced analytics are kept."""
    deleted = await github_connection_ops.delete(db, current_user.id)
    if not deleted:
        raise NotFoundError("GitHub connection")


@router.post("/sync", response_model=SyncResponse)
async def sync_github(
    current_user: CurrentUser,
    db: DbSession,
) -> SyncResponse:
    """
    Fetch the current user's GitHub analytics and store them.

    Replaces the previous snapshot. On a GitHub failure the snapshot is marked
    failed (previous data kept) and 502 is returned, or 403 when rate limited.
    """
    connection = await github_connection_ops.get_by_user_id(db, current_user.id)
    token = github_connection_ops.get_decrypted_token(connection) if connection else None
    if not token:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="GitHub account not connected",
        )

    handle = current_user.github_username or (connection.github_login if connection else None)
    if not handle:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="GitHub username not found",
        )

    try:
        snapshot = await snapshot_sync_service.sync(db, current_user.id, token, handle)
    except RemoteUnavailable as e:
        raise remote_error_to_http(e) from None

    languages = decode_languages(snapshot.languages)
    return SyncResponse(
        success=True,
        message="GitHub data synced successfully",
        data=SyncStats(
            total_repos=len(decode_repositories(snapshot.repositories)),
            total_stars=snapshot.total_stars,
            total_forks=snapshot.total_forks,
            languages=len(languages),
        ),
    )


@router.get("/sync", response_model=GitHubAnalyticsResponse)
async def get_github_analytics(
    current_user: CurrentUser,
    db: DbSession,
) -> GitHubAnalyticsResponse:
    """Return the last stored snapshot with its contribution calendar laid out."""
    snapshot = await github_snapshot_ops.get_by_user(db, current_user.id)
    if snapshot is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No GitHub data found. Please sync first.",
        )

    repositories = decode_repositories(snapshot.repositories)
    languages = decode_languages(snapshot.languages)
    contributions = decode_contributions(snapshot.contributions)
    calendar = layout_calendar(contributions)
    top_repositories = select_top_repositories(repositories, settings.top_repositories_limit)

    return GitHubAnalyticsResponse.model_validate(
        {
            "public_repos": snapshot.public_repos,
            "public_gists": snapshot.public_gists,
            "followers": snapshot.followers,
            "following": snapshot.following,
            "total_stars": snapshot.total_stars,
            "total_forks": snapshot.total_forks,
            "total_watchers": snapshot.total_watchers,
            "repositories": [asdict(r) for r in repositories],
            "top_repositories": [asdict(r) for r in top_repositories],
            "languages": languages,
            "language_breakdown": [
                LanguageShare(name=name, percentage=pct, color=language_color(name))
                for name, pct in languages.items()
            ],
            "contributions": [asdict(d) for d in contributions],
            "calendar": asdict(calendar),
            "sync_status": snapshot.sync_status,
            "sync_error": snapshot.sync_error,
            "last_sync_at": snapshot.last_sync_at,
        }
    )
