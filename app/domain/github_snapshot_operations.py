"""Domain operations for the per-user GitHub analytics snapshot."""

import uuid as uuid_pkg
from datetime import UTC, datetime

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.github_snapshot import GitHubSnapshot, SyncStatus
from app.services.analytics.serialization import (
    encode_contributions,
    encode_languages,
    encode_repositories,
)
from app.services.analytics.types import AnalyticsResult


class GitHubSnapshotOperations:
    """
    Operations for GitHub analytics snapshots.

    Note: This doesn't extend BaseOperations because there is exactly one
    snapshot per user, written only through atomic upserts keyed on user_id.
    Concurrent syncs for the same user therefore never interleave a partial
    write; the last one to commit wins.
    """

    def __init__(self) -> None:
        self.model = GitHubSnapshot

    async def get_by_user(
        self,
        db: AsyncSession,
        user_id: uuid_pkg.UUID,
    ) -> GitHubSnapshot | None:
        """Get the snapshot for a user, if any sync has been attempted."""
        statement = select(GitHubSnapshot).where(
            GitHubSnapshot.user_id == user_id  # type: ignore[arg-type]
        )
        result = await db.execute(statement)
        return result.scalar_one_or_none()

    async def upsert_completed(
        self,
        db: AsyncSession,
        user_id: uuid_pkg.UUID,
        result: AnalyticsResult,
    ) -> GitHubSnapshot:
        """
        Record a successful sync, overwriting every data field.

        Uses PostgreSQL's INSERT ... ON CONFLICT DO UPDATE for atomicity.

        Args:
            db: Database session
            user_id: Owning user
            result: Output of the analytics aggregator

        Returns:
            The created or updated GitHubSnapshot
        """
        now = datetime.now(UTC)
        profile = result.profile

        data = {
            "public_repos": profile.public_repos,
            "public_gists": profile.public_gists,
            "followers": profile.followers,
            "following": profile.following,
            "repositories": encode_repositories(result.repositories),
            "languages": encode_languages(result.languages),
            "contributions": encode_contributions(result.contributions),
            "total_stars": result.total_stars,
            "total_forks": result.total_forks,
            "total_watchers": result.total_watchers,
            "sync_status": SyncStatus.COMPLETED.value,
            "sync_error": None,
            "last_sync_at": now,
            "updated_at": now,
        }

        stmt = (
            insert(self.model)
            .values(user_id=user_id, created_at=now, **data)
            .on_conflict_do_update(index_elements=["user_id"], set_=data)
            .returning(GitHubSnapshot)
            .execution_options(populate_existing=True)
        )

        row = await db.execute(stmt)
        await db.flush()

        return row.scalar_one()

    async def mark_failed(
        self,
        db: AsyncSession,
        user_id: uuid_pkg.UUID,
        error: str,
    ) -> GitHubSnapshot:
        """
        Record a failed sync.

        Only status, error and timestamps change; data from the last successful
        sync is kept. A user's first-ever failure inserts an empty snapshot.
        """
        now = datetime.now(UTC)

        status = {
            "sync_status": SyncStatus.FAILED.value,
            "sync_error": error,
            "last_sync_at": now,
            "updated_at": now,
        }

        stmt = (
            insert(self.model)
            .values(user_id=user_id, created_at=now, **status)
            .on_conflict_do_update(index_elements=["user_id"], set_=status)
            .returning(GitHubSnapshot)
            .execution_options(populate_existing=True)
        )

        row = await db.execute(stmt)
        await db.flush()

        return row.scalar_one()


github_snapshot_ops = GitHubSnapshotOperations()
