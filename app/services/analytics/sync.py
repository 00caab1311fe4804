"""
Snapshot sync: fetch a user's GitHub analytics and persist them.

One sync per call: build a client for the user's token, aggregate, upsert the
snapshot. A fatal remote failure is recorded on the snapshot (status failed,
previous data kept) and re-raised for the HTTP layer to report.
"""

import logging
import uuid as uuid_pkg

from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.github_snapshot_operations import github_snapshot_ops
from app.models.github_snapshot import GitHubSnapshot
from app.services.analytics.aggregator import build_snapshot
from app.services.github.client import GitHubAnalyticsClient
from app.services.github.exceptions import RemoteUnavailable

logger = logging.getLogger(__name__)


class SnapshotSyncService:
    """Runs GitHub analytics syncs and records their outcome."""

    async def sync(
        self,
        db: AsyncSession,
        user_id: uuid_pkg.UUID,
        access_token: str,
        handle: str,
    ) -> GitHubSnapshot:
        """
        Sync `handle`'s analytics into the user's snapshot.

        Args:
            db: Database session
            user_id: Owner of the snapshot
            access_token: Decrypted GitHub token for this user
            handle: GitHub login to analyze

        Returns:
            The updated snapshot

        Raises:
            RemoteUnavailable: Profile or repository listing failed. The failure
                is committed on the snapshot before re-raising.
        """
        logger.info(f"Starting GitHub sync for user {user_id} ({handle})")
        client = GitHubAnalyticsClient(access_token)

        try:
            result = await build_snapshot(handle, client)
        except RemoteUnavailable as e:
            logger.warning(f"GitHub sync failed for user {user_id} ({handle}): {e.message}")
            await github_snapshot_ops.mark_failed(db, user_id, e.message)
            # Commit now: the request session rolls back once the error propagates
            await db.commit()
            raise

        snapshot = await github_snapshot_ops.upsert_completed(db, user_id, result)
        logger.info(
            f"GitHub sync completed for user {user_id} ({handle}): "
            f"{len(result.repositories)} repos, {result.total_stars} stars"
        )
        return snapshot


snapshot_sync_service = SnapshotSyncService()
