"""Unit tests for SnapshotSyncService — aggregation and persistence mocked."""

import uuid
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from app.services.analytics.sync import SnapshotSyncService
from app.services.github.exceptions import RemoteUnavailable

from tests.helpers.mock_factories import make_mock_snapshot


class TestSnapshotSync:
    def setup_method(self):
        self.service = SnapshotSyncService()
        self.db = AsyncMock()
        self.user_id = uuid.uuid4()

    @pytest.mark.asyncio
    @patch("app.services.analytics.sync.github_snapshot_ops")
    @patch("app.services.analytics.sync.build_snapshot")
    @patch("app.services.analytics.sync.GitHubAnalyticsClient")
    async def test_success_upserts_snapshot(self, mock_client_cls, mock_build, mock_ops):
        result = MagicMock(repositories=[], total_stars=0)
        mock_build.return_value = result
        snapshot = make_mock_snapshot(user_id=self.user_id)
        mock_ops.upsert_completed = AsyncMock(return_value=snapshot)

        returned = await self.service.sync(self.db, self.user_id, "ghp_abc", "octocat")

        assert returned == snapshot
        mock_client_cls.assert_called_once_with("ghp_abc")
        mock_build.assert_awaited_once_with("octocat", mock_client_cls.return_value)
        mock_ops.upsert_completed.assert_awaited_once_with(self.db, self.user_id, result)
        self.db.commit.assert_not_awaited()

    @pytest.mark.asyncio
    @patch("app.services.analytics.sync.github_snapshot_ops")
    @patch("app.services.analytics.sync.build_snapshot")
    @patch("app.services.analytics.sync.GitHubAnalyticsClient")
    async def test_failure_is_recorded_and_reraised(self, mock_client_cls, mock_build, mock_ops):
        mock_build.side_effect = RemoteUnavailable("GitHub API rate limit exceeded", 403)
        mock_ops.mark_failed = AsyncMock()
        mock_ops.upsert_completed = AsyncMock()

        with pytest.raises(RemoteUnavailable):
            await self.service.sync(self.db, self.user_id, "ghp_abc", "octocat")

        mock_ops.mark_failed.assert_awaited_once_with(
            self.db, self.user_id, "GitHub API rate limit exceeded"
        )
        self.db.commit.assert_awaited_once()
        mock_ops.upsert_completed.assert_not_awaited()

    @pytest.mark.asyncio
    @patch("app.services.analytics.sync.github_snapshot_ops")
    @patch("app.services.github.client.get_github_client")
    async def test_non_json_profile_body_is_recorded_as_failed(self, mock_get_client, mock_ops):
        http = MagicMock()
        http.request = AsyncMock(return_value=httpx.Response(200, content=b"<html>proxy</html>"))
        mock_get_client.return_value = http
        mock_ops.mark_failed = AsyncMock()
        mock_ops.upsert_completed = AsyncMock()

        with pytest.raises(RemoteUnavailable, match="Invalid JSON"):
            await self.service.sync(self.db, self.user_id, "ghp_abc", "octocat")

        mock_ops.mark_failed.assert_awaited_once()
        assert mock_ops.mark_failed.call_args.args[:2] == (self.db, self.user_id)
        self.db.commit.assert_awaited_once()
        mock_ops.upsert_completed.assert_not_awaited()
