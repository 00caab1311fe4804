"""Snapshot upsert behavior against a real PostgreSQL database."""

from __future__ import annotations

from datetime import date

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.github_snapshot_operations import github_snapshot_ops
from app.services.analytics.calendar import make_day
from app.services.analytics.serialization import decode_languages, decode_repositories
from app.services.analytics.types import AnalyticsResult

from tests.helpers.mock_factories import make_remote_profile, make_remote_repo

pytestmark = pytest.mark.integration


def _result(stars: int) -> AnalyticsResult:
    repos = [make_remote_repo("alpha", stars=stars, forks=1)]
    return AnalyticsResult(
        profile=make_remote_profile(public_repos=1),
        repositories=repos,
        languages={"Python": 100.0},
        total_stars=stars,
        total_forks=1,
        total_watchers=0,
        top_repositories=repos,
        recent_activity=[],
        contributions=[make_day(date(2026, 1, 1), 2)],
    )


class TestSnapshotUpsert:
    async def test_first_sync_creates_row(self, db_session: AsyncSession, test_user):
        snapshot = await github_snapshot_ops.upsert_completed(db_session, test_user.id, _result(4))

        assert snapshot.user_id == test_user.id
        assert snapshot.sync_status == "completed"
        assert snapshot.total_stars == 4
        assert decode_languages(snapshot.languages) == {"Python": 100.0}

    async def test_second_sync_replaces_data_in_same_row(
        self, db_session: AsyncSession, test_user
    ):
        first = await github_snapshot_ops.upsert_completed(db_session, test_user.id, _result(4))
        first_id = first.id
        second = await github_snapshot_ops.upsert_completed(db_session, test_user.id, _result(9))

        assert second.id == first_id
        assert second.total_stars == 9
        assert decode_repositories(second.repositories)[0].stargazers_count == 9

    async def test_failure_keeps_previous_data(self, db_session: AsyncSession, test_user):
        await github_snapshot_ops.upsert_completed(db_session, test_user.id, _result(4))

        failed = await github_snapshot_ops.mark_failed(db_session, test_user.id, "rate limited")

        assert failed.sync_status == "failed"
        assert failed.sync_error == "rate limited"
        assert failed.total_stars == 4
        assert decode_languages(failed.languages) == {"Python": 100.0}

    async def test_first_ever_failure_inserts_empty_row(
        self, db_session: AsyncSession, test_user
    ):
        failed = await github_snapshot_ops.mark_failed(db_session, test_user.id, "boom")

        assert failed.sync_status == "failed"
        assert failed.repositories is None
        assert failed.total_stars == 0

    async def test_success_after_failure_clears_error(self, db_session: AsyncSession, test_user):
        await github_snapshot_ops.mark_failed(db_session, test_user.id, "boom")

        snapshot = await github_snapshot_ops.upsert_completed(db_session, test_user.id, _result(1))

        assert snapshot.sync_status == "completed"
        assert snapshot.sync_error is None

    async def test_snapshots_are_per_user(self, db_session: AsyncSession, test_user, second_user):
        await github_snapshot_ops.upsert_completed(db_session, test_user.id, _result(4))

        assert await github_snapshot_ops.get_by_user(db_session, second_user.id) is None
