"""Persisted GitHub analytics snapshot, one row per user."""

import uuid as uuid_pkg
from datetime import UTC, datetime
from enum import Enum

from sqlalchemy import Column, DateTime, ForeignKey, Text, text
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlmodel import Field, SQLModel


class SyncStatus(str, Enum):
    COMPLETED = "completed"
    FAILED = "failed"


class GitHubSnapshot(SQLModel, table=True):
    """
    Consolidated analytics for one user's GitHub account.

    Exactly one row per user (unique user_id), written with an atomic
    INSERT ... ON CONFLICT DO UPDATE. A successful sync overwrites every data
    field; a failed sync only touches status, error and timestamps, so the
    last successful data stays readable.

    Nested structures (repository list, language map, contribution days) are
    stored as JSON text and decoded by services.analytics.serialization.
    """

    __tablename__ = "github_snapshots"

    id: uuid_pkg.UUID = Field(
        default_factory=uuid_pkg.uuid4,
        primary_key=True,
        nullable=False,
        sa_column_kwargs={"server_default": text("gen_random_uuid()")},
    )

    user_id: uuid_pkg.UUID = Field(
        sa_column=Column(
            PG_UUID(as_uuid=True),
            ForeignKey("users.id", ondelete="CASCADE"),
            unique=True,
            index=True,
            nullable=False,
        ),
    )

    # Profile counters
    public_repos: int = Field(default=0, nullable=False)
    public_gists: int = Field(default=0, nullable=False)
    followers: int = Field(default=0, nullable=False)
    following: int = Field(default=0, nullable=False)

    # Serialized collections
    repositories: str | None = Field(default=None, sa_type=Text)  # type: ignore[call-overload]
    languages: str | None = Field(default=None, sa_type=Text)  # type: ignore[call-overload]
    contributions: str | None = Field(default=None, sa_type=Text)  # type: ignore[call-overload]

    total_stars: int = Field(default=0, nullable=False)
    total_forks: int = Field(default=0, nullable=False)
    total_watchers: int = Field(default=0, nullable=False)

    sync_status: str = Field(default=SyncStatus.COMPLETED.value, max_length=20, nullable=False)
    sync_error: str | None = Field(default=None, sa_type=Text)  # type: ignore[call-overload]
    last_sync_at: datetime | None = Field(  # type: ignore[call-overload]
        default=None,
        sa_type=DateTime(timezone=True),
    )

    created_at: datetime = Field(  # type: ignore[call-overload]
        default_factory=lambda: datetime.now(UTC),
        nullable=False,
        sa_type=DateTime(timezone=True),
        sa_column_kwargs={"server_default": text("now()")},
    )
    updated_at: datetime = Field(  # type: ignore[call-overload]
        default_factory=lambda: datetime.now(UTC),
        nullable=False,
        sa_type=DateTime(timezone=True),
        sa_column_kwargs={"server_default": text("now()")},
    )
