import uuid as uuid_pkg
from datetime import UTC, datetime

from sqlalchemy import BigInteger, Column, DateTime, ForeignKey, text
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlmodel import Field, SQLModel


class GitHubConnection(SQLModel, table=True):
    """
    A user's linked GitHub account and its access token.

    One-to-one with User. The token is stored encrypted (see core.encryption)
    and is only ever decrypted to build a per-request GitHub client.
    """

    __tablename__ = "github_connections"

    user_id: uuid_pkg.UUID = Field(
        sa_column=Column(
            PG_UUID(as_uuid=True),
            ForeignKey("users.id", ondelete="CASCADE"),
            primary_key=True,
            nullable=False,
        ),
    )

    access_token: str = Field(max_length=500, nullable=False)
    github_login: str | None = Field(default=None, max_length=255)
    github_id: int | None = Field(default=None, sa_type=BigInteger)  # type: ignore[call-overload]
    scopes: str | None = Field(default=None, max_length=255)  # Comma-separated OAuth scopes

    created_at: datetime = Field(  # type: ignore[call-overload]
        default_factory=lambda: datetime.now(UTC),
        nullable=False,
        sa_type=DateTime(timezone=True),
        sa_column_kwargs={"server_default": text("now()")},
    )
    updated_at: datetime | None = Field(  # type: ignore[call-overload]
        default=None,
        sa_type=DateTime(timezone=True),
        sa_column_kwargs={"onupdate": text("now()")},
    )
