import uuid as uuid_pkg
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, text
from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:
    from app.models.resume import Resume


class User(SQLModel, table=True):
    """
    User model - mirrors the identity provider's user table.

    The id comes from the session token's subject. User records are created
    on first API call after GitHub sign-in.
    """

    __tablename__ = "users"

    id: uuid_pkg.UUID = Field(
        primary_key=True,
        index=True,
        nullable=False,
        description="UUID from the auth provider",
    )
    email: str | None = Field(default=None, max_length=255)
    display_name: str | None = Field(default=None, max_length=100)
    avatar_url: str | None = Field(default=None, max_length=500)
    auth_provider: str | None = Field(default=None, max_length=50)

    # GitHub identity (remote handle used for analytics sync)
    github_username: str | None = Field(default=None, max_length=255, index=True)
    github_id: str | None = Field(default=None, max_length=50)
    location: str | None = Field(default=None, max_length=255)
    company: str | None = Field(default=None, max_length=255)

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

    # Relationships
    resumes: list["Resume"] = Relationship(
        back_populates="user",
        sa_relationship_kwargs={"cascade": "all, delete-orphan"},
    )
