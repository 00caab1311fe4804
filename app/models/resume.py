from typing import TYPE_CHECKING, Any, Optional

from sqlalchemy import Column
from sqlalchemy.dialects.postgresql import JSONB
from sqlmodel import Field, Relationship, SQLModel

from app.models.base import TimestampMixin, UserOwnedMixin, UUIDMixin

if TYPE_CHECKING:
    from app.models.user import User


class ResumeBase(SQLModel):
    """Base fields for a resume."""

    title: str = Field(max_length=100)
    template: str = Field(default="modern", max_length=50)
    summary: str | None = Field(default=None)
    is_public: bool = Field(default=False)
    include_github_data: bool = Field(default=True)
    theme: str = Field(default="blue", max_length=50)


class Resume(ResumeBase, UUIDMixin, TimestampMixin, UserOwnedMixin, table=True):
    """A resume owned by a user.

    Section content is validated by app.schemas.resume and stored as JSONB.
    The slug is unique across all users and is derived from the title.
    """

    __tablename__ = "resumes"

    slug: str = Field(max_length=120, unique=True, index=True)

    personal_info: dict[str, Any] | None = Field(default=None, sa_column=Column(JSONB))
    experience: list[dict[str, Any]] | None = Field(default=None, sa_column=Column(JSONB))
    education: list[dict[str, Any]] | None = Field(default=None, sa_column=Column(JSONB))
    skills: list[dict[str, Any]] | None = Field(default=None, sa_column=Column(JSONB))
    projects: list[dict[str, Any]] | None = Field(default=None, sa_column=Column(JSONB))

    views: int = Field(default=0, nullable=False)
    downloads: int = Field(default=0, nullable=False)

    # Relationships
    user: Optional["User"] = Relationship(back_populates="resumes")
