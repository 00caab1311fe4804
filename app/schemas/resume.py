"""Pydantic schemas for resume endpoints."""

import uuid as uuid_pkg
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field, HttpUrl

SkillLevel = Literal["Beginner", "Intermediate", "Advanced", "Expert"]


class PersonalInfo(BaseModel):
    name: str | None = None
    email: EmailStr | None = None
    phone: str | None = None
    location: str | None = None
    website: HttpUrl | None = None
    linkedin: str | None = None
    github: str | None = None


class ExperienceItem(BaseModel):
    id: str
    company: str
    position: str
    location: str | None = None
    start_date: str
    end_date: str | None = None
    current: bool = False
    description: str
    achievements: list[str] = Field(default_factory=list)


class EducationItem(BaseModel):
    id: str
    school: str
    degree: str
    field: str
    location: str | None = None
    start_date: str
    end_date: str | None = None
    gpa: str | None = None
    description: str | None = None


class Skill(BaseModel):
    name: str
    level: SkillLevel


class SkillCategory(BaseModel):
    id: str
    name: str
    skills: list[Skill]


class ProjectItem(BaseModel):
    id: str
    name: str
    description: str
    technologies: list[str]
    url: HttpUrl | None = None
    github: str | None = None
    start_date: str
    end_date: str | None = None
    highlights: list[str] = Field(default_factory=list)


class ResumeContent(BaseModel):
    """Section content shared by create and update requests."""

    personal_info: PersonalInfo | None = None
    summary: str | None = None
    experience: list[ExperienceItem] | None = None
    education: list[EducationItem] | None = None
    skills: list[SkillCategory] | None = None
    projects: list[ProjectItem] | None = None


class ResumeCreate(ResumeContent):
    """Request body for POST /resumes."""

    title: str = Field(min_length=1, max_length=100)
    template: str = "modern"
    is_public: bool = False
    include_github_data: bool = True
    theme: str = "blue"


class ResumeUpdate(ResumeContent):
    """Request body for PUT /resumes/{id}. Only provided fields are applied."""

    title: str | None = Field(default=None, min_length=1, max_length=100)
    template: str | None = None
    is_public: bool | None = None
    include_github_data: bool | None = None
    theme: str | None = None


class ResumeSummary(BaseModel):
    """A resume in the GET /resumes listing."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid_pkg.UUID
    title: str
    slug: str
    template: str
    is_public: bool
    theme: str
    views: int
    downloads: int
    created_at: datetime
    updated_at: datetime


class ResumeRead(ResumeSummary):
    """Full resume returned by create, read and update."""

    user_id: uuid_pkg.UUID
    summary: str | None = None
    include_github_data: bool
    personal_info: dict | None = None
    experience: list[dict] | None = None
    education: list[dict] | None = None
    skills: list[dict] | None = None
    projects: list[dict] | None = None
