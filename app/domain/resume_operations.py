"""Domain operations for Resume model."""

import re
import uuid as uuid_pkg

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.attributes import set_committed_value

from app.domain.base_operations import BaseOperations
from app.models.resume import Resume
from app.schemas.resume import ResumeCreate, ResumeUpdate

_NON_ALNUM = re.compile(r"[^a-z0-9]+")

DEFAULT_SLUG = "resume"

# Inserts tried before a slug collision is surfaced
SLUG_ATTEMPTS = 3

# Fields an update may explicitly clear with null
CLEARABLE_FIELDS = ("summary", "personal_info", "experience", "education", "skills", "projects")


def slugify(title: str) -> str:
    """Lowercase, collapse every run of non [a-z0-9] characters to '-', trim dashes."""
    slug = _NON_ALNUM.sub("-", title.lower()).strip("-")
    return slug or DEFAULT_SLUG


class ResumeOperations(BaseOperations[Resume]):
    """CRUD operations for Resume model."""

    def __init__(self) -> None:
        super().__init__(Resume)

    async def _slug_taken(
        self,
        db: AsyncSession,
        slug: str,
        exclude_id: uuid_pkg.UUID | None,
    ) -> bool:
        statement = select(Resume.id).where(Resume.slug == slug)  # type: ignore[arg-type]
        if exclude_id is not None:
            statement = statement.where(Resume.id != exclude_id)  # type: ignore[arg-type]
        result = await db.execute(statement)
        return result.first() is not None

    async def generate_unique_slug(
        self,
        db: AsyncSession,
        title: str,
        exclude_id: uuid_pkg.UUID | None = None,
    ) -> str:
        """
        Slug for `title` that no other resume uses.

        Appends -1, -2, ... to the base slug until a free one is found. Slugs
        are unique across all users.
        """
        base = slugify(title)
        slug = base
        counter = 1
        while await self._slug_taken(db, slug, exclude_id):
            slug = f"{base}-{counter}"
            counter += 1
        return slug

    async def create_resume(
        self,
        db: AsyncSession,
        user_id: uuid_pkg.UUID,
        data: ResumeCreate,
    ) -> Resume:
        """
        Create a resume with a slug derived from its title.

        A concurrent create may claim the same slug between the lookup and the
        insert. The insert runs in a savepoint; on a unique index violation it
        is rolled back and retried with the next free slug, up to SLUG_ATTEMPTS
        times.
        """
        obj_in = data.model_dump(mode="json")
        attempt = 1
        while True:
            obj_in["slug"] = await self.generate_unique_slug(db, data.title)
            try:
                async with db.begin_nested():
                    return await self.create(db, obj_in, user_id=user_id)
            except IntegrityError:
                if attempt >= SLUG_ATTEMPTS:
                    raise
                attempt += 1

    async def update_resume(
        self,
        db: AsyncSession,
        resume: Resume,
        data: ResumeUpdate,
    ) -> Resume:
        """
        Apply the fields present in `data`.

        A new title regenerates the slug when its base slug differs from the
        current one; the resume's own slug never counts as a collision.
        """
        obj_in = data.model_dump(mode="json", exclude_unset=True)
        obj_in = {k: v for k, v in obj_in.items() if v is not None or k in CLEARABLE_FIELDS}

        title = obj_in.get("title")
        if title and slugify(title) != resume.slug:
            obj_in["slug"] = await self.generate_unique_slug(db, title, exclude_id=resume.id)

        return await self.update(db, resume, obj_in)

    async def increment_views(self, db: AsyncSession, resume: Resume) -> Resume:
        """Atomically add one view and reflect the new count on `resume`."""
        stmt = (
            update(Resume)
            .where(Resume.id == resume.id)  # type: ignore[arg-type]
            .values(views=Resume.views + 1)
            .returning(Resume.views)
            .execution_options(synchronize_session=False)
        )
        result = await db.execute(stmt)
        set_committed_value(resume, "views", result.scalar_one())
        return resume


resume_ops = ResumeOperations()
