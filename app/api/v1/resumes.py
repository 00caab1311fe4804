"""Resume CRUD endpoints."""

import logging
import uuid as uuid_pkg

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user, get_current_user_optional
from app.core.database import get_db
from app.core.exceptions import ForbiddenError, NotFoundError
from app.domain.resume_operations import resume_ops
from app.models.resume import Resume
from app.models.user import User
from app.schemas.resume import ResumeCreate, ResumeRead, ResumeSummary, ResumeUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/resumes", tags=["resumes"])


async def _get_owned_resume(db: AsyncSession, resume_id: uuid_pkg.UUID, user: User) -> Resume:
    """Load a resume for modification: 404 if missing, 403 if not the owner's."""
    resume = await resume_ops.get(db, resume_id)
    if resume is None:
        raise NotFoundError("Resume")
    if resume.user_id != user.id:
        raise ForbiddenError()
    return resume


@router.get("", response_model=list[ResumeSummary])
async def list_resumes(
    skip: int = 0,
    limit: int = 100,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> list[Resume]:
    """List the current user's resumes, most recently updated first."""
    return await resume_ops.get_multi_by_user(db, user_id=current_user.id, skip=skip, limit=limit)


@router.post("", response_model=ResumeRead, status_code=status.HTTP_201_CREATED)
async def create_resume(
    data: ResumeCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> Resume:
    """Create a resume. Its slug is derived from the title and unique site-wide."""
    resume = await resume_ops.create_resume(db, user_id=current_user.id, data=data)
    logger.info(f"User {current_user.id} created resume {resume.id} ({resume.slug})")
    return resume


@router.get("/{resume_id}", response_model=ResumeRead)
async def get_resume(
    resume_id: uuid_pkg.UUID,
    current_user: User | None = Depends(get_current_user_optional),
    db: AsyncSession = Depends(get_db),
) -> Resume:
    """
    Get a single resume.

    Owners can always read their resumes. Anyone else, signed in or not, can
    read a public resume, and each such read counts as a view.
    """
    resume = await resume_ops.get(db, resume_id)
    if resume is None:
        raise NotFoundError("Resume")

    is_owner = current_user is not None and resume.user_id == current_user.id
    if not is_owner:
        if not resume.is_public:
            raise ForbiddenError()
        resume = await resume_ops.increment_views(db, resume)

    return resume


@router.put("/{resume_id}", response_model=ResumeRead)
async def update_resume(
    resume_id: uuid_pkg.UUID,
    data: ResumeUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> Resume:
    """Update the fields provided. Changing the title regenerates the slug."""
    resume = await _get_owned_resume(db, resume_id, current_user)
    return await resume_ops.update_resume(db, resume, data)


@router.delete("/{resume_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_resume(
    resume_id: uuid_pkg.UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> None:
    """Delete a resume."""
    resume = await _get_owned_resume(db, resume_id, current_user)
    await resume_ops.delete(db, id=resume.id, user_id=current_user.id)
    logger.info(f"User {current_user.id} deleted resume {resume_id}")
