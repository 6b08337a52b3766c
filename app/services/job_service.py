"""
Job listings: creation, search and employer-side management.

Mutations are limited to the owning employer. Every function takes the
authenticated User explicitly; there is no ambient current user.
"""
from datetime import datetime, timezone
from typing import Dict, List, Optional

from sqlalchemy import select, func, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.config import get_settings
from app.errors import Forbidden, NotFound, ValidationError
from app.models.application import Application
from app.models.job import Job, DEFAULT_SALARY, default_expiry
from app.models.user import User
from app.schemas.jobs import JobCreate, JobUpdate
from app.utils.logger import logger


def _naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Timestamps are stored as naive UTC"""
    if value is not None and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def _newest_first(query):
    # id breaks ties between rows created in the same instant
    return query.order_by(Job.created_at.desc(), Job.id.desc())


def _matches_text(search: str):
    """Case-insensitive literal substring match on the searchable text fields"""
    return or_(
        Job.title.icontains(search, autoescape=True),
        Job.description.icontains(search, autoescape=True),
        Job.company.icontains(search, autoescape=True),
        Job.location.icontains(search, autoescape=True),
    )


def check_owner(job: Job, user: User) -> None:
    if job.employer_id != user.id:
        raise Forbidden()


async def get_job_or_404(db: AsyncSession, job_id: int, message: str = "Job not found") -> Job:
    job = await db.get(Job, job_id)
    if not job:
        raise NotFound(message)
    return job


async def get_owned_job(db: AsyncSession, job_id: int, user: User) -> Job:
    """Load a job and make sure the caller is its employer"""
    job = await get_job_or_404(db, job_id)
    check_owner(job, user)
    return job


async def create_job(db: AsyncSession, user: User, data: JobCreate) -> Job:
    if not user.is_employer:
        raise Forbidden("Only employers can post jobs")

    company = data.company or user.company
    contact_email = data.contact_email or user.email
    contact_phone = data.contact_phone or user.phone

    missing = [
        label for label, value in (
            ("company", company),
            ("contactEmail", contact_email),
            ("contactPhone", contact_phone),
        ) if not value
    ]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")

    job = Job(
        title=data.title,
        description=data.description,
        company=company,
        employer_id=user.id,
        employer_name=user.name,
        location=data.location,
        salary=data.salary or DEFAULT_SALARY,
        vacancies=data.vacancies,
        filled=0,
        requirements=list(data.requirements),
        benefits=list(data.benefits),
        type=data.type,
        category=data.category,
        contact_phone=contact_phone,
        contact_email=contact_email,
        expires_at=_naive_utc(data.expires_at) or default_expiry(get_settings().job_expiry_days),
        is_active=True,
    )
    db.add(job)
    await db.commit()
    await db.refresh(job)

    logger.info("job.created", extra={"job_id": job.id, "employer_id": user.id})
    return job


async def list_jobs(
    db: AsyncSession,
    category: Optional[str] = None,
    job_type: Optional[str] = None,
    search: Optional[str] = None,
) -> List[Job]:
    """Active jobs matching every given filter, newest first, capped"""
    query = select(Job).where(Job.is_active == True)  # noqa: E712

    if category:
        query = query.where(Job.category == category)
    if job_type:
        query = query.where(Job.type == job_type)
    if search:
        query = query.where(_matches_text(search))

    query = _newest_first(query).limit(get_settings().jobs_list_limit)
    result = await db.execute(query)
    return list(result.scalars().all())


async def get_job(db: AsyncSession, job_id: int) -> Job:
    """Single job with its employer loaded for the contact block"""
    result = await db.execute(
        select(Job).options(selectinload(Job.employer)).where(Job.id == job_id)
    )
    job = result.scalar_one_or_none()
    if not job:
        raise NotFound("Job not found")
    return job


async def count_applicants(db: AsyncSession, job_ids: List[int]) -> Dict[int, int]:
    if not job_ids:
        return {}
    result = await db.execute(
        select(Application.job_id, func.count(Application.id))
        .where(Application.job_id.in_(job_ids))
        .group_by(Application.job_id)
    )
    return {row[0]: row[1] for row in result.all()}


async def list_jobs_by_employer(db: AsyncSession, employer_id: int, user: User) -> List[Job]:
    """All of an employer's jobs, active or not; only the employer may ask"""
    if user.id != employer_id:
        raise Forbidden()

    result = await db.execute(
        _newest_first(select(Job).where(Job.employer_id == employer_id))
    )
    return list(result.scalars().all())


async def update_job(db: AsyncSession, job_id: int, user: User, data: JobUpdate) -> Job:
    job = await get_owned_job(db, job_id, user)

    changes = data.changes()
    if "expires_at" in changes:
        changes["expires_at"] = _naive_utc(changes["expires_at"])
    for field, value in changes.items():
        setattr(job, field, value)

    await db.commit()
    await db.refresh(job)

    logger.info("job.updated", extra={"job_id": job.id, "employer_id": user.id})
    return job


async def toggle_job(db: AsyncSession, job_id: int, user: User) -> Job:
    """Close an open job or reopen a closed one"""
    job = await get_owned_job(db, job_id, user)

    job.is_active = not job.is_active
    await db.commit()
    await db.refresh(job)

    logger.info(
        "job.reopened" if job.is_active else "job.closed",
        extra={"job_id": job.id, "employer_id": user.id},
    )
    return job


async def list_jobs_by_location(db: AsyncSession, district: str) -> List[Job]:
    query = select(Job).where(
        Job.is_active == True,  # noqa: E712
        Job.location.icontains(district, autoescape=True),
    )
    result = await db.execute(_newest_first(query))
    return list(result.scalars().all())
