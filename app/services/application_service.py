"""
Job applications and the employer's applicant pipeline.

Each application is stored once, in the applications table. The applicant
list on a job is read from there, so a status change is a single write, and
accepting an applicant bumps the job's fill counter in the same transaction.
"""
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.errors import DuplicateApplication, NotFound, VacancyFull
from app.models.application import Application
from app.models.job import Job
from app.models.user import User
from app.services.job_service import get_owned_job
from app.utils.logger import logger

ACCEPTED = "accepted"


async def find_application(db: AsyncSession, job_id: int, user_id: int) -> Optional[Application]:
    result = await db.execute(
        select(Application).where(
            Application.job_id == job_id,
            Application.user_id == user_id,
        )
    )
    return result.scalar_one_or_none()


async def apply(db: AsyncSession, job_id: int, user: User, message: Optional[str] = None) -> Application:
    job = await db.get(Job, job_id)
    if not job or not job.is_active:
        raise NotFound("Job not found or closed")

    # Best-effort: concurrent applies for the last vacancy can both pass
    if job.filled >= job.vacancies:
        raise VacancyFull()

    if await find_application(db, job_id, user.id):
        raise DuplicateApplication()

    application = Application(
        job_id=job.id,
        user_id=user.id,
        user_name=user.name,
        user_email=user.email,
        user_phone=user.phone or "",
        message=message or "",
        status="pending",
    )
    db.add(application)
    try:
        await db.commit()
    except IntegrityError as e:
        # uq_applications_job_user caught a concurrent duplicate
        await db.rollback()
        raise DuplicateApplication() from e
    await db.refresh(application)

    logger.info(
        "application.created",
        extra={"application_id": application.id, "job_id": job.id, "user_id": user.id},
    )
    return application


async def my_applications(db: AsyncSession, user: User) -> List[Application]:
    """The caller's applications, newest first, with their job loaded"""
    result = await db.execute(
        select(Application)
        .options(selectinload(Application.job))
        .where(Application.user_id == user.id)
        .order_by(Application.applied_at.desc(), Application.id.desc())
    )
    return list(result.scalars().all())


async def list_applicants(db: AsyncSession, job_id: int, user: User) -> List[Application]:
    await get_owned_job(db, job_id, user)

    result = await db.execute(
        select(Application)
        .where(Application.job_id == job_id)
        .order_by(Application.applied_at.asc(), Application.id.asc())
    )
    return list(result.scalars().all())


async def update_applicant_status(
    db: AsyncSession,
    job_id: int,
    applicant_user_id: int,
    user: User,
    status: str,
) -> Optional[Application]:
    """
    Set an applicant's status on one of the caller's jobs.

    Moving an applicant into "accepted" increments the job's fill counter.
    Accepting someone who is already accepted does not count twice. There is
    no hard cap against the vacancy count; overshooting is logged.

    Returns the updated application, or None when the user never applied
    (nothing is written in that case).
    """
    job = await get_owned_job(db, job_id, user)

    application = await find_application(db, job_id, applicant_user_id)
    if application is None:
        logger.warning(
            "application.status_update_skipped",
            extra={"job_id": job_id, "applicant_id": applicant_user_id},
        )
        return None

    previous = application.status
    application.status = status
    if status == ACCEPTED and previous != ACCEPTED:
        job.filled = Job.filled + 1

    await db.commit()
    await db.refresh(application)
    await db.refresh(job)

    logger.info(
        "application.status_updated",
        extra={"application_id": application.id, "job_id": job_id, "applicant_id": applicant_user_id},
    )
    if job.filled > job.vacancies:
        logger.warning(
            f"Job {job.id} has {job.filled} accepted applicants for {job.vacancies} vacancies",
            extra={"job_id": job.id},
        )
    return application
