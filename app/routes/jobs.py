"""
Job Listing API Routes

Public search and detail endpoints, plus employer-only management of jobs
and their applicants.
"""

from fastapi import APIRouter, Depends
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.middleware.auth import get_current_user, RecordId
from app.models.user import User
from app.schemas.jobs import JobCreate, JobUpdate, ApplyRequest, ApplicantStatusUpdate
from app.services import job_service, application_service

router = APIRouter()


@router.post("/jobs", status_code=201)
async def create_job(
    data: JobCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Publish a job (employers only)"""
    job = await job_service.create_job(db, current_user, data)
    return {"success": True, "message": "Job posted successfully", "job": job.to_dict()}


@router.get("/jobs")
async def list_jobs(
    category: Optional[str] = None,
    type: Optional[str] = None,
    search: Optional[str] = None,
    db: AsyncSession = Depends(get_db),
):
    """
    Search active jobs, newest first

    - category / type: exact match
    - search: case-insensitive substring of title, description, company or location
    """
    jobs = await job_service.list_jobs(db, category=category, job_type=type, search=search)
    return [job.to_dict() for job in jobs]


@router.get("/jobs/employer/{employer_id}")
async def list_employer_jobs(
    employer_id: RecordId,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """An employer's own jobs, including closed ones, with applicant counts"""
    jobs = await job_service.list_jobs_by_employer(db, employer_id, current_user)
    counts = await job_service.count_applicants(db, [job.id for job in jobs])
    return [job.to_dict(applicant_count=counts.get(job.id, 0)) for job in jobs]


@router.get("/jobs/location/{district}")
async def list_jobs_by_location(district: str, db: AsyncSession = Depends(get_db)):
    jobs = await job_service.list_jobs_by_location(db, district)
    return [job.to_dict() for job in jobs]


@router.get("/jobs/{job_id}")
async def get_job(job_id: RecordId, db: AsyncSession = Depends(get_db)):
    job = await job_service.get_job(db, job_id)
    return job.to_dict(employer=job.employer)


@router.put("/jobs/{job_id}")
async def update_job(
    job_id: RecordId,
    data: JobUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    job = await job_service.update_job(db, job_id, current_user, data)
    return {"success": True, "message": "Job updated", "job": job.to_dict()}


@router.put("/jobs/{job_id}/toggle")
async def toggle_job(
    job_id: RecordId,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Close an open job or reopen a closed one"""
    job = await job_service.toggle_job(db, job_id, current_user)
    return {
        "success": True,
        "message": "Job reopened" if job.is_active else "Job closed",
        "job": job.to_dict(),
    }


@router.post("/jobs/{job_id}/apply", status_code=201)
async def apply_to_job(
    job_id: RecordId,
    data: Optional[ApplyRequest] = None,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    message = data.message if data else ""
    application = await application_service.apply(db, job_id, current_user, message)
    return {
        "success": True,
        "message": "Application submitted successfully",
        "application": application.to_dict(),
    }


@router.get("/jobs/{job_id}/applicants")
async def list_applicants(
    job_id: RecordId,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Applicants for one of the caller's jobs, oldest first"""
    applications = await application_service.list_applicants(db, job_id, current_user)
    return [a.to_applicant_dict() for a in applications]


@router.put("/jobs/{job_id}/applicants/{applicant_id}")
async def update_applicant_status(
    job_id: RecordId,
    applicant_id: RecordId,
    data: ApplicantStatusUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await application_service.update_applicant_status(
        db, job_id, applicant_id, current_user, data.status
    )
    return {"success": True, "message": "Status updated"}
