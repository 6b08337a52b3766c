"""
Pydantic schemas for job listings and applications

JobUpdate is an allow-list: only the fields declared here can change on an
existing job. Anything else in the request body (employerId, filled,
applicants, createdAt, ...) is dropped during parsing.
"""
from typing import List, Literal, Optional
from datetime import datetime
from pydantic import Field

from app.models.application import APPLICATION_STATUSES
from app.models.job import JOB_TYPES, JOB_CATEGORIES
from app.schemas.accounts import CamelModel

JobType = Literal[JOB_TYPES]
JobCategory = Literal[JOB_CATEGORIES]
ApplicationStatus = Literal[APPLICATION_STATUSES]


# ========== Job Schemas ==========
class JobCreate(CamelModel):
    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    location: str = Field(..., min_length=1)
    vacancies: int = Field(..., ge=1)

    # Fall back to the employer's own profile when omitted
    company: Optional[str] = None
    contact_phone: Optional[str] = None
    contact_email: Optional[str] = None

    salary: Optional[str] = None
    requirements: List[str] = Field(default_factory=list)
    benefits: List[str] = Field(default_factory=list)
    type: JobType = "Full-Time"
    category: JobCategory = "Other"
    expires_at: Optional[datetime] = None


class JobUpdate(CamelModel):
    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = Field(None, min_length=1)
    company: Optional[str] = Field(None, min_length=1)
    location: Optional[str] = Field(None, min_length=1)
    salary: Optional[str] = None
    vacancies: Optional[int] = Field(None, ge=1)
    requirements: Optional[List[str]] = None
    benefits: Optional[List[str]] = None
    type: Optional[JobType] = None
    category: Optional[JobCategory] = None
    contact_phone: Optional[str] = Field(None, min_length=1)
    contact_email: Optional[str] = Field(None, min_length=1)
    expires_at: Optional[datetime] = None
    is_active: Optional[bool] = None

    def changes(self) -> dict:
        """Fields the client actually sent, keyed by model attribute name"""
        return self.model_dump(exclude_unset=True, exclude_none=True)


# ========== Application Schemas ==========
class ApplyRequest(CamelModel):
    message: Optional[str] = ""


class ApplicantStatusUpdate(CamelModel):
    status: ApplicationStatus
