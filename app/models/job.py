from sqlalchemy import Column, Integer, String, DateTime, Boolean, Text, JSON, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime, timedelta
from app.database import Base

JOB_TYPES = ("Full-Time", "Part-Time", "Temporary", "Freelance", "Internship")
JOB_CATEGORIES = (
    "Administrative",
    "Sales",
    "Construction",
    "Education",
    "Health",
    "Transport",
    "Technology",
    "Agriculture",
    "Other",
)

DEFAULT_JOB_TYPE = "Full-Time"
DEFAULT_CATEGORY = "Other"
DEFAULT_SALARY = "Negotiable"
DEFAULT_EXPIRY_DAYS = 30


def default_expiry(days: int = DEFAULT_EXPIRY_DAYS) -> datetime:
    return datetime.utcnow() + timedelta(days=days)


class Job(Base):
    __tablename__ = "jobs"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False, index=True)
    description = Column(Text, nullable=False)
    company = Column(String(255), nullable=False, index=True)

    # Owning employer, name denormalized at creation
    employer_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    employer_name = Column(String(255), nullable=False)

    location = Column(String(255), nullable=False, index=True)
    salary = Column(String(255), nullable=False, default=DEFAULT_SALARY)  # Free text
    vacancies = Column(Integer, nullable=False)
    filled = Column(Integer, nullable=False, default=0)
    requirements = Column(JSON, nullable=False, default=list)
    benefits = Column(JSON, nullable=False, default=list)
    type = Column(String(50), nullable=False, default=DEFAULT_JOB_TYPE)
    category = Column(String(50), nullable=False, default=DEFAULT_CATEGORY, index=True)
    contact_phone = Column(String(50), nullable=False)
    contact_email = Column(String(255), nullable=False)
    expires_at = Column(DateTime, default=default_expiry)
    is_active = Column(Boolean, nullable=False, default=True, index=True)  # Index for filtering active jobs

    created_at = Column(DateTime, default=datetime.utcnow, index=True)

    # Relationships
    employer = relationship("User", lazy="raise")
    applications = relationship(
        "Application",
        back_populates="job",
        order_by="Application.applied_at",
        lazy="raise",
    )

    def to_dict(self, employer=None, applicant_count=None):
        data = {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "company": self.company,
            "employerId": self.employer_id,
            "employerName": self.employer_name,
            "location": self.location,
            "salary": self.salary,
            "vacancies": self.vacancies,
            "filled": self.filled,
            "requirements": list(self.requirements or []),
            "benefits": list(self.benefits or []),
            "type": self.type,
            "category": self.category,
            "contactPhone": self.contact_phone,
            "contactEmail": self.contact_email,
            "expiresAt": self.expires_at.isoformat() if self.expires_at else None,
            "isActive": self.is_active,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
        if employer is not None:
            data["employer"] = employer.to_contact_dict()
        if applicant_count is not None:
            data["applicantCount"] = applicant_count
        return data
