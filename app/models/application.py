from sqlalchemy import Column, Integer, String, DateTime, Text, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from datetime import datetime
from app.database import Base

APPLICATION_STATUSES = ("pending", "reviewed", "accepted", "rejected")


class Application(Base):
    """
    A seeker's application to a job.

    This row is the only record of the application. The applicant list an
    employer sees on a job is read from these rows.
    """
    __tablename__ = "applications"
    __table_args__ = (
        UniqueConstraint("job_id", "user_id", name="uq_applications_job_user"),
    )

    id = Column(Integer, primary_key=True, index=True)
    job_id = Column(Integer, ForeignKey("jobs.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    # Applicant contact details, copied at apply time
    user_name = Column(String(255), nullable=False)
    user_email = Column(String(255), nullable=False)
    user_phone = Column(String(50), nullable=False, default="")

    message = Column(Text, nullable=False, default="")

    # Statuses: 'pending', 'reviewed', 'accepted', 'rejected'
    status = Column(String(20), nullable=False, default="pending", index=True)
    applied_at = Column(DateTime, default=datetime.utcnow, index=True)

    # Relationships
    job = relationship("Job", back_populates="applications", lazy="raise")

    def to_dict(self, job=None, include_job=False):
        data = {
            "id": self.id,
            "jobId": self.job_id,
            "userId": self.user_id,
            "userName": self.user_name,
            "userEmail": self.user_email,
            "userPhone": self.user_phone,
            "message": self.message,
            "status": self.status,
            "appliedAt": self.applied_at.isoformat() if self.applied_at else None,
        }
        if include_job:
            data["job"] = {
                "id": job.id,
                "title": job.title,
                "company": job.company,
                "location": job.location,
            } if job is not None else None
        return data

    def to_applicant_dict(self):
        """Applicant entry as shown to the job's employer"""
        return {
            "userId": self.user_id,
            "userName": self.user_name,
            "userEmail": self.user_email,
            "userPhone": self.user_phone,
            "message": self.message,
            "appliedAt": self.applied_at.isoformat() if self.applied_at else None,
            "status": self.status,
        }
