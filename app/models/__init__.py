# Database models package
from app.models.user import User
from app.models.job import Job
from app.models.application import Application

__all__ = [
    "User",
    "Job",
    "Application",
]
