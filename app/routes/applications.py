"""Seeker-side application routes"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.middleware.auth import get_current_user
from app.models.user import User
from app.services import application_service

router = APIRouter()


@router.get("/applications/my")
async def my_applications(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    applications = await application_service.my_applications(db, current_user)
    return [a.to_dict(job=a.job, include_job=True) for a in applications]
