"""Read-only marketplace counters"""
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.application import Application
from app.models.job import Job
from app.models.user import User


async def get_stats(db: AsyncSession) -> dict:
    total_jobs = await db.scalar(
        select(func.count(Job.id)).where(Job.is_active == True)  # noqa: E712
    )
    total_users = await db.scalar(select(func.count(User.id)))
    total_applications = await db.scalar(select(func.count(Application.id)))

    result = await db.execute(
        select(Job.category, func.count(Job.id))
        .where(Job.is_active == True)  # noqa: E712
        .group_by(Job.category)
        .order_by(func.count(Job.id).desc(), Job.category)
    )
    jobs_by_category = [{"category": row[0], "count": row[1]} for row in result.all()]

    return {
        "totalJobs": total_jobs or 0,
        "totalUsers": total_users or 0,
        "totalApplications": total_applications or 0,
        "jobsByCategory": jobs_by_category,
    }
