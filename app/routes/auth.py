"""Registration, login and public profile routes"""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.middleware.auth import RecordId
from app.middleware.rate_limit import limiter, REGISTER_LIMIT, LOGIN_LIMIT
from app.schemas.accounts import RegisterRequest, LoginRequest
from app.services import user_service

router = APIRouter()


@router.post("/register", status_code=201)
@limiter.limit(REGISTER_LIMIT)
async def register_user(
    request: Request,
    user_data: RegisterRequest,
    db: AsyncSession = Depends(get_db)
):
    """
    Create a job seeker or employer account.

    Rate limited per IP to slow down account creation spam. The password is
    stored as a bcrypt hash and never returned.
    """
    user = await user_service.register(
        db,
        email=user_data.email,
        password=user_data.password,
        name=user_data.name,
        phone=user_data.phone,
        is_employer=user_data.is_employer,
        company=user_data.company,
    )
    return {
        "success": True,
        "message": "Account created successfully",
        "user": user.to_dict(),
    }


@router.post("/login")
@limiter.limit(LOGIN_LIMIT)
async def login_user(
    request: Request,
    credentials: LoginRequest,
    db: AsyncSession = Depends(get_db)
):
    """Check email and password and return the account (no token is issued)"""
    user = await user_service.login(db, credentials.email, credentials.password)
    return {
        "success": True,
        "message": "Login successful",
        "user": user.to_dict(),
    }


@router.get("/user/{user_id}")
async def get_user_profile(user_id: RecordId, db: AsyncSession = Depends(get_db)):
    user = await user_service.get_user(db, user_id)
    return user.to_dict()
