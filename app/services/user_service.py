"""
Account registration, login and profile lookup.

Usage:
    user = await user_service.register(db, email=..., password=..., name=...)
    user = await user_service.login(db, email, password)
"""
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import get_settings
from app.errors import DuplicateEmail, InvalidCredentials, NotFound, ValidationError
from app.models.user import User
from app.utils.logger import logger


async def get_user_by_email(db: AsyncSession, email: str) -> Optional[User]:
    result = await db.execute(select(User).where(User.email == email))
    return result.scalar_one_or_none()


async def register(
    db: AsyncSession,
    email: Optional[str],
    password: Optional[str],
    name: Optional[str],
    phone: Optional[str] = None,
    is_employer: Optional[bool] = False,
    company: Optional[str] = None,
) -> User:
    """Create a user with a bcrypt-hashed password"""
    if not email or not password or not name:
        raise ValidationError("Email, password and name are required")

    if await get_user_by_email(db, email):
        raise DuplicateEmail()

    user = User(
        email=email,
        password=User.hash_password(password, rounds=get_settings().bcrypt_rounds),
        name=name,
        phone=phone or "",
        is_employer=bool(is_employer),
        company=company or "",
    )
    db.add(user)
    try:
        await db.commit()
    except IntegrityError as e:
        # Lost a race with a concurrent registration for the same email
        await db.rollback()
        raise DuplicateEmail() from e
    await db.refresh(user)

    logger.info("user.registered", extra={"user_id": user.id, "email": user.email})
    return user


async def login(db: AsyncSession, email: Optional[str], password: Optional[str]) -> User:
    """Check credentials; unknown email and wrong password fail the same way"""
    if not email or not password:
        raise ValidationError("Email and password are required")

    user = await get_user_by_email(db, email)
    if not user or not user.verify_password(password):
        logger.info("user.login_failed", extra={"email": email})
        raise InvalidCredentials()

    logger.info("user.logged_in", extra={"user_id": user.id})
    return user


async def get_user(db: AsyncSession, user_id: int) -> User:
    user = await db.get(User, user_id)
    if not user:
        raise NotFound("User not found")
    return user
