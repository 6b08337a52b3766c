from fastapi import Header, Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
from typing import Annotated, Optional
from app.database import get_db, MAX_ID
from app.errors import Unauthenticated, UserNotFound, AuthInfrastructureError
from app.models.user import User
from app.utils.logger import logger

# Path ids outside the key range fail validation (400) instead of reaching the database
RecordId = Annotated[int, Path(le=MAX_ID)]


def parse_user_id(raw: str) -> Optional[int]:
    """Return the integer id carried by a header value, or None if it isn't one"""
    try:
        user_id = int(raw.strip())
    except (TypeError, ValueError):
        return None
    return user_id if 0 < user_id <= MAX_ID else None


async def get_current_user(
    user_id_header: Optional[str] = Header(None, alias="user-id"),
    db: AsyncSession = Depends(get_db)
) -> User:
    """
    Dependency to resolve the calling user from the user-id header.

    The header carries the caller's raw user id. Ids are not secrets, so this
    only identifies the caller; it does not prove anything about them.

    Usage:
        @router.get("/endpoint")
        async def protected_endpoint(current_user: User = Depends(get_current_user)):
            # Pass current_user on to the service call
    """
    if not user_id_header:
        raise Unauthenticated()

    parsed_id = parse_user_id(user_id_header)
    if parsed_id is None:
        raise UserNotFound()

    try:
        user = await db.get(User, parsed_id)
    except SQLAlchemyError as e:
        logger.error(f"[Auth] User lookup failed: {type(e).__name__}: {e}", exc_info=True)
        raise AuthInfrastructureError() from e

    if not user:
        raise UserNotFound()

    return user
