"""Authentication service for officer login and token issuing."""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ward_aqi.core.security import create_access_token, hash_password, verify_password
from ward_aqi.models.user import User, UserRole
from ward_aqi.schemas.auth import TokenResponse

logger = logging.getLogger(__name__)


async def get_user_by_id(db: AsyncSession, user_id: int) -> User | None:
    """Get a user by their ID."""
    result = await db.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


async def get_user_by_email(db: AsyncSession, email: str) -> User | None:
    """Get a user by their email."""
    result = await db.execute(select(User).where(User.email == email))
    return result.scalar_one_or_none()


async def authenticate_user(db: AsyncSession, email: str, password: str) -> User | None:
    """Return the user if the password matches, otherwise None."""
    user = await get_user_by_email(db, email)
    if user is None or not verify_password(password, user.password_hash):
        return None
    return user


def create_user_token(user: User) -> TokenResponse:
    """Issue a bearer token carrying the user's ID and role."""
    access_token = create_access_token(
        data={
            "sub": str(user.id),
            "email": user.email,
            "role": user.role.value,
        }
    )
    return TokenResponse(access_token=access_token)


async def create_user(
    db: AsyncSession, email: str, password: str, role: UserRole = UserRole.CITIZEN
) -> User:
    """Create a dashboard account."""
    user = User(email=email, password_hash=hash_password(password), role=role)
    db.add(user)
    await db.flush()
    await db.refresh(user)
    return user


async def create_officer_user(db: AsyncSession, email: str, password: str) -> User:
    """Create an officer account."""
    user = await create_user(db, email, password, role=UserRole.OFFICER)
    logger.info(f"Created officer account {email}")
    return user
