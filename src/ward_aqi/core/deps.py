"""FastAPI dependencies for authentication, database access and query parsing."""

from typing import Annotated

from fastapi import Depends, HTTPException, Path, Query, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from ward_aqi.core.config import settings
from ward_aqi.core.database import get_db
from ward_aqi.core.security import decode_access_token
from ward_aqi.models.user import User, UserRole
from ward_aqi.services.aqi import is_valid_ward_id
from ward_aqi.services.auth import get_user_by_id
from ward_aqi.services.fallback import FallbackDataProvider, get_fallback_provider

# HTTP Bearer token security scheme
security = HTTPBearer()

INVALID_WARD_ID = "Invalid ward ID format"

ANALYTICS_DAYS_DEFAULT = 7
ANALYTICS_DAYS_RANGE = (1, 365)
PREDICTION_DAYS_RANGE = (7, 30)


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(security)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User:
    """Dependency to get the current authenticated user from JWT token."""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    payload = decode_access_token(credentials.credentials)
    if payload is None:
        raise credentials_exception

    user_id_str = payload.get("sub")
    if user_id_str is None:
        raise credentials_exception

    try:
        user_id = int(user_id_str)
    except ValueError:
        raise credentials_exception

    user = await get_user_by_id(db, user_id)
    if user is None:
        raise credentials_exception

    return user


# Type aliases for dependency injection
CurrentUser = Annotated[User, Depends(get_current_user)]
DbSession = Annotated[AsyncSession, Depends(get_db)]
Fallback = Annotated[FallbackDataProvider, Depends(get_fallback_provider)]


async def require_officer(current_user: CurrentUser) -> User:
    """Dependency to require the officer role for write access."""
    if current_user.role != UserRole.OFFICER:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Officer access required",
        )
    return current_user


OfficerUser = Annotated[User, Depends(require_officer)]


def _checked_ward_id(value: str) -> str:
    if not is_valid_ward_id(value):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=INVALID_WARD_ID)
    return value.strip()


def valid_ward_id(ward_id: Annotated[str, Path()]) -> str:
    """Path ward ID, trimmed; 400 if malformed."""
    return _checked_ward_id(ward_id)


def optional_ward_id(
    ward_id: Annotated[str | None, Query(alias="wardId")] = None,
) -> str | None:
    """Optional ``wardId`` filter; 400 if given but malformed."""
    if ward_id is None:
        return None
    return _checked_ward_id(ward_id)


def required_ward_id(
    ward_id: Annotated[str | None, Query(alias="wardId")] = None,
) -> str:
    """Mandatory ``wardId`` query parameter; 400 if missing or malformed."""
    if ward_id is None or not ward_id.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="wardId query parameter is required",
        )
    return _checked_ward_id(ward_id)


WardIdPath = Annotated[str, Depends(valid_ward_id)]
OptionalWardId = Annotated[str | None, Depends(optional_ward_id)]
RequiredWardId = Annotated[str, Depends(required_ward_id)]


def parse_days(value: str | None, default: int, minimum: int, maximum: int) -> int:
    """Parse a lenient day count; anything unusable becomes the default."""
    if value is None:
        return default
    try:
        days = int(value.strip())
    except ValueError:
        return default
    if days < minimum or days > maximum:
        return default
    return days


def analytics_days(days: Annotated[str | None, Query()] = None) -> int:
    return parse_days(days, ANALYTICS_DAYS_DEFAULT, *ANALYTICS_DAYS_RANGE)


def prediction_days(days: Annotated[str | None, Query()] = None) -> int:
    return parse_days(days, settings.prediction_default_days, *PREDICTION_DAYS_RANGE)


AnalyticsDays = Annotated[int, Depends(analytics_days)]
PredictionDays = Annotated[int, Depends(prediction_days)]
