"""Core application components package."""

from .config import settings
from .database import get_db
from .deps import (
    AnalyticsDays,
    CurrentUser,
    DbSession,
    Fallback,
    OfficerUser,
    OptionalWardId,
    PredictionDays,
    RequiredWardId,
    WardIdPath,
    get_current_user,
    require_officer,
)
from .security import create_access_token, decode_access_token, hash_password, verify_password
from .version import get_version

__all__ = [
    "settings",
    "get_db",
    "AnalyticsDays",
    "CurrentUser",
    "DbSession",
    "Fallback",
    "OfficerUser",
    "OptionalWardId",
    "PredictionDays",
    "RequiredWardId",
    "WardIdPath",
    "get_current_user",
    "require_officer",
    "create_access_token",
    "decode_access_token",
    "hash_password",
    "verify_password",
    "get_version",
]
