"""Alert schemas for list, create and derived-warning endpoints."""

from datetime import datetime
from enum import Enum

from pydantic import Field, field_validator

from ward_aqi.schemas.base import CamelModel
from ward_aqi.services.aqi import is_valid_ward_id


class AlertResponse(CamelModel):
    """Stored alert with its ward context."""

    id: int
    ward_id: str
    ward_name: str | None = None
    message: str
    priority: int
    type: str | None = None
    is_active: bool
    created_at: datetime
    resolved_at: datetime | None = None
    current_aqi: int | None = None


class AlertCreateRequest(CamelModel):
    """Request schema for issuing an alert."""

    ward_id: str
    message: str = Field(..., min_length=1)
    priority: int = Field(5, ge=1)
    type: str | None = Field(None, max_length=50)

    @field_validator("ward_id")
    @classmethod
    def validate_ward_id(cls, v: str) -> str:
        if not is_valid_ward_id(v):
            raise ValueError("Invalid wardId format")
        return v.strip()


class DerivedAlertType(str, Enum):
    """Kinds of computed warnings."""

    HIGH_RISK = "high-risk"
    PREDICTIVE = "predictive"
    SPIKE = "spike"


class DerivedAlertSeverity(str, Enum):
    """Severity of a computed warning, worst first."""

    SEVERE = "severe"
    VERY_POOR = "very-poor"
    POOR = "poor"


class DerivedAlert(CamelModel):
    """Warning computed from a ward's current AQI and forecast."""

    id: str
    ward_id: str
    ward_name: str
    type: DerivedAlertType
    message: str
    severity: DerivedAlertSeverity
    aqi: int
