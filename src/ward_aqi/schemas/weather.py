"""Weather schemas."""

from pydantic import Field, field_validator

from ward_aqi.schemas.base import CamelModel
from ward_aqi.services.aqi import is_valid_ward_id


class WeatherResponse(CamelModel):
    """Current weather conditions."""

    wind_speed: float
    temperature: float
    humidity: float


class WeatherCreateRequest(CamelModel):
    """Weather observation submitted for a ward."""

    ward_id: str
    wind_speed: float = Field(..., ge=0)
    temperature: float
    humidity: float = Field(..., ge=0, le=100)

    @field_validator("ward_id")
    @classmethod
    def validate_ward_id(cls, v: str) -> str:
        if not is_valid_ward_id(v):
            raise ValueError("Invalid wardId format")
        return v.strip()
