"""Weather endpoints."""

import logging

from fastapi import APIRouter, HTTPException, Response, status
from sqlalchemy.exc import SQLAlchemyError

from ward_aqi.core.config import settings
from ward_aqi.core.deps import DbSession, Fallback, OfficerUser, OptionalWardId
from ward_aqi.core.errors import is_database_unavailable
from ward_aqi.schemas.ward import MessageResponse
from ward_aqi.schemas.weather import WeatherCreateRequest, WeatherResponse
from ward_aqi.services import wards as wards_service
from ward_aqi.services import weather as weather_service
from ward_aqi.services.fallback import DATA_SOURCE_HEADER

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/weather", tags=["weather"])


@router.get("", response_model=WeatherResponse)
async def get_weather(
    db: DbSession,
    fallback: Fallback,
    response: Response,
    ward_id: OptionalWardId,
) -> WeatherResponse:
    """Get current weather for a ward, or the city average over the last hour.

    Missing values are filled from the defaults.
    """
    defaults = fallback.weather_response()
    try:
        if ward_id is not None:
            reading = await weather_service.get_latest_ward_weather(db, ward_id)
            if reading is None:
                return defaults
            values = (reading.wind_speed, reading.temperature, reading.humidity)
        else:
            values = await weather_service.get_city_weather(db)
    except SQLAlchemyError as e:
        if not settings.fallback_enabled or not is_database_unavailable(e):
            raise
        logger.warning(f"Database unavailable, serving default weather: {type(e).__name__}")
        await db.rollback()
        response.headers[DATA_SOURCE_HEADER] = "fallback"
        return defaults

    return weather_service.merge_with_defaults(defaults, *values)


@router.post("", response_model=MessageResponse)
async def record_weather(
    request: WeatherCreateRequest,
    officer: OfficerUser,
    db: DbSession,
) -> MessageResponse:
    """Record a weather observation for a ward (officer only)."""
    ward = await wards_service.get_ward_by_id(db, request.ward_id)
    if ward is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Ward not found",
        )

    await weather_service.create_weather(db, request)
    await db.commit()

    logger.info(f"Officer {officer.email} recorded weather for ward {request.ward_id}")
    return MessageResponse(message="Weather data updated successfully")
