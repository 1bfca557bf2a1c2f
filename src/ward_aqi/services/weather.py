"""Weather retrieval and recording service."""

from datetime import datetime, timedelta, timezone

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ward_aqi.models.measurement import WeatherReading
from ward_aqi.schemas.weather import WeatherCreateRequest, WeatherResponse

CITY_WEATHER_WINDOW = timedelta(hours=1)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


async def get_latest_ward_weather(db: AsyncSession, ward_id: str) -> WeatherReading | None:
    """Get the most recent weather observation for a ward."""
    result = await db.execute(
        select(WeatherReading)
        .where(WeatherReading.ward_id == ward_id)
        .order_by(WeatherReading.recorded_at.desc(), WeatherReading.id.desc())
        .limit(1)
    )
    return result.scalar_one_or_none()


async def get_city_weather(
    db: AsyncSession, now: datetime | None = None
) -> tuple[float | None, float | None, float | None]:
    """Average wind speed, temperature and humidity over the last hour.

    Each value is None when nothing was recorded in the window.
    """
    since = (now or _utcnow()) - CITY_WEATHER_WINDOW
    result = await db.execute(
        select(
            func.avg(WeatherReading.wind_speed),
            func.avg(WeatherReading.temperature),
            func.avg(WeatherReading.humidity),
        ).where(WeatherReading.recorded_at >= since)
    )
    wind_speed, temperature, humidity = result.one()
    return (
        float(wind_speed) if wind_speed is not None else None,
        float(temperature) if temperature is not None else None,
        float(humidity) if humidity is not None else None,
    )


def merge_with_defaults(
    defaults: WeatherResponse,
    wind_speed: float | None,
    temperature: float | None,
    humidity: float | None,
) -> WeatherResponse:
    """Fill missing weather values from the defaults."""
    return WeatherResponse(
        wind_speed=wind_speed if wind_speed is not None else defaults.wind_speed,
        temperature=temperature if temperature is not None else defaults.temperature,
        humidity=humidity if humidity is not None else defaults.humidity,
    )


async def create_weather(db: AsyncSession, request: WeatherCreateRequest) -> WeatherReading:
    """Record a weather observation."""
    reading = WeatherReading(
        ward_id=request.ward_id,
        wind_speed=request.wind_speed,
        temperature=request.temperature,
        humidity=request.humidity,
    )
    db.add(reading)
    await db.flush()
    await db.refresh(reading)
    return reading
